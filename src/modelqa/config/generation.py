"""
Generation Configuration

Configuration classes for the coverage strategies and output of test
generation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CoverageStrategy(Enum):
    """Available path generation strategies."""
    TRANSITION = "transition"
    STATE = "state"
    N_SWITCH = "n-switch"
    RANDOM = "random"


class CustomInvariantPolicy(Enum):
    """What to do with invariants of type ``custom``, which have no step form."""
    SKIP = "skip"    # emit nothing, log a warning
    MARK = "mark"    # emit a clearly marked no-op step
    FAIL = "fail"    # raise UnsupportedInvariantError


class DiagramFormat(Enum):
    """Supported structural diagram formats."""
    MERMAID = "mermaid"
    XML = "xml"


@dataclass
class GenerationConfig:
    """Main test generation configuration."""
    strategy: CoverageStrategy = CoverageStrategy.TRANSITION

    # N-switch coverage
    n_switch: int = 1
    max_sequences: int = 10000

    # Random walks
    random_count: int = 10
    max_length: int = 10
    seed: Optional[int] = None

    # Model handling
    strict: bool = True
    custom_invariants: CustomInvariantPolicy = CustomInvariantPolicy.SKIP

    # Output
    output_dir: str = "./generated"
    report_path: Optional[str] = None
    diagram_path: Optional[str] = None
    diagram_format: DiagramFormat = DiagramFormat.MERMAID

    def __post_init__(self):
        if isinstance(self.strategy, str):
            self.strategy = CoverageStrategy(self.strategy)
        if isinstance(self.custom_invariants, str):
            self.custom_invariants = CustomInvariantPolicy(self.custom_invariants)
        if isinstance(self.diagram_format, str):
            self.diagram_format = DiagramFormat(self.diagram_format)

        if self.n_switch < 1:
            raise ValueError(f"n_switch must be at least 1, got {self.n_switch}")
        if self.max_length < 0:
            raise ValueError(f"max_length must not be negative, got {self.max_length}")
        if self.random_count < 0:
            raise ValueError(f"random_count must not be negative, got {self.random_count}")
        if self.max_sequences < 1:
            raise ValueError(f"max_sequences must be at least 1, got {self.max_sequences}")

    @classmethod
    def for_transition_coverage(cls) -> 'GenerationConfig':
        """Create config that exercises every transition at least once."""
        return cls(strategy=CoverageStrategy.TRANSITION)

    @classmethod
    def for_state_coverage(cls) -> 'GenerationConfig':
        """Create config that visits every state at least once."""
        return cls(strategy=CoverageStrategy.STATE)

    @classmethod
    def for_random_walks(cls, count: int = 10, max_length: int = 10,
                         seed: Optional[int] = None) -> 'GenerationConfig':
        """Create config for priority-weighted random exploration."""
        return cls(
            strategy=CoverageStrategy.RANDOM,
            random_count=count,
            max_length=max_length,
            seed=seed
        )
