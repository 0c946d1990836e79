"""
Generation Results

Values produced by the generators and reporters. None of them keeps a
reference to the model they were derived from, so they can be serialized
or discarded freely.
"""

from dataclasses import dataclass, field
from typing import List

from dataclasses_json import LetterCase, dataclass_json

from .machine import Step


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class PathCoverage:
    """Distinct states and transitions touched by a single path."""
    states_covered: int
    transitions_covered: int


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class TestPath:
    """A concrete traversal of the model, materialized into executable steps."""
    name: str
    description: str
    states: List[str]
    transitions: List[str]
    steps: List[Step] = field(default_factory=list)
    coverage: PathCoverage = field(default_factory=lambda: PathCoverage(0, 0))

    @property
    def length(self) -> int:
        """Number of transitions traversed."""
        return len(self.transitions)


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class CoverageReport:
    """Aggregate coverage of a collection of test paths."""
    total_states: int
    covered_states: int
    state_coverage: float
    total_transitions: int
    covered_transitions: int
    transition_coverage: float
    paths: List[TestPath] = field(default_factory=list)
    uncovered_states: List[str] = field(default_factory=list)
    uncovered_transitions: List[str] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return not self.uncovered_states and not self.uncovered_transitions


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class Flow:
    """Runnable flow document handed to the step execution engine."""
    name: str
    description: str
    steps: List[Step]
    runner: str = "web"
