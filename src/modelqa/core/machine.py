"""
State Machine Definitions

Declarative building blocks of an application model: states, transitions
and the invariants checked while the application sits in a state.

Field names follow the document format (camelCase keys such as
``entryActions``), so the same classes serialize back to the shape they
were loaded from.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from dataclasses_json import LetterCase, config, dataclass_json

# Executable action consumed by the flow runner, e.g.
# {"action": "click", "selector": "#submit"}. Opaque to the generator.
Step = Dict[str, Any]


class InvariantType(Enum):
    """Assertion kinds that can be attached to a state."""
    VISIBLE = "visible"
    TEXT = "text"
    URL = "url"
    CUSTOM = "custom"


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class Invariant:
    """Assertion that must hold while the application is in a state."""
    type: InvariantType
    selector: Optional[str] = None
    value: Optional[str] = None
    condition: Optional[str] = None


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class State:
    """A named node of the application model."""
    id: str
    name: str = ""
    description: Optional[str] = None
    initial: bool = False
    final: bool = False
    entry_actions: List[Step] = field(default_factory=list)
    exit_actions: List[Step] = field(default_factory=list)
    invariants: List[Invariant] = field(default_factory=list)


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class Transition:
    """A directed edge between two states carrying the actions that trigger it."""
    id: str
    from_state: str = field(metadata=config(field_name="from"))
    to_state: str = field(metadata=config(field_name="to"))
    name: str = ""
    actions: List[Step] = field(default_factory=list)
    trigger: Optional[str] = None
    guard: Optional[str] = None
    weight: Optional[float] = None
    priority: Optional[float] = None

    @property
    def selection_weight(self) -> float:
        """Relative probability of picking this transition during a random walk."""
        if self.priority is None or not math.isfinite(self.priority) or self.priority <= 0:
            return 1.0
        return float(self.priority)


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class StateMachine:
    """Complete declarative model of an application."""
    name: str
    states: List[State] = field(default_factory=list)
    transitions: List[Transition] = field(default_factory=list)
    description: Optional[str] = None
    version: Optional[str] = None
    variables: Dict[str, Any] = field(default_factory=dict)
