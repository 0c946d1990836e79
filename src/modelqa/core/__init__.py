"""
Core Model Components

Building blocks of model-based test generation:
- State machine definitions (states, transitions, invariants)
- Validated, read-only model with lookup indices
- Document loading and model errors
- Result values (test paths, coverage reports, flows)
"""

from .errors import (
    AmbiguousInitialStateError,
    DanglingTransitionError,
    DuplicateIdError,
    MissingInitialStateError,
    ModelError,
    ModelLoadError,
    ModelValidationError,
    UnsupportedInvariantError,
)
from .loader import load_state_machine, parse_state_machine
from .machine import Invariant, InvariantType, State, StateMachine, Step, Transition
from .model import StateMachineModel
from .results import CoverageReport, Flow, PathCoverage, TestPath

__all__ = [
    # Definitions
    'Step', 'InvariantType', 'Invariant', 'State', 'Transition', 'StateMachine',

    # Model
    'StateMachineModel', 'load_state_machine', 'parse_state_machine',

    # Results
    'TestPath', 'PathCoverage', 'CoverageReport', 'Flow',

    # Errors
    'ModelError', 'ModelLoadError', 'ModelValidationError',
    'MissingInitialStateError', 'AmbiguousInitialStateError',
    'DanglingTransitionError', 'DuplicateIdError', 'UnsupportedInvariantError',
]
