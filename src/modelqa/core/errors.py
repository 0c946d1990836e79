"""
Model Errors

Exceptions raised while loading and validating state machine models.
Generation itself never raises for a validated model; these errors only
surface at load and construction time.
"""

from typing import List


class ModelError(Exception):
    """Base class for all state machine model errors."""


class ModelLoadError(ModelError):
    """The state machine document does not have the expected shape."""


class ModelValidationError(ModelError):
    """The state machine is structurally invalid and cannot be modelled."""


class MissingInitialStateError(ModelValidationError):
    """No state is flagged as initial."""

    def __init__(self, machine_name: str = ""):
        self.machine_name = machine_name
        super().__init__("State machine must have an initial state"
                         + (f" ({machine_name})" if machine_name else ""))


class AmbiguousInitialStateError(ModelValidationError):
    """More than one state is flagged as initial."""

    def __init__(self, state_ids: List[str]):
        self.state_ids = list(state_ids)
        super().__init__(
            f"State machine must have exactly one initial state, found {len(state_ids)}: "
            f"{', '.join(state_ids)}"
        )


class DanglingTransitionError(ModelValidationError):
    """A transition references a state that is not declared."""

    def __init__(self, transition_id: str, state_id: str, endpoint: str):
        self.transition_id = transition_id
        self.state_id = state_id
        self.endpoint = endpoint  # "from" or "to"
        super().__init__(
            f'Transition "{transition_id}" references unknown state: {state_id} ({endpoint})'
        )


class DuplicateIdError(ModelValidationError):
    """A state or transition id is declared more than once."""

    def __init__(self, kind: str, item_id: str):
        self.kind = kind  # "state" or "transition"
        self.item_id = item_id
        super().__init__(f'Duplicate {kind} id: "{item_id}"')


class UnsupportedInvariantError(ModelError):
    """An invariant kind cannot be expanded into executable steps."""

    def __init__(self, state_id: str, invariant_type: str, condition: str = ""):
        self.state_id = state_id
        self.invariant_type = invariant_type
        self.condition = condition
        super().__init__(
            f'Invariant type "{invariant_type}" on state "{state_id}" is not supported'
            + (f": {condition}" if condition else "")
        )
