"""
State Machine Model

Validated, read-only view of a state machine with the lookup indices used by
path finding and generation.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .errors import (
    AmbiguousInitialStateError,
    DanglingTransitionError,
    DuplicateIdError,
    MissingInitialStateError,
)
from .machine import State, StateMachine, Transition

logger = logging.getLogger(__name__)


class StateMachineModel:
    """
    Read-only graph of states and transitions.

    Construction validates the machine and builds three indices: states by id,
    transitions by id and outgoing transitions per state (in declaration
    order). All accessors are pure reads, so one model can be shared by any
    number of concurrent generation calls. The machine is deep-copied, so later
    changes to it do not reach the model.
    """

    def __init__(self, machine: StateMachine, strict: bool = True):
        """
        Build and validate the model.

        Args:
            machine: Declarative state machine
            strict: Reject duplicate ids and multiple initial states. When
                False the first declaration wins and a warning is logged.

        Raises:
            MissingInitialStateError: No state is flagged initial
            AmbiguousInitialStateError: Several states are flagged initial (strict)
            DuplicateIdError: A state or transition id repeats (strict)
            DanglingTransitionError: A transition references an undeclared state
        """
        self.name = machine.name
        self.description = machine.description
        self.version = machine.version
        self.variables = dict(machine.variables)
        self.strict = strict

        self._states: List[State] = copy.deepcopy(machine.states)
        self._transitions: List[Transition] = copy.deepcopy(machine.transitions)
        self._state_map: Dict[str, State] = {}
        self._transition_map: Dict[str, Transition] = {}
        self._outgoing: Dict[str, List[Transition]] = {}

        self._build_maps()
        self._initial_state = self._validate()

    @classmethod
    def from_file(cls, file_path: Union[str, Path], strict: bool = True) -> 'StateMachineModel':
        """Load a model from a YAML or JSON document."""
        from .loader import load_state_machine
        return cls(load_state_machine(file_path), strict=strict)

    @classmethod
    def from_dict(cls, document: Dict[str, Any], strict: bool = True) -> 'StateMachineModel':
        """Build a model from an already deserialized document."""
        from .loader import parse_state_machine
        return cls(parse_state_machine(document), strict=strict)

    def _build_maps(self) -> None:
        """Index states and transitions, keeping the first of any duplicate id."""
        for state in self._states:
            if state.id in self._state_map:
                self._report_duplicate("state", state.id)
                continue
            self._state_map[state.id] = state

        for transition in self._transitions:
            if transition.id in self._transition_map:
                self._report_duplicate("transition", transition.id)
                continue
            self._transition_map[transition.id] = transition
            self._outgoing.setdefault(transition.from_state, []).append(transition)

        self._states = list(self._state_map.values())
        self._transitions = list(self._transition_map.values())

    def _report_duplicate(self, kind: str, item_id: str) -> None:
        if self.strict:
            raise DuplicateIdError(kind, item_id)
        logger.warning(f"⚠️ Duplicate {kind} id \"{item_id}\" ignored, first declaration wins")

    def _validate(self) -> State:
        initial_states = [s for s in self._states if s.initial]
        if not initial_states:
            raise MissingInitialStateError(self.name)
        if len(initial_states) > 1:
            if self.strict:
                raise AmbiguousInitialStateError([s.id for s in initial_states])
            logger.warning(
                f"⚠️ {len(initial_states)} initial states declared, using \"{initial_states[0].id}\""
            )

        for transition in self._transitions:
            if transition.from_state not in self._state_map:
                raise DanglingTransitionError(transition.id, transition.from_state, "from")
            if transition.to_state not in self._state_map:
                raise DanglingTransitionError(transition.id, transition.to_state, "to")

        logger.debug(
            f"State machine validated: {len(self._states)} states, "
            f"{len(self._transitions)} transitions"
        )
        return initial_states[0]

    # Getters

    def get_initial_state(self) -> State:
        return self._initial_state

    def get_final_states(self) -> List[State]:
        return [s for s in self._states if s.final]

    def get_state(self, state_id: str) -> Optional[State]:
        return self._state_map.get(state_id)

    def get_transition(self, transition_id: str) -> Optional[Transition]:
        return self._transition_map.get(transition_id)

    def get_transitions_from(self, state_id: str) -> List[Transition]:
        return list(self._outgoing.get(state_id, []))

    def get_all_states(self) -> List[State]:
        return list(self._states)

    def get_all_transitions(self) -> List[Transition]:
        return list(self._transitions)

    def __repr__(self) -> str:
        return (f"StateMachineModel(name={self.name!r}, states={len(self._states)}, "
                f"transitions={len(self._transitions)})")
