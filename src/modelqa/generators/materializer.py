"""
Path Materializer

Expands a bare sequence of state and transition ids into a TestPath whose
steps can be handed to the flow runner: entry and exit actions, transition
actions and the checks derived from state invariants.
"""

import copy
import logging
from typing import List, Sequence

from ..config.generation import CustomInvariantPolicy
from ..core.errors import UnsupportedInvariantError
from ..core.machine import Invariant, InvariantType, State, Step
from ..core.model import StateMachineModel
from ..core.results import PathCoverage, TestPath

logger = logging.getLogger(__name__)


class PathMaterializer:
    """Builds TestPath values from id sequences over a model."""

    def __init__(self, model: StateMachineModel,
                 custom_invariants: CustomInvariantPolicy = CustomInvariantPolicy.SKIP):
        self.model = model
        self.custom_invariants = custom_invariants

    def materialize(self, state_ids: Sequence[str], transition_ids: Sequence[str]) -> TestPath:
        """
        Build a TestPath from visited states and traversed transitions.

        Steps are emitted as: entry actions and invariant checks of the first
        state, then for every transition the source's exit actions, the
        transition's actions, the destination's entry actions and the
        destination's invariant checks.

        Args:
            state_ids: Visited states, one more than transitions
            transition_ids: Traversed transitions in order

        Returns:
            Materialized test path

        Raises:
            ValueError: Sequences are inconsistent with each other or the model
        """
        if len(state_ids) != len(transition_ids) + 1:
            raise ValueError(
                f"Expected {len(transition_ids) + 1} states for {len(transition_ids)} "
                f"transitions, got {len(state_ids)}"
            )

        first_state = self._require_state(state_ids[0])
        steps: List[Step] = []
        steps.extend(self._copy_steps(first_state.entry_actions))
        steps.extend(self.build_invariant_steps(first_state))

        for i, transition_id in enumerate(transition_ids):
            transition = self.model.get_transition(transition_id)
            if transition is None:
                raise ValueError(f"Unknown transition in path: {transition_id}")
            if transition.from_state != state_ids[i] or transition.to_state != state_ids[i + 1]:
                raise ValueError(
                    f"Transition {transition_id} ({transition.from_state} -> {transition.to_state}) "
                    f"does not connect {state_ids[i]} -> {state_ids[i + 1]}"
                )

            from_state = self._require_state(transition.from_state)
            to_state = self._require_state(transition.to_state)

            steps.extend(self._copy_steps(from_state.exit_actions))
            steps.extend(self._copy_steps(transition.actions))
            steps.extend(self._copy_steps(to_state.entry_actions))
            steps.extend(self.build_invariant_steps(to_state))

        states_covered = len(set(state_ids))
        transitions_covered = len(set(transition_ids))

        return TestPath(
            name=f"Path: {' -> '.join(state_ids)}",
            description=f"Test path covering {states_covered} states and {transitions_covered} transitions",
            states=list(state_ids),
            transitions=list(transition_ids),
            steps=steps,
            coverage=PathCoverage(
                states_covered=states_covered,
                transitions_covered=transitions_covered
            )
        )

    def build_invariant_steps(self, state: State) -> List[Step]:
        """Translate a state's invariants into verification steps."""
        steps = []
        for invariant in state.invariants:
            step = self._invariant_to_step(state, invariant)
            if step is not None:
                steps.append(step)
        return steps

    def _invariant_to_step(self, state: State, invariant: Invariant):
        if invariant.type == InvariantType.VISIBLE:
            return {
                'action': 'expectVisible',
                'selector': invariant.selector,
                'description': f"Verify {invariant.selector} is visible",
            }

        if invariant.type == InvariantType.TEXT:
            return {
                'action': 'expectText',
                'selector': invariant.selector,
                'text': invariant.value,
                'description': f"Verify text: {invariant.value}",
            }

        if invariant.type == InvariantType.URL:
            # No URL assertion step exists; settle navigation instead
            return {
                'action': 'waitForLoadState',
                'state': 'networkidle',
                'description': 'Verify page loaded',
            }

        # InvariantType.CUSTOM
        if self.custom_invariants == CustomInvariantPolicy.FAIL:
            raise UnsupportedInvariantError(state.id, invariant.type.value, invariant.condition or "")
        if self.custom_invariants == CustomInvariantPolicy.MARK:
            return {
                'action': 'noop',
                'unsupported': invariant.type.value,
                'condition': invariant.condition,
                'description': f"Unsupported custom invariant on {state.id}: {invariant.condition}",
            }
        logger.warning(f"⚠️ Custom invariant on state \"{state.id}\" not expanded: {invariant.condition}")
        return None

    def _require_state(self, state_id: str) -> State:
        state = self.model.get_state(state_id)
        if state is None:
            raise ValueError(f"Unknown state in path: {state_id}")
        return state

    @staticmethod
    def _copy_steps(steps: List[Step]) -> List[Step]:
        return copy.deepcopy(steps)
