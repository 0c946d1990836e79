"""
Coverage Generators

Strategies that assemble sets of test paths satisfying a coverage criterion
over a state machine model:

- Transition coverage: every transition exercised at least once
- State coverage: every state visited at least once
- Random walk: priority-weighted exploration with bounded length
- N-switch coverage: every sequence of n consecutive transitions exercised

Every strategy keeps its bookkeeping (covered ids, skipped ids) local to the
call, so one generator can serve several strategies over the same model.
"""

import logging
import random
from collections import deque
from typing import List, Optional, Set, Tuple

from ..config.generation import CoverageStrategy, GenerationConfig
from ..core.machine import Transition
from ..core.model import StateMachineModel
from ..core.results import TestPath
from .materializer import PathMaterializer
from .path_finder import Route, find_route

logger = logging.getLogger(__name__)

TransitionSequence = Tuple[str, ...]


class CoverageGenerator:
    """
    Generate test paths from a state machine model.

    Path finding is delegated to the BFS path finder and step expansion to
    the PathMaterializer; this class only decides which routes to build.
    """

    def __init__(self, model: StateMachineModel, config: Optional[GenerationConfig] = None,
                 rng: Optional[random.Random] = None):
        """
        Initialize the generator.

        Args:
            model: Validated state machine model
            config: Generation settings (defaults to GenerationConfig())
            rng: Random source for random walks; seeded from config.seed if omitted
        """
        self.model = model
        self.config = config or GenerationConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.materializer = PathMaterializer(model, self.config.custom_invariants)

    def generate(self, strategy: Optional[CoverageStrategy] = None) -> List[TestPath]:
        """Run the requested strategy (the configured one by default)."""
        strategy = CoverageStrategy(strategy) if strategy else self.config.strategy
        logger.info(f"🎯 Generating {strategy.value} coverage paths for \"{self.model.name}\"")

        if strategy == CoverageStrategy.STATE:
            return self.generate_state_coverage()
        if strategy == CoverageStrategy.N_SWITCH:
            return self.generate_n_switch_coverage(self.config.n_switch)
        if strategy == CoverageStrategy.RANDOM:
            return self.generate_random_walks(self.config.random_count, self.config.max_length)
        return self.generate_transition_coverage()

    def generate_transition_coverage(self) -> List[TestPath]:
        """
        Cover each transition at least once.

        For the first uncovered transition (declaration order), route from the
        initial state to its source, traverse it, then continue to the first
        reachable final state. Transitions whose source cannot be reached are
        logged once and skipped.

        Returns:
            Paths whose union covers every reachable transition
        """
        initial = self.model.get_initial_state()
        transitions = self.model.get_all_transitions()
        covered: Set[str] = set()
        unreachable: Set[str] = set()
        paths: List[TestPath] = []

        while True:
            target = next(
                (t for t in transitions if t.id not in covered and t.id not in unreachable),
                None
            )
            if target is None:
                break

            route_to_source = find_route(self.model, initial.id, target.from_state)
            if route_to_source is None:
                logger.warning(f"⚠️ Transition \"{target.id}\" is unreachable from initial state")
                unreachable.add(target.id)
                continue

            route = Route(route_to_source.states + [target.to_state],
                          route_to_source.transitions + [target.id])
            route = self._extend_to_final(route)

            paths.append(self.materializer.materialize(route.states, route.transitions))
            covered.update(route.transitions)

        logger.info(f"✅ Transition coverage: {len(paths)} paths cover "
                    f"{len(covered)}/{len(transitions)} transitions")
        return paths

    def generate_state_coverage(self) -> List[TestPath]:
        """
        Visit each state at least once.

        Paths from the initial state to every final state come first, then a
        shortest path to each state still uncovered. A state that cannot be
        reached logs one warning and is counted as handled so the loop ends.

        Returns:
            Paths whose union visits every reachable state
        """
        initial = self.model.get_initial_state()
        states = self.model.get_all_states()
        covered: Set[str] = set()
        paths: List[TestPath] = []

        for final in self.model.get_final_states():
            route = find_route(self.model, initial.id, final.id)
            if route:
                paths.append(self.materializer.materialize(route.states, route.transitions))
                covered.update(route.states)

        unreachable = 0
        for state in states:
            if state.id in covered:
                continue

            route = find_route(self.model, initial.id, state.id)
            if route:
                paths.append(self.materializer.materialize(route.states, route.transitions))
                covered.update(route.states)
            else:
                logger.warning(f"⚠️ State \"{state.id}\" is unreachable from initial state")
                unreachable += 1
                covered.add(state.id)

        logger.info(f"✅ State coverage: {len(paths)} paths cover "
                    f"{len(states) - unreachable}/{len(states)} states")
        return paths

    def generate_random_walks(self, count: Optional[int] = None,
                              max_length: Optional[int] = None) -> List[TestPath]:
        """
        Generate independent priority-weighted random walks.

        Args:
            count: Number of walks (config.random_count by default)
            max_length: Maximum transitions per walk (config.max_length by default)

        Returns:
            ``count`` paths, each starting at the initial state
        """
        count = self.config.random_count if count is None else count
        max_length = self.config.max_length if max_length is None else max_length
        if count < 0 or max_length < 0:
            raise ValueError(f"count and max_length must not be negative, got {count}, {max_length}")

        paths = [self._random_walk(max_length) for _ in range(count)]
        logger.info(f"🎲 Generated {len(paths)} random walks (max length {max_length})")
        return paths

    def generate_n_switch_coverage(self, n: Optional[int] = None) -> List[TestPath]:
        """
        Cover every sequence of ``n`` consecutive transitions at least once.

        Args:
            n: Sequence length (config.n_switch by default), at least 1

        Returns:
            One path per sequence that was not already covered by an earlier path
        """
        n = self.config.n_switch if n is None else n
        if n < 1:
            raise ValueError(f"n must be at least 1, got {n}")

        initial = self.model.get_initial_state()
        sequences = self._transition_sequences(n)
        covered: Set[TransitionSequence] = set()
        paths: List[TestPath] = []

        for sequence in sequences:
            if sequence in covered:
                continue

            first = self.model.get_transition(sequence[0])
            route = find_route(self.model, initial.id, first.from_state)
            if route is None:
                logger.warning(f"⚠️ Sequence {','.join(sequence)} is unreachable from initial state")
                continue

            states = list(route.states)
            for transition_id in sequence:
                states.append(self.model.get_transition(transition_id).to_state)
            transitions = route.transitions + list(sequence)

            paths.append(self.materializer.materialize(states, transitions))
            for i in range(len(transitions) - n + 1):
                covered.add(tuple(transitions[i:i + n]))

        logger.info(f"✅ {n}-switch coverage: {len(paths)} paths cover {len(sequences)} sequences")
        return paths

    def _extend_to_final(self, route: Route) -> Route:
        """Continue a route to the first final state reachable from its end."""
        end = route.states[-1]
        for final in self.model.get_final_states():
            to_final = find_route(self.model, end, final.id)
            if to_final:
                return route.extend(to_final)
        return route

    def _random_walk(self, max_length: int) -> TestPath:
        current = self.model.get_initial_state().id
        states = [current]
        transitions: List[str] = []

        while len(transitions) < max_length:
            available = self.model.get_transitions_from(current)
            if not available:
                break

            selected = self._select_weighted(available)
            states.append(selected.to_state)
            transitions.append(selected.id)
            current = selected.to_state

            if self.model.get_state(current).final:
                break

        return self.materializer.materialize(states, transitions)

    def _select_weighted(self, transitions: List[Transition]) -> Transition:
        """Roulette selection proportional to each transition's priority."""
        total = sum(t.selection_weight for t in transitions)
        point = self.rng.random() * total
        cumulative = 0.0
        for transition in transitions:
            cumulative += transition.selection_weight
            if point < cumulative:
                return transition
        return transitions[-1]

    def _reachable_states(self) -> List[str]:
        """States reachable from the initial state, in BFS order."""
        start = self.model.get_initial_state().id
        order = [start]
        seen = {start}
        queue = deque([start])
        while queue:
            for transition in self.model.get_transitions_from(queue.popleft()):
                if transition.to_state not in seen:
                    seen.add(transition.to_state)
                    order.append(transition.to_state)
                    queue.append(transition.to_state)
        return order

    def _transition_sequences(self, n: int) -> List[TransitionSequence]:
        """
        Enumerate distinct length-n transition sequences reachable from the
        initial state, depth-first in declaration order.

        Uses an explicit stack; stops after config.max_sequences sequences.
        """
        limit = self.config.max_sequences
        sequences: List[TransitionSequence] = []
        seen: Set[TransitionSequence] = set()

        for state_id in self._reachable_states():
            stack = [(t.to_state, (t.id,)) for t in reversed(self.model.get_transitions_from(state_id))]
            while stack:
                current, sequence = stack.pop()
                if len(sequence) == n:
                    if sequence not in seen:
                        seen.add(sequence)
                        sequences.append(sequence)
                        if len(sequences) >= limit:
                            logger.warning(f"⚠️ Stopped enumerating {n}-switch sequences at {limit}")
                            return sequences
                    continue
                for transition in reversed(self.model.get_transitions_from(current)):
                    stack.append((transition.to_state, sequence + (transition.id,)))

        logger.debug(f"Enumerated {len(sequences)} transition sequences of length {n}")
        return sequences


def generate_paths(model: StateMachineModel, config: Optional[GenerationConfig] = None) -> List[TestPath]:
    """Generate paths for ``model`` with the strategy named in ``config``."""
    return CoverageGenerator(model, config).generate()
