"""
Path Finder

Breadth-first shortest path search over the transition graph of a model.
"""

import logging
from collections import deque
from typing import List, NamedTuple, Optional

from ..core.model import StateMachineModel
from ..core.results import TestPath
from .materializer import PathMaterializer

logger = logging.getLogger(__name__)


class Route(NamedTuple):
    """Bare traversal of the graph before it is materialized into steps."""
    states: List[str]
    transitions: List[str]

    def extend(self, other: 'Route') -> 'Route':
        """Append a route that starts where this one ends."""
        return Route(self.states + other.states[1:], self.transitions + other.transitions)


def find_route(model: StateMachineModel, from_id: str, to_id: str) -> Optional[Route]:
    """
    Find a route with the fewest transitions between two states.

    Transitions are enqueued in declaration order, so among equally short
    routes the one using earlier-declared transitions wins. A state is
    expanded at most once.

    Args:
        model: Model to search
        from_id: Starting state
        to_id: Target state

    Returns:
        Route from ``from_id`` to ``to_id``, or None when the target is unreachable
        or either state is not declared
    """
    if model.get_state(from_id) is None or model.get_state(to_id) is None:
        return None

    queue = deque([Route([from_id], [])])
    visited = set()

    while queue:
        current = queue.popleft()
        current_state = current.states[-1]

        if current_state == to_id:
            return current

        if current_state in visited:
            continue
        visited.add(current_state)

        for transition in model.get_transitions_from(current_state):
            if transition.to_state not in visited:
                queue.append(Route(
                    current.states + [transition.to_state],
                    current.transitions + [transition.id]
                ))

    return None


def shortest_path(model: StateMachineModel, from_id: str, to_id: str,
                  materializer: Optional[PathMaterializer] = None) -> Optional[TestPath]:
    """
    Find and materialize the shortest path between two states.

    Returns:
        TestPath, or None when ``to_id`` cannot be reached from ``from_id``
    """
    route = find_route(model, from_id, to_id)
    if route is None:
        logger.debug(f"No path from {from_id} to {to_id}")
        return None

    materializer = materializer or PathMaterializer(model)
    return materializer.materialize(route.states, route.transitions)
