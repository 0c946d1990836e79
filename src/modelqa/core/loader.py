"""
State Machine Loader

Reads state machine documents (YAML, or JSON as a YAML subset) and turns
them into StateMachine definitions. Only the document shape is checked here;
graph-level validation happens when a StateMachineModel is built.
"""

import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from .errors import ModelLoadError
from .machine import InvariantType, StateMachine

logger = logging.getLogger(__name__)

STEP_LIST_KEYS = ("entryActions", "exitActions")
INVARIANT_TYPES = {t.value for t in InvariantType}


def load_state_machine(file_path: Union[str, Path]) -> StateMachine:
    """
    Load a state machine document from disk.

    Args:
        file_path: Path to a .yaml/.yml/.json document

    Returns:
        Parsed StateMachine

    Raises:
        ModelLoadError: File is missing, unreadable or not a valid document
    """
    path = Path(file_path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            document = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ModelLoadError(f"State machine file not found: {path}") from e
    except yaml.YAMLError as e:
        logger.error(f"Error parsing {path}: {e}")
        raise ModelLoadError(f"Invalid state machine document {path}: {e}") from e

    machine = parse_state_machine(document)
    logger.info(f"📄 Loaded state machine \"{machine.name}\" from {path}")
    return machine


def parse_state_machine(document: Any) -> StateMachine:
    """
    Build a StateMachine from a deserialized document.

    Missing state and transition names default to their ids.

    Raises:
        ModelLoadError: The document does not have the state machine shape
    """
    if not isinstance(document, dict):
        raise ModelLoadError("State machine document must be a mapping")

    states = _require_list(document, "states", "state machine")
    transitions = _require_list(document, "transitions", "state machine")

    normalized = {
        "name": str(document.get("name") or "Unnamed state machine"),
        "description": document.get("description"),
        "version": _optional_str(document.get("version")),
        "variables": document.get("variables") or {},
        "states": [_normalize_state(s, i) for i, s in enumerate(states)],
        "transitions": [_normalize_transition(t, i) for i, t in enumerate(transitions)],
    }
    if not isinstance(normalized["variables"], dict):
        raise ModelLoadError("'variables' must be a mapping")

    return StateMachine.from_dict(normalized)


def _normalize_state(raw: Any, index: int) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise ModelLoadError(f"State #{index} must be a mapping")
    if raw.get("id") is None:
        raise ModelLoadError(f"State #{index} has no id")

    state_id = str(raw["id"])
    state = {
        "id": state_id,
        "name": str(raw.get("name") or state_id),
        "description": raw.get("description"),
        "initial": _flag(raw, "initial", f'state "{state_id}"'),
        "final": _flag(raw, "final", f'state "{state_id}"'),
        "invariants": [
            _normalize_invariant(inv, state_id, i)
            for i, inv in enumerate(_require_list(raw, "invariants", f'state "{state_id}"'))
        ],
    }
    for key in STEP_LIST_KEYS:
        state[key] = _step_list(raw, key, f'state "{state_id}"')
    return state


def _normalize_invariant(raw: Any, state_id: str, index: int) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise ModelLoadError(f'Invariant #{index} of state "{state_id}" must be a mapping')
    inv_type = raw.get("type")
    if inv_type not in INVARIANT_TYPES:
        raise ModelLoadError(
            f'Invariant #{index} of state "{state_id}" has unknown type {inv_type!r}, '
            f"expected one of {sorted(INVARIANT_TYPES)}"
        )
    return {
        "type": inv_type,
        "selector": _optional_str(raw.get("selector")),
        "value": _optional_str(raw.get("value")),
        "condition": _optional_str(raw.get("condition")),
    }


def _normalize_transition(raw: Any, index: int) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise ModelLoadError(f"Transition #{index} must be a mapping")
    if raw.get("id") is None:
        raise ModelLoadError(f"Transition #{index} has no id")

    transition_id = str(raw["id"])
    for endpoint in ("from", "to"):
        if raw.get(endpoint) is None:
            raise ModelLoadError(f'Transition "{transition_id}" has no "{endpoint}" state')

    return {
        "id": transition_id,
        "name": str(raw.get("name") or transition_id),
        "from": str(raw["from"]),
        "to": str(raw["to"]),
        "actions": _step_list(raw, "actions", f'transition "{transition_id}"'),
        "trigger": _optional_str(raw.get("trigger")),
        "guard": _optional_str(raw.get("guard")),
        "weight": _optional_number(raw, "weight", transition_id),
        "priority": _optional_number(raw, "priority", transition_id),
    }


def _require_list(raw: Dict[str, Any], key: str, owner: str) -> List[Any]:
    value = raw.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ModelLoadError(f"'{key}' of {owner} must be a list")
    return value


def _step_list(raw: Dict[str, Any], key: str, owner: str) -> List[Dict[str, Any]]:
    steps = _require_list(raw, key, owner)
    for i, step in enumerate(steps):
        if not isinstance(step, dict) or "action" not in step:
            raise ModelLoadError(f"Step #{i} in '{key}' of {owner} must be a mapping with an 'action'")
    return steps


def _flag(raw: Dict[str, Any], key: str, owner: str) -> bool:
    value = raw.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ModelLoadError(f"'{key}' of {owner} must be true or false, got {value!r}")
    return value


def _optional_str(value: Any):
    return None if value is None else str(value)


def _optional_number(raw: Dict[str, Any], key: str, transition_id: str):
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ModelLoadError(f"'{key}' of transition \"{transition_id}\" must be a number")
    if not math.isfinite(value):
        raise ModelLoadError(f"'{key}' of transition \"{transition_id}\" must be finite, got {value}")
    return value
