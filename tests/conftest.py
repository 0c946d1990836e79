"""Shared fixtures for model-based generation tests."""

from typing import Any, Dict, List

import pytest

from modelqa.core import StateMachineModel, parse_state_machine


def make_document(states: List[Dict[str, Any]], transitions: List[Dict[str, Any]],
                  name: str = "test machine") -> Dict[str, Any]:
    return {"name": name, "states": states, "transitions": transitions}


def make_model(states, transitions, name="test machine", strict=True) -> StateMachineModel:
    return StateMachineModel(parse_state_machine(make_document(states, transitions, name)), strict=strict)


def make_edge(transition_id: str, source: str, target: str, **extra) -> Dict[str, Any]:
    return {"id": transition_id, "from": source, "to": target, **extra}


@pytest.fixture
def edge():
    """Build a transition dict: edge("t1", "A", "B", priority=2)."""
    return make_edge


@pytest.fixture
def model_factory():
    """Build a validated model from compact state/transition dicts."""
    return make_model


@pytest.fixture
def linear_model():
    """A (initial) -> B -> C (final)."""
    return make_model(
        [{"id": "A", "initial": True}, {"id": "B"}, {"id": "C", "final": True}],
        [make_edge("t1", "A", "B"), make_edge("t2", "B", "C")]
    )


@pytest.fixture
def branching_states():
    return [
        {"id": "A", "initial": True},
        {"id": "B"},
        {"id": "C"},
        {"id": "D", "final": True},
    ]


@pytest.fixture
def branching_transitions():
    return [
        make_edge("t1", "A", "B"),
        make_edge("t2", "A", "C"),
        make_edge("t3", "B", "D"),
        make_edge("t4", "C", "D"),
        make_edge("t5", "D", "A"),
        make_edge("t6", "B", "C"),
    ]


@pytest.fixture
def branching_model(branching_states, branching_transitions):
    """Diamond with a back edge D -> A and a cross edge B -> C."""
    return make_model(branching_states, branching_transitions)


CHECKOUT_YAML = """
name: Shop checkout
version: "1.2"
states:
  - id: home
    initial: true
    entryActions:
      - action: goto
        url: https://shop.example.com
    invariants:
      - type: visible
        selector: "#catalog"
  - id: product
    invariants:
      - type: url
  - id: cart
    invariants:
      - type: text
        selector: h1
        value: Your cart
  - id: payment
    exitActions:
      - action: screenshot
        name: payment-form
  - id: confirmation
    final: true
transitions:
  - id: open_product
    from: home
    to: product
    actions:
      - action: click
        selector: ".product-card"
  - id: add_to_cart
    from: product
    to: cart
    priority: 3
    actions:
      - action: click
        selector: "#add-to-cart"
  - id: back_home
    from: product
    to: home
    actions:
      - action: click
        selector: "text=Continue shopping"
  - id: checkout
    from: cart
    to: payment
    actions:
      - action: click
        selector: "#checkout"
  - id: remove_item
    from: cart
    to: home
    actions:
      - action: click
        selector: ".remove-item"
  - id: pay
    from: payment
    to: confirmation
    actions:
      - action: click
        selector: "#pay"
"""


@pytest.fixture
def checkout_file(tmp_path):
    path = tmp_path / "checkout.yml"
    path.write_text(CHECKOUT_YAML, encoding="utf-8")
    return path
