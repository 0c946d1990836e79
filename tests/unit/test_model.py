"""Tests for building and validating StateMachineModel."""

import logging

import pytest

from modelqa.core import (
    AmbiguousInitialStateError,
    DanglingTransitionError,
    DuplicateIdError,
    MissingInitialStateError,
    ModelValidationError,
    StateMachineModel,
    parse_state_machine,
)


class TestModelIndices:

    def test_initial_and_final_states(self, linear_model):
        assert linear_model.get_initial_state().id == "A"
        assert [s.id for s in linear_model.get_final_states()] == ["C"]

    def test_lookup_by_id(self, linear_model):
        assert linear_model.get_state("B").id == "B"
        assert linear_model.get_transition("t2").to_state == "C"

    def test_unknown_ids_return_none(self, linear_model):
        assert linear_model.get_state("missing") is None
        assert linear_model.get_transition("missing") is None

    def test_outgoing_transitions_keep_declaration_order(self, branching_model):
        assert [t.id for t in branching_model.get_transitions_from("A")] == ["t1", "t2"]
        assert [t.id for t in branching_model.get_transitions_from("B")] == ["t3", "t6"]

    def test_state_without_outgoing_transitions(self, linear_model):
        assert linear_model.get_transitions_from("C") == []
        assert linear_model.get_transitions_from("nowhere") == []

    def test_accessors_return_copies(self, linear_model):
        linear_model.get_all_states().clear()
        linear_model.get_transitions_from("A").clear()

        assert len(linear_model.get_all_states()) == 3
        assert len(linear_model.get_transitions_from("A")) == 1

    def test_final_states_in_declaration_order(self, model_factory, edge):
        model = model_factory(
            [{"id": "S", "initial": True}, {"id": "Z", "final": True}, {"id": "Y", "final": True}],
            [edge("a", "S", "Z"), edge("b", "S", "Y")]
        )
        assert [s.id for s in model.get_final_states()] == ["Z", "Y"]

    def test_later_changes_to_machine_do_not_reach_model(self, edge):
        machine = parse_state_machine({
            "states": [{"id": "A", "initial": True, "entryActions": [{"action": "goto", "url": "/"}]}, {"id": "B"}],
            "transitions": [edge("t1", "A", "B")],
        })
        model = StateMachineModel(machine)

        machine.states[0].entry_actions.append({"action": "click", "selector": "#extra"})
        machine.transitions[0].to_state = "A"

        assert model.get_state("A").entry_actions == [{"action": "goto", "url": "/"}]
        assert model.get_transition("t1").to_state == "B"

    def test_from_dict(self, edge):
        model = StateMachineModel.from_dict({
            "name": "login",
            "version": 2,
            "states": [{"id": "out", "initial": True}, {"id": "in", "final": True}],
            "transitions": [edge("login", "out", "in")],
        })
        assert model.name == "login"
        assert model.version == "2"
        assert repr(model) == "StateMachineModel(name='login', states=2, transitions=1)"


class TestModelValidation:

    def test_missing_initial_state(self, model_factory, edge):
        with pytest.raises(MissingInitialStateError) as exc_info:
            model_factory([{"id": "A"}, {"id": "B"}], [edge("t1", "A", "B")], name="no start")
        assert "no start" in str(exc_info.value)

    def test_empty_machine_has_no_initial_state(self, model_factory):
        with pytest.raises(MissingInitialStateError):
            model_factory([], [])

    def test_dangling_target(self, model_factory, edge):
        with pytest.raises(DanglingTransitionError) as exc_info:
            model_factory([{"id": "A", "initial": True}], [edge("t1", "A", "X")])

        error = exc_info.value
        assert isinstance(error, ModelValidationError)
        assert error.transition_id == "t1"
        assert error.state_id == "X"
        assert error.endpoint == "to"
        assert str(error) == 'Transition "t1" references unknown state: X (to)'

    def test_dangling_source(self, model_factory, edge):
        with pytest.raises(DanglingTransitionError) as exc_info:
            model_factory([{"id": "A", "initial": True}], [edge("t1", "Q", "A")])
        assert exc_info.value.endpoint == "from"

    def test_multiple_initial_states_rejected_when_strict(self, model_factory):
        with pytest.raises(AmbiguousInitialStateError) as exc_info:
            model_factory([{"id": "A", "initial": True}, {"id": "B", "initial": True}], [])
        assert exc_info.value.state_ids == ["A", "B"]

    def test_multiple_initial_states_first_wins_when_lenient(self, model_factory, caplog):
        with caplog.at_level(logging.WARNING, logger="modelqa"):
            model = model_factory(
                [{"id": "A", "initial": True}, {"id": "B", "initial": True}], [], strict=False
            )
        assert model.get_initial_state().id == "A"
        assert "2 initial states declared" in caplog.text

    def test_duplicate_state_rejected_when_strict(self, model_factory):
        with pytest.raises(DuplicateIdError) as exc_info:
            model_factory([{"id": "A", "initial": True}, {"id": "A"}], [])
        assert exc_info.value.kind == "state"
        assert exc_info.value.item_id == "A"

    def test_duplicate_transition_rejected_when_strict(self, model_factory, edge):
        with pytest.raises(DuplicateIdError) as exc_info:
            model_factory(
                [{"id": "A", "initial": True}, {"id": "B"}],
                [edge("t1", "A", "B"), edge("t1", "B", "A")]
            )
        assert exc_info.value.kind == "transition"

    def test_duplicates_keep_first_declaration_when_lenient(self, model_factory, edge, caplog):
        with caplog.at_level(logging.WARNING, logger="modelqa"):
            model = model_factory(
                [{"id": "A", "initial": True}, {"id": "B", "name": "first"}, {"id": "B", "name": "second"}],
                [edge("t1", "A", "B"), edge("t1", "B", "A")],
                strict=False
            )

        assert model.get_state("B").name == "first"
        assert len(model.get_all_states()) == 2
        assert [t.id for t in model.get_all_transitions()] == ["t1"]
        assert model.get_transitions_from("B") == []
        assert 'Duplicate state id "B"' in caplog.text
        assert 'Duplicate transition id "t1"' in caplog.text
