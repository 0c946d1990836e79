"""Tests for coverage reports and diagram export."""

import xml.etree.ElementTree as ET

from modelqa.config import DiagramFormat
from modelqa.generators import CoverageGenerator
from modelqa.reporting import CoverageAnalyzer, render_diagram, save_diagram, to_coverage_report, to_mermaid, to_xml


class TestCoverageReport:

    def test_partial_coverage(self, branching_model):
        paths = [CoverageGenerator(branching_model).generate_state_coverage()[1]]  # A -> C
        report = to_coverage_report(branching_model, paths)

        assert report.total_states == 4
        assert report.covered_states == 2
        assert report.state_coverage == 50.0
        assert report.total_transitions == 6
        assert report.covered_transitions == 1
        assert report.uncovered_states == ["B", "D"]
        assert report.uncovered_transitions == ["t1", "t3", "t4", "t5", "t6"]
        assert not report.is_complete

    def test_no_paths(self, linear_model):
        report = to_coverage_report(linear_model, [])

        assert report.covered_states == 0
        assert report.state_coverage == 0.0
        assert report.transition_coverage == 0.0

    def test_model_without_transitions_is_fully_transition_covered(self, model_factory):
        model = model_factory([{"id": "only", "initial": True, "final": True}], [])
        paths = CoverageGenerator(model).generate_state_coverage()
        report = to_coverage_report(model, paths)

        assert report.total_transitions == 0
        assert report.transition_coverage == 100.0
        assert report.state_coverage == 100.0
        assert report.is_complete

    def test_serialized_keys(self, linear_model):
        paths = CoverageGenerator(linear_model).generate_transition_coverage()
        data = to_coverage_report(linear_model, paths).to_dict()

        assert data["stateCoverage"] == 100.0
        assert data["totalTransitions"] == 2
        assert data["paths"][0]["coverage"] == {"statesCovered": 3, "transitionsCovered": 2}

    def test_summary(self, linear_model):
        analyzer = CoverageAnalyzer(linear_model)
        report = analyzer.build_report(CoverageGenerator(linear_model).generate_transition_coverage())
        summary = analyzer.summarize(report)

        assert summary["generation_summary"]["model"] == "test machine"
        assert summary["generation_summary"]["total_paths"] == 1
        assert summary["generation_summary"]["longest_path"] == 2
        assert summary["transition_coverage"]["coverage_percentage"] == 100.0
        assert summary["state_coverage"]["uncovered_states"] == []
        assert summary["is_complete_coverage"] is True


class TestDiagrams:

    def test_mermaid(self, linear_model):
        assert to_mermaid(linear_model) == "\n".join([
            "stateDiagram-v2",
            "  [*] --> A",
            "  C --> [*]",
            "  A --> B: t1",
            "  B --> C: t2",
        ])

    def test_xml(self, branching_model):
        root = ET.fromstring(to_xml(branching_model))

        assert root.tag == "StateMachine"
        assert root.get("name") == "test machine"
        assert root.find("States").get("count") == "4"
        assert root.find("Transitions").get("count") == "6"

        state_a = root.find("States/State[@id='A']")
        assert state_a.get("initial") == "true"
        assert state_a.get("outgoing") == "2"

        t5 = root.find("Transitions/Transition[@id='t5']")
        assert t5.find("FromState").text == "D"
        assert t5.find("ToState").text == "A"

    def test_render_by_format_name(self, linear_model):
        assert render_diagram(linear_model, "xml").startswith("<?xml")
        assert render_diagram(linear_model, DiagramFormat.MERMAID).startswith("stateDiagram-v2")

    def test_save_diagram(self, linear_model, tmp_path):
        output = save_diagram(linear_model, tmp_path / "diagrams" / "model.mmd")

        assert output.read_text(encoding="utf-8") == to_mermaid(linear_model)
