"""
Coverage Analysis

Aggregates generated test paths into state and transition coverage figures.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Sequence

from ..core.model import StateMachineModel
from ..core.results import CoverageReport, TestPath

logger = logging.getLogger(__name__)


def _percentage(covered: int, total: int) -> float:
    return (covered / total * 100) if total > 0 else 100.0


class CoverageAnalyzer:
    """Computes coverage of a model by a collection of test paths."""

    def __init__(self, model: StateMachineModel):
        self.model = model

    def build_report(self, paths: Sequence[TestPath]) -> CoverageReport:
        """
        Union the states and transitions touched by all paths.

        Args:
            paths: Generated test paths

        Returns:
            Coverage report; percentages are in the 0-100 range
        """
        covered_states = set()
        covered_transitions = set()
        for path in paths:
            covered_states.update(path.states)
            covered_transitions.update(path.transitions)

        state_ids = [s.id for s in self.model.get_all_states()]
        transition_ids = [t.id for t in self.model.get_all_transitions()]
        covered_states &= set(state_ids)
        covered_transitions &= set(transition_ids)

        report = CoverageReport(
            total_states=len(state_ids),
            covered_states=len(covered_states),
            state_coverage=_percentage(len(covered_states), len(state_ids)),
            total_transitions=len(transition_ids),
            covered_transitions=len(covered_transitions),
            transition_coverage=_percentage(len(covered_transitions), len(transition_ids)),
            paths=list(paths),
            uncovered_states=[s for s in state_ids if s not in covered_states],
            uncovered_transitions=[t for t in transition_ids if t not in covered_transitions]
        )

        if report.is_complete:
            logger.info("🎉 Complete state and transition coverage achieved!")
        else:
            logger.warning(
                f"⚠️ {len(report.uncovered_states)} states and "
                f"{len(report.uncovered_transitions)} transitions remain uncovered"
            )
        return report

    def summarize(self, report: CoverageReport) -> Dict[str, Any]:
        """Generate a summary of the report for display and persistence."""
        return {
            "generation_summary": {
                "model": self.model.name,
                "model_version": self.model.version,
                "total_paths": len(report.paths),
                "total_steps": sum(len(p.steps) for p in report.paths),
                "longest_path": max((p.length for p in report.paths), default=0),
                "generation_timestamp": datetime.now().isoformat()
            },
            "state_coverage": {
                "total_states": report.total_states,
                "covered_states": report.covered_states,
                "coverage_percentage": report.state_coverage,
                "uncovered_states": report.uncovered_states
            },
            "transition_coverage": {
                "total_transitions": report.total_transitions,
                "covered_transitions": report.covered_transitions,
                "coverage_percentage": report.transition_coverage,
                "uncovered_transitions": report.uncovered_transitions
            },
            "is_complete_coverage": report.is_complete
        }


def to_coverage_report(model: StateMachineModel, paths: Sequence[TestPath]) -> CoverageReport:
    """Build the coverage report of ``paths`` over ``model``."""
    return CoverageAnalyzer(model).build_report(paths)
