#!/usr/bin/env python3
"""
Basic Usage Example

Demonstrates how to generate coverage paths from a state machine model.
"""

from pathlib import Path

from modelqa import CoverageGenerator, GenerationConfig, StateMachineModel, to_coverage_report
from modelqa.generators import export_flows, generate_flows

MODEL_FILE = Path(__file__).parent / "checkout.yml"


def transition_coverage_example():
    """Example of covering every transition of the model."""

    # Load and validate the model
    model = StateMachineModel.from_file(MODEL_FILE)

    # Generate paths
    generator = CoverageGenerator(model, GenerationConfig.for_transition_coverage())
    paths = generator.generate()

    # Print summary
    report = to_coverage_report(model, paths)
    print(f"✅ Generated {len(paths)} paths")
    print(f"📊 State coverage: {report.state_coverage:.1f}%")
    print(f"🎯 Transition coverage: {report.transition_coverage:.1f}%")

    for path in paths:
        print(f"  • {path.name} ({len(path.steps)} steps)")

    return paths


def random_walk_example():
    """Example of reproducible random walks exported as flows."""

    model = StateMachineModel.from_file(MODEL_FILE)
    config = GenerationConfig.for_random_walks(count=5, max_length=8, seed=42)

    paths = CoverageGenerator(model, config).generate()
    written = export_flows(generate_flows(paths), "generated/random")

    print(f"🎲 Wrote {len(written)} random walk flows")
    return written


if __name__ == "__main__":
    transition_coverage_example()

    # random_walk_example()
