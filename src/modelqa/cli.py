#!/usr/bin/env python3
"""
ModelQA - Model-Based Test Generation

Command line entry point: loads a state machine model, generates coverage
paths, exports them as runnable flows and reports the achieved coverage.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from rich import box
from rich.console import Console
from rich.table import Table

from .config import CoverageStrategy, CustomInvariantPolicy, DiagramFormat, ModelQAConfig
from .core import ModelError, StateMachineModel
from .generators import CoverageGenerator, export_flows, generate_flows, save_report
from .reporting import CoverageAnalyzer, save_diagram

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def print_banner():
    """Print the ModelQA banner."""
    print("""
╔══════════════════════════════════════════════════════════════╗
║              🧭 ModelQA - Model-Based Test Generation        ║
║                                                              ║
║  🗺️  State Machine Models → Coverage Paths                   ║
║  🧪 Transition, State, N-Switch & Random Walk Strategies     ║
║  📝 Runnable Flow Export                                     ║
╚══════════════════════════════════════════════════════════════╝
    """)


def configure_logging(level: str = "INFO", verbose: bool = False):
    """Configure root logging for command line runs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level, logging.INFO),
        format=LOG_FORMAT
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="modelqa",
        description="Generate test flows from a state machine model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  modelqa checkout.yml
  modelqa checkout.yml -c state -o generated/state
  modelqa checkout.yml -c n-switch -n 2 --diagram checkout.mmd
  modelqa checkout.yml -c random --count 20 --max-length 15 --seed 7
        """
    )
    parser.add_argument('file', help='State machine model (YAML or JSON)')
    parser.add_argument('-o', '--output', dest='output_dir',
                        help='Output directory for generated flows (default: ./generated)')
    parser.add_argument('-c', '--coverage', choices=[s.value for s in CoverageStrategy],
                        help='Coverage strategy (default: transition)')
    parser.add_argument('-n', '--n-switch', type=int, dest='n_switch',
                        help='N-switch coverage depth (default: 1)')
    parser.add_argument('--count', type=int, dest='random_count',
                        help='Number of random walks (default: 10)')
    parser.add_argument('--max-length', type=int, dest='max_length',
                        help='Maximum transitions per random walk (default: 10)')
    parser.add_argument('--seed', type=int, help='Random seed for reproducible walks')
    parser.add_argument('--diagram', dest='diagram_path', help='Save a diagram of the model')
    parser.add_argument('--diagram-format', choices=[f.value for f in DiagramFormat],
                        help='Diagram format (default: mermaid)')
    parser.add_argument('--report', dest='report_path',
                        help='Coverage report path (default: <output>/coverage_report.json)')
    parser.add_argument('--custom-invariants', choices=[p.value for p in CustomInvariantPolicy],
                        help='Handling of custom invariants (default: skip)')
    parser.add_argument('--lenient', action='store_const', const=False, dest='strict',
                        help='Accept duplicate ids and multiple initial states (first wins)')
    parser.add_argument('--config', default='modelqa.yml', help='Configuration file')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    return parser


def print_summary(summary: Dict[str, Any], written: List[Path], console: Optional[Console] = None):
    """Print the coverage summary as a table."""
    console = console or Console()
    generation = summary['generation_summary']

    table = Table(title=f"Coverage - {generation['model']}", box=box.ROUNDED)
    table.add_column("Metric")
    table.add_column("Covered", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Coverage", justify="right")

    for label, key, total_key, covered_key in (
        ("States", "state_coverage", "total_states", "covered_states"),
        ("Transitions", "transition_coverage", "total_transitions", "covered_transitions"),
    ):
        section = summary[key]
        percentage = section['coverage_percentage']
        style = "green" if percentage >= 100 else "yellow"
        table.add_row(label, str(section[covered_key]), str(section[total_key]),
                      f"[{style}]{percentage:.1f}%[/{style}]")

    console.print(table)
    console.print(f"✅ Generated {generation['total_paths']} test flows "
                  f"({generation['total_steps']} steps, {len(written)} files)")

    uncovered = summary['state_coverage']['uncovered_states']
    if uncovered:
        console.print(f"⚠️ Uncovered states: {', '.join(uncovered)}")
    uncovered = summary['transition_coverage']['uncovered_transitions']
    if uncovered:
        console.print(f"⚠️ Uncovered transitions: {', '.join(uncovered)}")


def run(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Run generation for parsed command line arguments.

    Returns:
        Coverage summary of the generated paths

    Raises:
        ModelError: The model file cannot be loaded or validated
        ValueError: The resulting configuration is invalid
    """
    file_config = ModelQAConfig(args.config)
    if not args.verbose:
        logging.getLogger().setLevel(getattr(logging, file_config.get_log_level(), logging.INFO))

    config = file_config.to_generation_config(
        strategy=args.coverage,
        n_switch=args.n_switch,
        random_count=args.random_count,
        max_length=args.max_length,
        seed=args.seed,
        strict=args.strict,
        custom_invariants=args.custom_invariants,
        output_dir=args.output_dir,
        report_path=args.report_path,
        diagram_path=args.diagram_path,
        diagram_format=args.diagram_format
    )

    logger.info("Generating tests from model...")
    model = StateMachineModel.from_file(args.file, strict=config.strict)

    paths = CoverageGenerator(model, config).generate()
    written = export_flows(generate_flows(paths), config.output_dir)

    analyzer = CoverageAnalyzer(model)
    report = analyzer.build_report(paths)
    save_report(report, config.report_path or Path(config.output_dir) / "coverage_report.json")

    if config.diagram_path:
        save_diagram(model, config.diagram_path, config.diagram_format)

    summary = analyzer.summarize(report)
    summary['written_files'] = [str(p) for p in written]
    return summary


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    load_dotenv()
    args = build_parser().parse_args(argv)

    configure_logging(verbose=args.verbose)
    print_banner()

    try:
        summary = run(args)
    except ModelError as e:
        logger.error(f"❌ Model generation failed: {e}")
        return 1
    except ValueError as e:
        logger.error(f"❌ Invalid configuration: {e}")
        return 1
    except yaml.YAMLError as e:
        logger.error(f"❌ Invalid configuration file: {e}")
        return 1

    print_summary(summary, [Path(p) for p in summary['written_files']])
    return 0


if __name__ == "__main__":
    sys.exit(main())
