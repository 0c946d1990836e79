"""
ModelQA: Model-Based Test Generation

Derives coverage-bearing test paths from a declared application state machine.

Key Components:
- Core: State machine definitions, validated model, loading and errors
- Generators: Path finding, coverage strategies, step materialization, flow export
- Reporting: Coverage analysis and diagram export
- Config: Centralized generation configuration
"""

# Core components
from .core import (
    CoverageReport, Flow, ModelError, State, StateMachine, StateMachineModel,
    TestPath, Transition, load_state_machine
)

# Generation components
from .generators import CoverageGenerator, PathMaterializer, generate_flows, shortest_path

# Reporting
from .reporting import CoverageAnalyzer, to_coverage_report, to_mermaid

# Configuration
from .config import CoverageStrategy, GenerationConfig

__version__ = "1.0.0"

__all__ = [
    # Core
    'StateMachine', 'State', 'Transition', 'StateMachineModel', 'load_state_machine',
    'TestPath', 'CoverageReport', 'Flow', 'ModelError',

    # Generation
    'CoverageGenerator', 'PathMaterializer', 'shortest_path', 'generate_flows',

    # Reporting
    'CoverageAnalyzer', 'to_coverage_report', 'to_mermaid',

    # Configuration
    'GenerationConfig', 'CoverageStrategy'
]
