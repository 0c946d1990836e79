"""
Test Path Generation Module

Derives coverage-bearing test paths from a state machine model and exports
them as runnable flows.
"""

from .coverage import CoverageGenerator, generate_paths
from .flows import export_flows, flow_filename, generate_flows, save_report
from .materializer import PathMaterializer
from .path_finder import Route, find_route, shortest_path

__all__ = [
    'CoverageGenerator',
    'generate_paths',
    'PathMaterializer',
    'Route',
    'find_route',
    'shortest_path',
    'generate_flows',
    'export_flows',
    'flow_filename',
    'save_report'
]
