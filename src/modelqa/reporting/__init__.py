"""
Reporting Package

Coverage analysis of generated paths and structural diagram export
(Mermaid, XML).
"""

from .coverage import CoverageAnalyzer, to_coverage_report
from .diagram import render_diagram, save_diagram, to_mermaid, to_xml

__all__ = [
    'CoverageAnalyzer', 'to_coverage_report',
    'to_mermaid', 'to_xml', 'render_diagram', 'save_diagram'
]
