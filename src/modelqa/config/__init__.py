"""
Configuration Management

Centralized configuration for test generation:
- Coverage strategy selection and limits
- Model handling (strict ids, custom invariants)
- Output locations and diagram format
"""

from .generation import CoverageStrategy, CustomInvariantPolicy, DiagramFormat, GenerationConfig
from .modelqa_config import ModelQAConfig

__all__ = [
    'GenerationConfig', 'CoverageStrategy', 'CustomInvariantPolicy', 'DiagramFormat',
    'ModelQAConfig'
]
