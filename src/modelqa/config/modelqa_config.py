"""
ModelQA Configuration Parser

Handles parsing modelqa.yml configuration files and turning them into a
GenerationConfig, with environment variable overrides.
"""

import logging
import os
from typing import Any, Dict, Optional

import yaml

from .generation import GenerationConfig

logger = logging.getLogger(__name__)

SEED_ENV_VAR = "MODELQA_SEED"
LOG_LEVEL_ENV_VAR = "MODELQA_LOG_LEVEL"


class ModelQAConfig:
    """Handles modelqa.yml configuration parsing and validation."""

    def __init__(self, config_path: str = "modelqa.yml"):
        self.config_path = config_path
        self.config: Dict[str, Any] = {}
        self.load_config()

    def load_config(self):
        """Load and parse the modelqa.yml configuration file."""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as file:
                loaded = yaml.safe_load(file) or {}
            if not isinstance(loaded, dict):
                raise ValueError(f"{self.config_path} must contain a mapping")
            self.config = self._merge(self.get_default_config(), loaded)
            logger.info(f"Loaded configuration from {self.config_path}")
        except FileNotFoundError:
            logger.warning(f"No {self.config_path} found, using defaults")
            self.config = self.get_default_config()
        except yaml.YAMLError as e:
            logger.error(f"Error parsing {self.config_path}: {e}")
            raise

    def get_default_config(self) -> Dict[str, Any]:
        """Return default configuration when no modelqa.yml is found."""
        return {
            "generation": {
                "strategy": "transition",
                "n_switch": 1,
                "max_sequences": 10000,
                "strict": True,
                "custom_invariants": "skip",
                "random": {
                    "count": 10,
                    "max_length": 10,
                    "seed": None
                }
            },
            "output": {
                "dir": "./generated",
                "report": None,
                "diagram": None,
                "diagram_format": "mermaid"
            },
            "logging": {
                "level": "INFO"
            }
        }

    def get_generation_section(self) -> Dict[str, Any]:
        return self.config.get("generation", {})

    def get_output_section(self) -> Dict[str, Any]:
        return self.config.get("output", {})

    def get_log_level(self) -> str:
        """Log level name, MODELQA_LOG_LEVEL taking precedence over the file."""
        level = os.getenv(LOG_LEVEL_ENV_VAR) or self.config.get("logging", {}).get("level", "INFO")
        return str(level).upper()

    def get_seed(self) -> Optional[int]:
        """Random seed, MODELQA_SEED taking precedence over the file."""
        env_seed = os.getenv(SEED_ENV_VAR)
        if env_seed:
            try:
                return int(env_seed)
            except ValueError:
                logger.warning(f"⚠️ Ignoring non-integer {SEED_ENV_VAR}={env_seed!r}")
        return self.get_generation_section().get("random", {}).get("seed")

    def to_generation_config(self, **overrides: Any) -> GenerationConfig:
        """
        Build a GenerationConfig from the file values.

        Args:
            **overrides: GenerationConfig fields that take precedence (e.g. CLI
                flags). None values are ignored.

        Returns:
            Validated generation configuration
        """
        generation = self.get_generation_section()
        random_walks = generation.get("random", {})
        output = self.get_output_section()

        values = {
            "strategy": generation.get("strategy", "transition"),
            "n_switch": generation.get("n_switch", 1),
            "max_sequences": generation.get("max_sequences", 10000),
            "strict": generation.get("strict", True),
            "custom_invariants": generation.get("custom_invariants", "skip"),
            "random_count": random_walks.get("count", 10),
            "max_length": random_walks.get("max_length", 10),
            "seed": self.get_seed(),
            "output_dir": output.get("dir", "./generated"),
            "report_path": output.get("report"),
            "diagram_path": output.get("diagram"),
            "diagram_format": output.get("diagram_format", "mermaid"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return GenerationConfig(**values)

    @staticmethod
    def _merge(defaults: Dict[str, Any], loaded: Dict[str, Any]) -> Dict[str, Any]:
        merged = dict(defaults)
        for key, value in loaded.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = ModelQAConfig._merge(merged[key], value)
            else:
                merged[key] = value
        return merged
