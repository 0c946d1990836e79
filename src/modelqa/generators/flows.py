"""
Flow Export

Converts generated test paths into flow documents for the step execution
engine and writes them, with the coverage report, to disk.
"""

import json
import logging
import re
from pathlib import Path
from typing import List, Sequence, Union

import yaml

from ..core.results import CoverageReport, Flow, TestPath

logger = logging.getLogger(__name__)


def generate_flows(paths: Sequence[TestPath]) -> List[Flow]:
    """Turn each test path into a runnable web flow."""
    return [
        Flow(
            name=path.name or f"Generated Test {index + 1}",
            description=path.description,
            steps=path.steps,
            runner="web"
        )
        for index, path in enumerate(paths)
    ]


def flow_filename(name: str) -> str:
    """File name for a flow, e.g. "Path: a -> b" becomes "path_a_b.yaml"."""
    stem = re.sub(r'[^a-z0-9]+', '_', name.lower()).strip('_') or "flow"
    return f"{stem}.yaml"


def export_flows(flows: Sequence[Flow], output_dir: Union[str, Path]) -> List[Path]:
    """
    Write one YAML document per flow.

    Args:
        flows: Flows to write
        output_dir: Target directory (created if missing)

    Returns:
        Paths of the written files, in flow order
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written: List[Path] = []
    used_names = set()
    for flow in flows:
        filename = flow_filename(flow.name)
        if filename in used_names:
            stem = filename[:-len(".yaml")]
            suffix = 2
            while f"{stem}_{suffix}.yaml" in used_names:
                suffix += 1
            filename = f"{stem}_{suffix}.yaml"
        used_names.add(filename)

        file_path = output_dir / filename
        with open(file_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(flow.to_dict(), f, indent=2, sort_keys=False, allow_unicode=True)
        written.append(file_path)

    logger.info(f"📝 Wrote {len(written)} flows to {output_dir}")
    return written


def save_report(report: CoverageReport, file_path: Union[str, Path]) -> Path:
    """Save a coverage report as indented JSON."""
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(report.to_dict(), f, indent=2, default=str)
    logger.info(f"Coverage report saved to: {file_path}")
    return file_path
