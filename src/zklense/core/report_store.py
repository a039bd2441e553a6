"""Persists the diagnostic report of the latest run."""

import json
from pathlib import Path
from typing import Dict, Any

REPORT_DIR = ".zklense"
REPORT_FILE = "report.json"


def report_path(project_dir: Path) -> Path:
    return Path(project_dir) / REPORT_DIR / REPORT_FILE


def save_report(report: Dict[str, Any], project_dir: Path) -> Path:
    """Write the report document, replacing any previous report."""
    path = report_path(project_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(report, f, indent=2)
    return path


def load_report(project_dir: Path) -> Dict[str, Any]:
    """
    Load the persisted report document.

    Raises:
        FileNotFoundError: If no report exists
        ValueError: If the file is not valid JSON
    """
    path = report_path(project_dir)
    if not path.is_file():
        raise FileNotFoundError(f"No report found at {path}. Run 'zklense simulate' first.")
    with open(path) as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Report file is not valid JSON: {path} ({e})") from e
