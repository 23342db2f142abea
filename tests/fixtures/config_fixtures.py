"""
Configuration test fixtures for the test suite.
"""

import json
from pathlib import Path
from typing import Any, Dict

SAMPLE_CONFIG = {
    "base_uri": "http://localhost:8080/rest",
    "namespaces": {
        "ex": "http://example.org/ns#",
        "dc": "http://purl.org/dc/elements/1.1/",
    },
    "workspaces": ["default", "archive"],
    "logging": {
        "level": "WARNING",
    },
}


def write_config(directory: Path, config: Dict[str, Any], name: str = "config.json") -> Path:
    """Write config as JSON into directory and return the file path."""
    path = Path(directory) / name
    path.write_text(json.dumps(config), encoding="utf-8")
    return path
