"""
CLI utility functions.

Pure, stateless utility functions used across CLI commands.
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from bqplane.spi.address import DataFlowRequest


def load_request(request_file: str) -> DataFlowRequest:
    """
    Load a transfer request from a JSON or YAML file.

    Args:
        request_file: Path to a .json, .yaml or .yml file

    Returns:
        The parsed DataFlowRequest

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file cannot be parsed or lacks required fields
    """
    path = Path(request_file)
    if not path.exists():
        raise FileNotFoundError(f"Request file not found: {request_file}")

    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            data: Any = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValueError(f"Invalid request file {request_file}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Request file {request_file} must contain an object")
    return DataFlowRequest.from_dict(data)


def setup_logging(verbose: bool = False) -> None:
    """
    Set up logging configuration.

    Args:
        verbose: If True, set logging level to DEBUG, otherwise INFO
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s - %(name)s - %(message)s")
