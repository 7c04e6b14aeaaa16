"""Helpers for the SVG path maps attached to buildings and floor plans."""
import json
from typing import Any, Dict


def parse_paths(value: Any, field_name: str) -> Dict[str, Any]:
    """
    Accept a path map as an object or a JSON-encoded object.

    Multipart clients send these as strings.
    """
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            raise ValueError(f"{field_name} must be a valid JSON object")

    if not isinstance(value, dict):
        raise ValueError(f"{field_name} must be an object")

    return value
