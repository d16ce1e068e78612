"""Read navigation templates from JSON."""

import json
from pathlib import Path
from typing import Any


def parse_navigation_data(data: Any) -> dict[str, dict[str, Any]]:
    """Validate the shape of a navigation template.

    Args:
        data: Decoded JSON, mapping category key -> category entry.

    Returns:
        The same data, checked to be a mapping of categories whose `children`
        are component entries with a `component` key and a list of `sections`.
    """
    if not isinstance(data, dict):
        msg = f"Navigation template must be an object, got {type(data).__name__}"
        raise ValueError(msg)

    for category_key, category in data.items():
        if not isinstance(category, dict):
            msg = f"Navigation category {category_key!r} must be an object"
            raise ValueError(msg)
        children = category.get("children", [])
        if not isinstance(children, list):
            msg = f"Navigation category {category_key!r}: children must be a list"
            raise ValueError(msg)
        for child in children:
            if not isinstance(child, dict) or "component" not in child:
                msg = f"Navigation category {category_key!r}: child without 'component': {child!r}"
                raise ValueError(msg)
            if not isinstance(child.get("sections", []), list):
                msg = f"Navigation component {child['component']!r}: sections must be a list"
                raise ValueError(msg)
    return data


def read_navigation_file(path: Path) -> dict[str, dict[str, Any]]:
    """Load and validate a navigation template file."""
    if not path.is_file():
        msg = f"Navigation template not found: {path}"
        raise FileNotFoundError(msg)
    return parse_navigation_data(json.loads(path.read_text(encoding="utf-8")))
