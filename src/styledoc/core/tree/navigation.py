"""Overlay the document tree on a navigation template and prune empty branches.

The navigation template decides page order and grouping:

    {
        "overview": {"name": "Overview", "children": []},
        "components": {
            "name": "Components",
            "children": [
                {
                    "component": "button",
                    "name": "Button",
                    "sections": [{"section": "default", "name": "Default", "core": true}],
                }
            ],
        },
    }

Extracted data is matched by category key, then `component`, then `section`.
"""

import copy
from collections.abc import Iterable
from typing import Any

from loguru import logger

from styledoc.config import STATIC_CATEGORIES
from styledoc.models.tree import Component, DocumentTree, VariationKind

_EXAMPLE_MAPS = ("variations", "examples")

# Example keys named after the tag that feeds the kind.
_KIND_ALIASES = {
    "html": VariationKind.CORE,
    "markup": VariationKind.CORE,
    "js": VariationKind.REACT,
    "ts": VariationKind.ANGULAR,
}


def _canonical_kind(kind: str) -> str:
    return str(_KIND_ALIASES.get(kind, kind))


def _merge_section(nav_section: dict[str, Any], doc_section: dict[str, Any]) -> dict[str, Any]:
    merged = {**nav_section, **doc_section}
    merged["name"] = doc_section.get("name") or nav_section.get("name", "")
    merged["description"] = doc_section.get("description") or nav_section.get("description", "")
    for key in _EXAMPLE_MAPS:
        if key in nav_section or key in doc_section:
            merged[key] = {**nav_section.get(key, {}), **doc_section.get(key, {})}
    return merged


def _merge_sections(
    nav_sections: list[dict[str, Any]], component: Component
) -> list[dict[str, Any]]:
    doc_sections = {s.key: s.to_dict() for s in component.sections}
    merged = []
    for nav_section in nav_sections:
        doc_section = doc_sections.get(nav_section.get("section", ""))
        if doc_section is None:
            merged.append(copy.deepcopy(nav_section))
        else:
            merged.append(_merge_section(nav_section, doc_section))
    return merged


def _merge_component(nav_child: dict[str, Any], component: Component) -> dict[str, Any]:
    merged = copy.deepcopy(nav_child)
    merged["name"] = component.name or nav_child.get("name", "")
    merged["description"] = component.description or nav_child.get("description", "")
    merged["sections"] = _merge_sections(nav_child.get("sections", []), component)
    doc_props = component.to_dict()["props"]
    merged["props"] = {**nav_child.get("props", {}), **doc_props}
    return merged


def merge_navigation(navigation: dict[str, Any], tree: DocumentTree) -> dict[str, Any]:
    """Merge extracted documentation into the navigation template.

    Order and membership follow the template. Extracted name, description and
    examples win over the template where present; template entries without a
    match pass through unchanged. The template itself is not modified.
    """
    result: dict[str, Any] = {}
    matched = 0
    for category_key, nav_category in navigation.items():
        merged_category = copy.deepcopy(nav_category)
        children = []
        for nav_child in nav_category.get("children", []):
            component = tree.find_component(category_key, nav_child.get("component", ""))
            if component is None:
                children.append(copy.deepcopy(nav_child))
                continue
            matched += 1
            children.append(_merge_component(nav_child, component))
        if "children" in nav_category:
            merged_category["children"] = children
        result[category_key] = merged_category

    total = sum(len(c.components) for c in tree.categories.values())
    logger.debug("Matched {} of {} extracted components to navigation", matched, total)
    return result


def has_example_content(
    section: dict[str, Any], valid_kinds: Iterable[str] | None = None
) -> bool:
    """True if the section carries a non-empty example for one of the kinds.

    Keys `html`, `markup`, `js` and `ts` count as `core`, `core`, `react` and
    `angular`, both in the section and in `valid_kinds`.
    """
    kinds = {
        _canonical_kind(str(k))
        for k in (valid_kinds if valid_kinds is not None else VariationKind)
    }
    for key in _EXAMPLE_MAPS:
        for kind, example in (section.get(key) or {}).items():
            if _canonical_kind(kind) not in kinds or not isinstance(example, dict):
                continue
            if example.get("example"):
                return True
    return False


def filter_navigation(
    merged: dict[str, Any],
    *,
    static_categories: Iterable[str] = STATIC_CATEGORIES,
    valid_kinds: Iterable[str] | None = None,
) -> dict[str, Any]:
    """Drop sections, components and categories that have nothing to render.

    Static categories are kept as they are. Elsewhere a section survives when
    it is marked `core` or has example content; components without surviving
    sections and categories without surviving components are removed.
    """
    static = set(static_categories)
    kinds = list(valid_kinds) if valid_kinds is not None else None
    result: dict[str, Any] = {}
    for category_key, category in merged.items():
        if category_key in static:
            result[category_key] = category
            continue

        children = []
        for child in category.get("children", []):
            sections = [
                s
                for s in child.get("sections") or []
                if s.get("core") or has_example_content(s, kinds)
            ]
            if sections:
                children.append({**child, "sections": sections})
            else:
                logger.debug(
                    "Dropping {}/{}: no renderable sections", category_key, child.get("component")
                )

        if children:
            result[category_key] = {**category, "children": children}
        else:
            logger.debug("Dropping category {}: no components with examples", category_key)
    return result
