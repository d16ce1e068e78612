"""Tests for merging the document tree into navigation and filtering it."""

import copy
from pathlib import Path
from typing import Any

from styledoc.core.importer.loader import load_fragments
from styledoc.core.tree.builder import build_document_tree
from styledoc.core.tree.navigation import (
    filter_navigation,
    has_example_content,
    merge_navigation,
)
from styledoc.models.tree import (
    Category,
    Component,
    DocumentTree,
    Example,
    Prop,
    Section,
    VariationKind,
)


def _tree(*components: Component, category: str = "components") -> DocumentTree:
    tree = DocumentTree(categories={category: Category(key=category)})
    for component in components:
        tree.categories[category].components[component.key] = component
    return tree


def _nav(*children: dict[str, Any], category: str = "components") -> dict[str, Any]:
    return {category: {"name": category.title(), "children": list(children)}}


def test_document_description_wins_and_empty_name_falls_back() -> None:
    component = Component(
        key="button",
        sections=[Section(key="default", name="", description="doc desc")],
    )
    nav = _nav(
        {
            "component": "button",
            "sections": [{"section": "default", "name": "Default", "description": "nav desc"}],
        }
    )

    merged = merge_navigation(nav, _tree(component))

    (section,) = merged["components"]["children"][0]["sections"]
    assert section["description"] == "doc desc"
    assert section["name"] == "Default"


def test_merge_follows_navigation_order_and_passes_unmatched_through() -> None:
    component = Component(
        key="button",
        name="Button",
        sections=[Section(key="a", name="A"), Section(key="b", name="B"), Section(key="c")],
    )
    nav = _nav(
        {
            "component": "button",
            "sections": [
                {"section": "b"},
                {"section": "missing", "name": "Missing"},
                {"section": "a"},
            ],
        },
        {"component": "unknown", "name": "Unknown", "sections": [{"section": "x"}]},
    )

    merged = merge_navigation(nav, _tree(component))

    children = merged["components"]["children"]
    assert [s["section"] for s in children[0]["sections"]] == ["b", "missing", "a"]
    assert children[0]["sections"][1] == {"section": "missing", "name": "Missing"}
    assert children[0]["name"] == "Button"
    assert children[1] == nav["components"]["children"][1]


def test_merge_requires_matching_category() -> None:
    component = Component(key="button", name="Button")
    nav = _nav({"component": "button", "name": "Nav name", "sections": []}, category="actions")

    merged = merge_navigation(nav, _tree(component))

    assert merged["actions"]["children"][0]["name"] == "Nav name"


def test_merge_unions_examples_with_document_winning() -> None:
    component = Component(
        key="button",
        sections=[
            Section(
                key="default",
                variations={VariationKind.CORE: Example(example="<doc>", escaped="&lt;doc&gt;")},
            )
        ],
    )
    nav = _nav(
        {
            "component": "button",
            "sections": [
                {
                    "section": "default",
                    "core": True,
                    "variations": {
                        "core": {"example": "<nav>", "escaped": ""},
                        "react": {"example": "<Nav/>", "escaped": ""},
                    },
                }
            ],
        }
    )

    merged = merge_navigation(nav, _tree(component))

    section = merged["components"]["children"][0]["sections"][0]
    assert section["variations"]["core"]["example"] == "<doc>"
    assert section["variations"]["react"]["example"] == "<Nav/>"
    assert section["core"] is True


def test_merge_unions_props_by_library() -> None:
    prop = Prop(
        name="size", type="string", description="", default=None, required=True, library="react"
    )
    component = Component(key="button", props={"react": [prop]})
    nav = _nav(
        {
            "component": "button",
            "sections": [],
            "props": {"angular": [{"name": "size"}], "react": [{"name": "old"}]},
        }
    )

    merged = merge_navigation(nav, _tree(component))

    props = merged["components"]["children"][0]["props"]
    assert props["angular"] == [{"name": "size"}]
    assert [p["name"] for p in props["react"]] == ["size"]


def test_merge_is_idempotent_and_leaves_template_alone(
    source_dir: Path, navigation: dict[str, Any]
) -> None:
    fragments, _stats = load_fragments([source_dir / "Button.jsx", source_dir / "card.scss"])
    tree = build_document_tree(fragments)
    original = copy.deepcopy(navigation)

    once = merge_navigation(navigation, tree)
    twice = merge_navigation(once, tree)

    assert twice == once
    assert navigation == original


def test_filter_keeps_static_categories_and_drops_empty_branches(
    source_dir: Path, navigation: dict[str, Any]
) -> None:
    fragments, _stats = load_fragments([source_dir / "Button.jsx", source_dir / "card.scss"])
    merged = merge_navigation(navigation, build_document_tree(fragments))

    result = filter_navigation(merged)

    assert list(result) == ["overview", "actions", "components"]
    assert result["overview"] == {"name": "Overview", "children": []}
    (button,) = result["actions"]["children"]
    assert button["component"] == "button"
    assert [s["section"] for s in button["sections"]] == ["sizes", "default"]
    assert button["sections"][1]["name"] == "Default"
    assert [s["section"] for s in result["components"]["children"][0]["sections"]] == ["default"]


def test_filter_drops_category_whose_only_section_has_no_examples() -> None:
    merged = {
        "develop": {"name": "Develop", "children": []},
        "patterns": {
            "children": [{"component": "form", "sections": [{"section": "default", "core": False}]}]
        },
    }

    result = filter_navigation(merged)

    assert result == {"develop": {"name": "Develop", "children": []}}


def test_filter_keeps_core_sections_without_examples() -> None:
    child = {"component": "form", "sections": [{"section": "a", "core": True}]}
    merged = {"patterns": {"children": [child]}}

    assert filter_navigation(merged) == merged


def test_filter_honours_valid_kinds() -> None:
    section = {"section": "a", "variations": {"core": {"example": "<b>", "escaped": "&lt;b&gt;"}}}
    merged = {"patterns": {"children": [{"component": "form", "sections": [section]}]}}

    assert filter_navigation(merged, valid_kinds=["react"]) == {}
    assert filter_navigation(merged, valid_kinds=["core"]) == merged


def test_has_example_content_checks_examples_map_too() -> None:
    assert has_example_content({"examples": {"react": {"example": "<A/>"}}})
    assert not has_example_content({"examples": {"react": {"example": ""}}})
    assert not has_example_content({"variations": {"unknown": {"example": "x"}}})
    assert not has_example_content({})


def test_filter_keeps_sections_with_tag_named_example_keys() -> None:
    section = {"section": "a", "examples": {"js": {"example": "<Form/>", "escaped": ""}}}
    merged = {"patterns": {"children": [{"component": "form", "sections": [section]}]}}

    assert filter_navigation(merged) == merged
    assert filter_navigation(merged, valid_kinds=["react"]) == merged
    assert filter_navigation(merged, valid_kinds=["js"]) == merged
    assert filter_navigation(merged, valid_kinds=["core"]) == {}


def test_has_example_content_accepts_html_and_ts_keys() -> None:
    assert has_example_content({"variations": {"html": {"example": "<b>"}}}, ["core"])
    assert has_example_content({"examples": {"ts": {"example": "<app-a>"}}}, ["angular"])
    assert not has_example_content({"examples": {"ts": {"example": "<app-a>"}}}, ["react"])
