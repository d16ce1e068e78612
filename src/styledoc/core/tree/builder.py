"""Fold parsed fragments into the Category -> Component -> Section tree."""

import copy
from dataclasses import dataclass, field, replace
from functools import reduce
from collections.abc import Iterable

from loguru import logger

from styledoc.config import DEFAULT_CATEGORY
from styledoc.models.block import Fragment, TagKind
from styledoc.models.tree import (
    Category,
    Component,
    DocumentTree,
    Example,
    Prop,
    Section,
    Variant,
    VariationKind,
)

# Tags feeding each example kind of a section, in order of preference.
EXAMPLE_SOURCES: dict[VariationKind, tuple[TagKind, ...]] = {
    VariationKind.CORE: (TagKind.HTML, TagKind.MARKUP),
    VariationKind.REACT: (TagKind.JS, TagKind.REACT),
    VariationKind.ANGULAR: (TagKind.TS, TagKind.ANGULAR),
    VariationKind.ANGULARJS: (TagKind.ANGULARJS,),
    VariationKind.SCSS: (TagKind.SCSS,),
}


@dataclass(frozen=True)
class BuildState:
    """Accumulator threaded through the fold.

    `category` and `component` remember what the current file declared last,
    so prop-only blocks further down the file know where they belong.
    """

    tree: DocumentTree = field(default_factory=DocumentTree)
    file: str | None = None
    category: str | None = None
    component: str | None = None


def _first_example(fragment: Fragment, kinds: tuple[TagKind, ...]) -> Example | None:
    for kind in kinds:
        value = fragment.first(kind)
        if value is not None:
            return value
    return None


def _list_or_none(fragment: Fragment, kind: TagKind) -> list | None:
    return fragment.all(kind) or None


def _new_section(fragment: Fragment, key: str) -> Section:
    variations = {}
    for kind, sources in EXAMPLE_SOURCES.items():
        example = _first_example(fragment, sources)
        if example is not None:
            variations[kind] = example
    return Section(
        key=key,
        name=fragment.first(TagKind.NAME, ""),
        description=fragment.first(TagKind.DESCRIPTION, ""),
        variations=variations,
        hidecode=fragment.first(TagKind.HIDECODE),
        params=_list_or_none(fragment, TagKind.PARAM),
        states=_list_or_none(fragment, TagKind.STATE),
        variables=_list_or_none(fragment, TagKind.VARIABLE),
        props=_list_or_none(fragment, TagKind.PROP),
    )


def _new_variant(fragment: Fragment, key: str) -> Variant:
    return Variant(
        key=key,
        html=_first_example(fragment, EXAMPLE_SOURCES[VariationKind.CORE]),
        js=_first_example(fragment, EXAMPLE_SOURCES[VariationKind.REACT]),
        ts=_first_example(fragment, EXAMPLE_SOURCES[VariationKind.ANGULAR]),
        scss=fragment.first(TagKind.SCSS),
        params=_list_or_none(fragment, TagKind.PARAM),
        states=_list_or_none(fragment, TagKind.STATE),
        variables=_list_or_none(fragment, TagKind.VARIABLE),
    )


def _add_props(component: Component, props: list[Prop]) -> None:
    for prop in props:
        if not prop.name:
            logger.debug("Dropping unnamed prop on {}", component.key)
        elif not component.add_prop(prop):
            logger.debug("Duplicate {} prop {!r} on {}", prop.library, prop.name, component.key)


def apply_fragment(
    state: BuildState,
    fragment: Fragment,
    *,
    default_category: str = DEFAULT_CATEGORY,
) -> BuildState:
    """Fold one fragment into the tree and return the next state."""
    if fragment.file != state.file:
        state = BuildState(tree=state.tree, file=fragment.file)
    tree = state.tree

    component_key = fragment.first(TagKind.COMPONENT)
    if not component_key:
        header_category = fragment.first(TagKind.CATEGORY)
        if header_category:
            state = replace(state, category=header_category, component=None)
            logger.debug("{}: category {!r} for following blocks", fragment.file, header_category)
        props = fragment.all(TagKind.PROP)
        if props and state.category and state.component:
            component = tree.find_component(state.category, state.component)
            if component is not None:
                _add_props(component, props)
                return state
        if not header_category:
            logger.debug(
                "{}:{}: skipping block without @component", fragment.file, fragment.start_line
            )
        return state

    category_key = fragment.first(TagKind.CATEGORY) or state.category or default_category
    category = tree.categories.get(category_key)
    if category is None:
        category = tree.categories[category_key] = Category(key=category_key)

    name = fragment.first(TagKind.NAME, "")
    description = fragment.first(TagKind.DESCRIPTION, "")
    section_key = fragment.first(TagKind.SECTION)

    component = category.components.get(component_key)
    if component is None:
        component = category.components[component_key] = Component(
            key=component_key, name=name, description=description
        )
    elif not section_key:
        component.name = name
        component.description = description

    section: Section | None = None
    if section_key:
        section = component.find_section(section_key)
        if section is None:
            section = _new_section(fragment, section_key)
            component.sections.append(section)
        else:
            logger.debug("{}: section {!r} already documented", component_key, section_key)

    variant_key = fragment.first(TagKind.VARIATION)
    if variant_key:
        if section is None:
            logger.debug("{}: @variation {!r} without @section", component_key, variant_key)
        elif variant_key not in section.variants:
            section.variants[variant_key] = _new_variant(fragment, variant_key)

    _add_props(component, fragment.all(TagKind.PROP))
    return replace(state, category=category_key, component=component_key)


def build_document_tree(
    fragments: Iterable[Fragment],
    *,
    default_category: str = DEFAULT_CATEGORY,
    tree: DocumentTree | None = None,
) -> DocumentTree:
    """Fold fragments, in file-then-block order, into a document tree.

    Structure is first-seen-wins: a section, variant or prop is never
    replaced once added. A component's name and description follow the latest
    block that redeclares the component without a section.

    Fragments are added to a copy of `tree` when one is given; the caller's
    tree is left unchanged.
    """
    initial = BuildState(tree=copy.deepcopy(tree) if tree is not None else DocumentTree())
    final = reduce(
        lambda state, fragment: apply_fragment(state, fragment, default_category=default_category),
        fragments,
        initial,
    )
    return final.tree
