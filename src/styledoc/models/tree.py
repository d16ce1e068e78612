"""Document tree models: Category -> Component -> Section -> Variant."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class VariationKind(StrEnum):
    """Example flavours a section can carry."""

    CORE = "core"
    REACT = "react"
    ANGULAR = "angular"
    ANGULARJS = "angularjs"
    SCSS = "scss"


def _compact(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class Example:
    """A code example together with its HTML-escaped form."""

    example: str
    escaped: str

    def to_dict(self) -> dict[str, str]:
        return {"example": self.example, "escaped": self.escaped}


@dataclass(frozen=True)
class Prop:
    """One documented component property."""

    name: str
    type: str
    description: str
    default: str | None
    required: bool
    library: str

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "name": self.name,
                "type": self.type,
                "description": self.description,
                "default": self.default,
                "required": self.required,
            }
        )


@dataclass
class Variant:
    """A named sub-variant of a section, keyed by its @variation value."""

    key: str
    html: Example | None = None
    js: Example | None = None
    ts: Example | None = None
    scss: Example | None = None
    params: list[dict[str, str]] | None = None
    states: list[dict[str, str]] | None = None
    variables: list[dict[str, str]] | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "variation": self.key,
                "html": self.html.to_dict() if self.html else None,
                "js": self.js.to_dict() if self.js else None,
                "ts": self.ts.to_dict() if self.ts else None,
                "scss": self.scss.to_dict() if self.scss else None,
                "params": self.params,
                "states": self.states,
                "variables": self.variables,
            }
        )


@dataclass
class Section:
    """A documented section of a component, keyed by its @section value."""

    key: str
    name: str = ""
    description: str = ""
    variations: dict[VariationKind, Example] = field(default_factory=dict)
    variants: dict[str, Variant] = field(default_factory=dict)
    hidecode: str | None = None
    params: list[dict[str, str]] | None = None
    states: list[dict[str, str]] | None = None
    variables: list[dict[str, str]] | None = None
    props: list[Prop] | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "section": self.key,
                "name": self.name,
                "description": self.description,
                "variations": {str(k): v.to_dict() for k, v in self.variations.items()},
                "variants": {k: v.to_dict() for k, v in self.variants.items()},
                "hidecode": self.hidecode,
                "params": self.params,
                "states": self.states,
                "variables": self.variables,
                "props": [p.to_dict() for p in self.props] if self.props else None,
            }
        )


@dataclass
class Component:
    """A documented component with its sections and per-library prop tables."""

    key: str
    name: str = ""
    description: str = ""
    sections: list[Section] = field(default_factory=list)
    props: dict[str, list[Prop]] = field(default_factory=dict)

    def find_section(self, key: str) -> Section | None:
        return next((s for s in self.sections if s.key == key), None)

    def add_prop(self, prop: Prop) -> bool:
        """Add a prop to its library table. Returns False if the name is taken."""
        table = self.props.setdefault(prop.library, [])
        if any(p.name == prop.name for p in table):
            return False
        table.append(prop)
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "component": self.key,
            "name": self.name,
            "description": self.description,
            "sections": [s.to_dict() for s in self.sections],
            "props": {lib: [p.to_dict() for p in props] for lib, props in self.props.items()},
        }


@dataclass
class Category:
    """Top-level grouping of components."""

    key: str
    components: dict[str, Component] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.key,
            "components": {k: c.to_dict() for k, c in self.components.items()},
        }


@dataclass
class DocumentTree:
    """All categories extracted from a set of source files, in first-seen order."""

    categories: dict[str, Category] = field(default_factory=dict)

    def find_component(self, category: str, component: str) -> Component | None:
        found = self.categories.get(category)
        if found is None:
            return None
        return found.components.get(component)

    def is_empty(self) -> bool:
        return not any(c.components for c in self.categories.values())

    def to_dict(self) -> dict[str, Any]:
        return {k: c.to_dict() for k, c in self.categories.items()}
