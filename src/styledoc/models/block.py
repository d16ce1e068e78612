"""Comment blocks, tags and per-block fragments."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class TagKind(StrEnum):
    """The closed set of annotation tags styledoc understands."""

    CATEGORY = "category"
    COMPONENT = "component"
    NAME = "name"
    DESCRIPTION = "description"
    SECTION = "section"
    VARIATION = "variation"
    HIDECODE = "hidecode"
    HTML = "html"
    MARKUP = "markup"
    JS = "js"
    REACT = "react"
    TS = "ts"
    ANGULAR = "angular"
    ANGULARJS = "angularjs"
    SCSS = "scss"
    PROP = "prop"
    STATE = "state"
    PARAM = "param"
    VARIABLE = "variable"

    @classmethod
    def lookup(cls, name: str) -> "TagKind | None":
        """Return the kind for a tag name, or None for tags we do not know."""
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass(frozen=True)
class CommentBlock:
    """A run of comment lines from one source file, already normalized."""

    text: str
    start_line: int
    end_line: int
    file: str = ""


@dataclass(frozen=True)
class Tag:
    """One `@name content` occurrence; start/end index the block's lines."""

    name: str
    content: str
    start: int
    end: int


@dataclass(frozen=True)
class LineSpan:
    """Content of a single tag and its line range inside the block."""

    contents: str
    start: int
    end: int


@dataclass(frozen=True)
class BlockSpan:
    """The whole block a tag came from, with its source line range."""

    contents: str
    start: int
    end: int


@dataclass(frozen=True)
class TagContext:
    """Everything a tag handler may look at besides the tag content."""

    name: str
    line: LineSpan
    block: BlockSpan
    file: str = ""
    options: dict[str, Any] = field(default_factory=dict)


@dataclass
class Fragment:
    """Parsed tags of one comment block.

    Every tag maps to a list of values in source order, even when the tag
    appears only once.
    """

    file: str = ""
    start_line: int = 0
    end_line: int = 0
    values: dict[TagKind, list[Any]] = field(default_factory=dict)

    def add(self, kind: TagKind, value: Any) -> None:
        self.values.setdefault(kind, []).append(value)

    def first(self, kind: TagKind, default: Any = None) -> Any:
        """Return the first value of a tag, or default when absent."""
        found = self.values.get(kind)
        return found[0] if found else default

    def all(self, kind: TagKind) -> list[Any]:
        return list(self.values.get(kind, []))

    def __contains__(self, kind: object) -> bool:
        return kind in self.values

    def __bool__(self) -> bool:
        return bool(self.values)

    def as_dict(self) -> dict[str, list[Any]]:
        """Tag name to list of values, with dataclass values turned into dicts."""
        return {
            str(kind): [v.to_dict() if hasattr(v, "to_dict") else v for v in vals]
            for kind, vals in self.values.items()
        }
