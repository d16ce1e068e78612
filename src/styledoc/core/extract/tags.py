"""Parse the `@tag content` annotations of a comment block into a Fragment."""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from loguru import logger

from styledoc.config import DEFAULT_PROP_LIBRARY, PROP_SEPARATOR
from styledoc.core.extract.blocks import extract_blocks, normalize
from styledoc.models.block import (
    BlockSpan,
    CommentBlock,
    Fragment,
    LineSpan,
    Tag,
    TagContext,
    TagKind,
)
from styledoc.models.tree import Example, Prop

Handler = Callable[[str, TagContext], Any]
Detector = Callable[[str], bool]

_TAG_NAME_RE = re.compile(r"\S*")
_WHITESPACE_RE = re.compile(r"\s+")
_PROP_TYPE_RE = re.compile(r"PropTypes\.([^.].*[^,])")
_PARAM_TYPE_RE = re.compile(r"\(([^)]+)\)")

# A comment marker this close to the start of a line is decoration, not content.
_STAR_WINDOW = 10


def squeeze(text: str) -> str:
    """Collapse whitespace runs to one space and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def escape_markup(text: str) -> str:
    return text.replace("<", "&lt;").replace(">", "&gt;")


def default_detector(line: str) -> bool:
    """A line carries a tag if its last paragraph contains an `@`."""
    return "@" in line.split("\n\n")[-1]


# -- handlers -----------------------------------------------------------------


def parse_text(content: str, context: TagContext) -> str:
    return squeeze(content)


def parse_example(content: str, context: TagContext) -> Example:
    return Example(example=content, escaped=escape_markup(content))


def parse_prop(content: str, context: TagContext) -> Prop:
    """Parse a prop comment plus the declaration lines the extractor appended.

    The comment half reads `description | default`; the declaration half is
    rejoined from its separator-delimited lines, e.g.
    `size: PropTypes.oneOf(['sm', 'md']).isRequired,`.
    """
    head, _, tail = content.partition(PROP_SEPARATOR)
    doc = head.split(" | ")
    description = squeeze(doc[0])
    default = doc[1].strip() if len(doc) > 1 else ""
    declaration = "".join(part.strip() for part in tail.split(PROP_SEPARATOR))

    name = declaration.split(":", 1)[0].strip() if declaration else ""
    match = _PROP_TYPE_RE.search(declaration)
    prop_type = match.group(1).replace(".isRequired", "").strip() if match else ""
    if declaration and not match:
        logger.debug("{}: no PropTypes declaration for prop {!r}", context.file, name)

    return Prop(
        name=name,
        type=prop_type,
        description=description,
        default=default or None,
        required=not default,
        library=context.options.get("prop_library", DEFAULT_PROP_LIBRARY),
    )


def parse_state(content: str, context: TagContext) -> dict[str, str]:
    """`:hover - Highlighted state` -> name and description."""
    name, _, description = content.partition(" - ")
    return {"name": squeeze(name), "description": squeeze(description)}


def parse_param(content: str, context: TagContext) -> dict[str, str]:
    """`$size - Button size (string)` -> name, description and type."""
    name, _, rest = content.partition(" - ")
    match = _PARAM_TYPE_RE.search(rest)
    description = rest[: match.start()] if match else rest
    return {
        "name": squeeze(name),
        "type": match.group(1).strip() if match else "",
        "description": squeeze(description),
    }


def parse_variable(content: str, context: TagContext) -> dict[str, str]:
    name, _, value = content.partition(":")
    return {"name": squeeze(name), "value": squeeze(value)}


DEFAULT_HANDLERS: Mapping[TagKind, Handler] = {
    TagKind.CATEGORY: parse_text,
    TagKind.COMPONENT: parse_text,
    TagKind.NAME: parse_text,
    TagKind.DESCRIPTION: parse_text,
    TagKind.SECTION: parse_text,
    TagKind.VARIATION: parse_text,
    TagKind.HIDECODE: parse_text,
    TagKind.HTML: parse_example,
    TagKind.MARKUP: parse_example,
    TagKind.JS: parse_example,
    TagKind.REACT: parse_example,
    TagKind.TS: parse_example,
    TagKind.ANGULAR: parse_example,
    TagKind.ANGULARJS: parse_example,
    TagKind.SCSS: parse_example,
    TagKind.PROP: parse_prop,
    TagKind.STATE: parse_state,
    TagKind.PARAM: parse_param,
    TagKind.VARIABLE: parse_variable,
}


@dataclass(frozen=True)
class TagRegistry:
    """Handlers for each tag kind plus the predicate that spots tag lines."""

    handlers: Mapping[TagKind, Handler] = field(default_factory=lambda: dict(DEFAULT_HANDLERS))
    detector: Detector = default_detector

    def detect(self, line: str) -> bool:
        return self.detector(line)

    def handler_for(self, kind: TagKind) -> Handler | None:
        return self.handlers.get(kind)

    def with_handler(self, kind: TagKind, handler: Handler) -> "TagRegistry":
        """Return a registry with one handler replaced."""
        return replace(self, handlers={**self.handlers, kind: handler})

    def with_detector(self, detector: Detector) -> "TagRegistry":
        return replace(self, detector=detector)


def default_registry() -> TagRegistry:
    return TagRegistry()


# -- block parsing ------------------------------------------------------------


def tag_name(line: str) -> str:
    """Name of the tag on a line: the token after the first `@`."""
    text = normalize(line)
    at = text.find("@")
    if at < 0:
        return ""
    match = _TAG_NAME_RE.match(text, at + 1)
    return match.group(0) if match else ""


def _strip_star(line: str) -> str:
    pos = line.find("*")
    if 0 <= pos < _STAR_WINDOW:
        line = line[pos + 1 :]
        if line.startswith(" "):
            line = line[1:]
    return line


def read_tag(lines: list[str], index: int) -> Tag | None:
    """Read the tag starting at lines[index], including its continuation lines.

    The tag runs until the next line that starts with `@` once comment
    decoration is stripped, or until the end of the block.
    """
    name = tag_name(lines[index])
    if not name:
        return None
    marker = f"@{name}"

    end = index + 1
    while end < len(lines) and not normalize(lines[end]).startswith("@"):
        end += 1

    kept: list[str] = []
    for offset, raw in enumerate(lines[index:end]):
        if offset == 0:
            raw = raw.replace(marker, "", 1)
        text = _strip_star(raw).rstrip()
        if offset == 0:
            text = text.strip()
        if text and marker not in text:
            kept.append(text)
    return Tag(name=name, content="\n".join(kept), start=index, end=end - 1)


def parse_block(
    block: CommentBlock,
    registry: TagRegistry | None = None,
    *,
    options: dict[str, Any] | None = None,
) -> Fragment:
    """Run every recognised tag of a block through its handler."""
    registry = registry or default_registry()
    options = options or {}
    lines = [line for line in block.text.split("\n") if normalize(line)]
    block_span = BlockSpan(contents="\n".join(lines), start=block.start_line, end=block.end_line)

    fragment = Fragment(file=block.file, start_line=block.start_line, end_line=block.end_line)
    for index, line in enumerate(lines):
        if not registry.detect(line):
            continue
        name = tag_name(line)
        kind = TagKind.lookup(name)
        handler = registry.handler_for(kind) if kind is not None else None
        if kind is None or handler is None:
            if name:
                logger.debug("{}:{}: ignoring unknown tag @{}", block.file, block.start_line, name)
            continue
        tag = read_tag(lines, index)
        if tag is None:
            continue
        context = TagContext(
            name=name,
            line=LineSpan(contents=tag.content, start=tag.start, end=tag.end),
            block=block_span,
            file=block.file,
            options=options,
        )
        fragment.add(kind, handler(tag.content, context))
    return fragment


def parse_source(
    text: str,
    *,
    file: str = "",
    registry: TagRegistry | None = None,
    options: dict[str, Any] | None = None,
) -> list[Fragment]:
    """Extract and parse all comment blocks of one file.

    Blocks without any recognised tag are dropped.
    """
    registry = registry or default_registry()
    blocks = extract_blocks(text, file=file)
    fragments = [parse_block(b, registry, options=options) for b in blocks]
    kept = [f for f in fragments if f]
    if len(kept) != len(blocks):
        logger.debug(
            "{}: {} of {} comment blocks carry no tags", file, len(blocks) - len(kept), len(blocks)
        )
    return kept
