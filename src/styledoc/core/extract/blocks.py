"""Group comment lines of a source file into comment blocks.

The extractor reads a file one line at a time and keeps its position in an
explicit state machine, because a documented prop spans a doc comment plus the
declaration lines after it:

    /**
     * @prop Size of the button | 'md'
     */
    size: PropTypes.oneOf([
      'sm',
      'md',
    ]),

Declaration lines are appended to the block followed by a separator token so
the prop parser can tell them apart from the comment text.
"""

import re
from enum import Enum, auto

from loguru import logger

from styledoc.config import PROP_SEPARATOR
from styledoc.models.block import CommentBlock

_LINE_COMMENT_RE = re.compile(r"^\s*//")
_BLOCK_OPEN_RE = re.compile(r"^\s*/\*")
_BLOCK_OPEN_STRIP_RE = re.compile(r"\s*/\*")
_PROP_RE = re.compile(r"@prop\b")
_LEADING_RE = re.compile(r"^[\s*]+")

_SEPARATOR_LINE = f"\n {PROP_SEPARATOR} \n"


class ExtractorState(Enum):
    """Where the extractor is relative to comments and prop declarations.

    Attributes:
        IDLE: Outside any comment.
        LINE_COMMENT: Inside a run of `//` lines.
        BLOCK_COMMENT: Inside a `/* ... */` comment.
        BLOCK_COMMENT_PROP: Inside a `/* ... */` comment that declared a @prop.
        PROP_DECLARATION: After a prop comment, waiting for the declaration to end.
        PROP_OPTIONS: Inside a parenthesized option list of a prop declaration.
    """

    IDLE = auto()
    LINE_COMMENT = auto()
    BLOCK_COMMENT = auto()
    BLOCK_COMMENT_PROP = auto()
    PROP_DECLARATION = auto()
    PROP_OPTIONS = auto()


def normalize(text: str) -> str:
    """Strip the leading star/whitespace run and trailing whitespace of a block."""
    return _LEADING_RE.sub("", text).rstrip()


def strip_comment_markers(line: str) -> str:
    """Remove the `/*` opener and the `*/` closer from a comment line."""
    return _BLOCK_OPEN_STRIP_RE.sub("", line, count=1).replace("*/", "", 1)


def _is_line_comment(line: str) -> bool:
    return bool(_LINE_COMMENT_RE.match(line))


def _closes_block(line: str) -> bool:
    return not _is_line_comment(line) and "*/" in line


def _paren_balance(line: str) -> int:
    return line.count("(") - line.count(")")


class BlockExtractor:
    """Line-fed state machine producing CommentBlocks."""

    def __init__(self, *, file: str = "") -> None:
        self.file = file
        self.state = ExtractorState.IDLE
        self.blocks: list[CommentBlock] = []
        self._parts: list[str] = []
        self._start = 0
        self._depth = 0
        self._line_no = 0

    def feed(self, line: str) -> None:
        """Process the next line of the file."""
        self._line_no += 1
        self._dispatch(line)

    def finish(self) -> list[CommentBlock]:
        """Flush a block left open at end of input and return all blocks."""
        if self.state is not ExtractorState.IDLE:
            logger.debug(
                "{}: comment starting at line {} not closed at end of file",
                self.file or "<text>",
                self._start,
            )
            self._emit()
        return self.blocks

    def _dispatch(self, line: str) -> None:
        state = self.state
        if state is ExtractorState.IDLE:
            self._on_idle(line)
        elif state is ExtractorState.LINE_COMMENT:
            self._on_line_comment(line)
        elif state in (ExtractorState.BLOCK_COMMENT, ExtractorState.BLOCK_COMMENT_PROP):
            self._on_block_comment(line)
        elif state is ExtractorState.PROP_DECLARATION:
            self._on_prop_declaration(line)
        else:
            self._on_prop_options(line)

    def _on_idle(self, line: str) -> None:
        if _BLOCK_OPEN_RE.match(line):
            self._start = self._line_no
            self._parts = []
            self.state = ExtractorState.BLOCK_COMMENT
            self._on_block_comment(line, first=True)
        elif _is_line_comment(line):
            self._start = self._line_no
            self._parts = [_LINE_COMMENT_RE.sub("", line, count=1)]
            self.state = ExtractorState.LINE_COMMENT

    def _on_line_comment(self, line: str) -> None:
        if _is_line_comment(line):
            self._parts.append("\n" + _LINE_COMMENT_RE.sub("", line, count=1))
            return
        self._emit()
        self._on_idle(line)

    def _on_block_comment(self, line: str, *, first: bool = False) -> None:
        closes = _closes_block(line)
        # Code after `*/` on the closing line belongs to the prop declaration.
        comment, _, code = line.partition("*/") if closes else (line, "", "")
        text = strip_comment_markers(comment)
        self._parts.append(text if first else "\n" + text)
        if _PROP_RE.search(comment):
            self.state = ExtractorState.BLOCK_COMMENT_PROP
        if not closes:
            return
        if self.state is ExtractorState.BLOCK_COMMENT_PROP:
            self._parts.append(_SEPARATOR_LINE)
            self.state = ExtractorState.PROP_DECLARATION
            if code.strip():
                self._on_declaration_code(code)
        else:
            self._emit()

    def _on_prop_declaration(self, line: str) -> None:
        if _BLOCK_OPEN_RE.match(line):
            # Declaration never terminated; keep what we have and start over.
            self._emit()
            self._on_idle(line)
            return
        if line.strip().startswith("}"):
            # Enclosing object closed: the last declaration had no trailing comma.
            if self._parts and self._parts[-1] == _SEPARATOR_LINE:
                self._parts.pop()
            self._emit(end_line=self._line_no - 1)
            return
        self._on_declaration_code(line)

    def _on_declaration_code(self, code: str) -> None:
        self._parts.append(strip_comment_markers(code))
        balance = _paren_balance(code)
        if balance > 0:
            self._depth = balance
            self._parts.append(_SEPARATOR_LINE)
            self.state = ExtractorState.PROP_OPTIONS
        elif "," in code and not _is_line_comment(code):
            self._emit()
        else:
            self._parts.append(_SEPARATOR_LINE)

    def _on_prop_options(self, line: str) -> None:
        self._parts.append(line)
        self._depth += _paren_balance(line)
        if self._depth <= 0:
            self._emit()
        else:
            self._parts.append(_SEPARATOR_LINE)

    def _emit(self, *, end_line: int | None = None) -> None:
        text = normalize("".join(self._parts))
        if text:
            self.blocks.append(
                CommentBlock(
                    text=text,
                    start_line=self._start,
                    end_line=self._line_no if end_line is None else end_line,
                    file=self.file,
                )
            )
        self._parts = []
        self._depth = 0
        self.state = ExtractorState.IDLE


def extract_blocks(text: str, *, file: str = "") -> list[CommentBlock]:
    """Extract all comment blocks of a source file, in source order."""
    extractor = BlockExtractor(file=file)
    for line in text.split("\n"):
        extractor.feed(line.rstrip("\r"))
    return extractor.finish()
