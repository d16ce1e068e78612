"""End-to-end documentation build: sources -> tree -> navigation -> JSON."""

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from loguru import logger

from styledoc.config import DEFAULT_CATEGORY, DEFAULT_OUTPUT_FILENAME, DEFAULT_PROP_LIBRARY
from styledoc.core.importer.loader import expand_patterns, load_fragments
from styledoc.core.tree.builder import build_document_tree
from styledoc.core.tree.navigation import filter_navigation, merge_navigation
from styledoc.models.block import Fragment
from styledoc.protocols import WriterProtocol


def compile_docs(
    fragments: Iterable[Fragment],
    navigation: dict[str, Any] | None = None,
    *,
    apply_filter: bool = True,
    default_category: str = DEFAULT_CATEGORY,
) -> dict[str, Any]:
    """Build the document tree and overlay it on the navigation template.

    Without a template the serialized document tree is returned as is. An
    input set without any documented component yields an empty result.
    """
    tree = build_document_tree(fragments, default_category=default_category)
    if tree.is_empty():
        logger.warning("No documented components found, nothing to document")
        return {}

    if navigation is None:
        return tree.to_dict()

    merged = merge_navigation(navigation, tree)
    return filter_navigation(merged) if apply_filter else merged


def run_build(
    writer: WriterProtocol,
    patterns: Iterable[str],
    *,
    navigation: dict[str, Any] | None = None,
    filename: str = DEFAULT_OUTPUT_FILENAME,
    apply_filter: bool = True,
    base_dir: Path | None = None,
    workers: int = 1,
    prop_library: str = DEFAULT_PROP_LIBRARY,
) -> dict[str, Any]:
    """Execute the build pipeline and write the result.

    Args:
        writer: Writer for the output directory.
        patterns: Glob patterns selecting the annotated source files.
        navigation: Navigation template; the bare document tree is written when None.
        filename: Output file name, relative to the writer's directory.
        apply_filter: If False, keep navigation entries without examples.
        base_dir: Directory the patterns are relative to (cwd when None).
        workers: Number of files extracted in parallel.
        prop_library: UI library that @prop entries are grouped under.

    Returns:
        The compiled documentation that was written.
    """
    paths = expand_patterns(patterns, base_dir=base_dir)
    fragments, _stats = load_fragments(
        paths, options={"prop_library": prop_library}, workers=workers
    )
    docs = compile_docs(fragments, navigation, apply_filter=apply_filter)

    writer.make_data_file(filename, data=docs)
    writer.finalize()
    return docs
