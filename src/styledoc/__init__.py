"""Style-guide documentation extracted from source comments."""

from styledoc.core.extract.blocks import extract_blocks, normalize
from styledoc.core.extract.tags import TagRegistry, default_registry, parse_block, parse_source
from styledoc.core.tree.builder import build_document_tree
from styledoc.core.tree.navigation import filter_navigation, merge_navigation
from styledoc.pipeline import compile_docs, run_build
from styledoc.writer import FileWriter

__all__ = [
    "FileWriter",
    "TagRegistry",
    "build_document_tree",
    "compile_docs",
    "default_registry",
    "extract_blocks",
    "filter_navigation",
    "merge_navigation",
    "normalize",
    "parse_block",
    "parse_source",
    "run_build",
]
