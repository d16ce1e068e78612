"""Read source files and extract their fragments in canonical order."""

import glob
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from loguru import logger

from styledoc.core.extract.tags import TagRegistry, parse_source
from styledoc.models.block import Fragment


@dataclass(frozen=True)
class ExtractStats:
    """Summary of an extraction run."""

    files_read: int
    files_skipped: int
    fragments: int


def expand_patterns(patterns: Iterable[str], *, base_dir: Path | None = None) -> list[Path]:
    """Expand glob patterns into a de-duplicated list of files.

    Files keep pattern order; matches of a single pattern are sorted so runs
    are reproducible.
    """
    root = base_dir or Path.cwd()
    seen: set[Path] = set()
    result: list[Path] = []
    for pattern in patterns:
        matches = sorted(glob.glob(pattern, root_dir=root, recursive=True))
        if not matches:
            logger.debug("Pattern {!r} matched no files", pattern)
        for match in matches:
            path = root / match
            if path in seen or not path.is_file():
                continue
            seen.add(path)
            result.append(path)
    return result


def _extract_file(
    path: Path, registry: TagRegistry | None, options: dict[str, Any] | None
) -> list[Fragment] | None:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        logger.warning("Skipping {}: not valid UTF-8", path)
        return None
    fragments = parse_source(text, file=str(path), registry=registry, options=options)
    logger.debug("{}: {} documented blocks", path, len(fragments))
    return fragments


def load_fragments(
    paths: Iterable[Path],
    *,
    registry: TagRegistry | None = None,
    options: dict[str, Any] | None = None,
    workers: int = 1,
) -> tuple[list[Fragment], ExtractStats]:
    """Extract fragments from files, in file order then block order.

    Args:
        paths: Source files, in the order their fragments should be folded.
        registry: Tag registry; the default one when None.
        options: Passed through to tag handlers.
        workers: Files extracted in parallel; results keep input order.

    Returns:
        Tuple of (fragments, ExtractStats).
    """
    paths = list(paths)
    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            per_file = list(pool.map(lambda p: _extract_file(p, registry, options), paths))
    else:
        per_file = [_extract_file(p, registry, options) for p in paths]

    fragments: list[Fragment] = []
    skipped = 0
    for found in per_file:
        if found is None:
            skipped += 1
            continue
        fragments.extend(found)

    stats = ExtractStats(
        files_read=len(paths) - skipped,
        files_skipped=skipped,
        fragments=len(fragments),
    )
    logger.info(
        "Extraction complete: {} files read, {} skipped, {} documented blocks",
        stats.files_read, stats.files_skipped, stats.fragments,
    )
    return fragments, stats
