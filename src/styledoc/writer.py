"""Output writer that only touches files whose contents changed."""

import json
import os
from pathlib import Path
from typing import Any

from loguru import logger


class FileWriter:
    """Write output files in a smart way.

    - Do not override files if contents are the same.
    - Keep a list of written files and report what changed in finalize().

    Key order of written JSON is preserved, since the documentation tree
    encodes page order in it.
    """

    def __init__(self, outdir: str | Path, dry_run: bool) -> None:
        self.outdir = str(Path(outdir).resolve())
        self.dry_run = dry_run

        if not dry_run and not Path(self.outdir).is_dir():
            msg = f"Output directory {self.outdir!r} not found"
            raise ValueError(msg)

        logger.debug("Writer ready, outdir {!r}, dry_run {!r}", outdir, dry_run)
        # Absolute paths written this session.
        self._files_made: set[str] = set()

        # list of (action, filename) tuples
        self._updates: list[tuple[str, str]] = []

        self._num_same = 0
        self._num_changed = 0
        self._finalized = False

    def is_possible_output(self, fname: str) -> bool:
        """Check if a file is a possible output file."""
        return fname.endswith(".json")

    def _resolve(self, fname_rel: str) -> str:
        if Path(fname_rel).is_absolute():
            msg = f"must be relative: {fname_rel!r}"
            raise ValueError(msg)
        fname = os.path.normpath(Path(self.outdir) / fname_rel)
        if not fname.startswith(self.outdir + "/"):
            msg = f"Path escapes outdir: {fname!r}"
            raise ValueError(msg)
        return fname

    def make_data_file(
        self,
        fname_rel: str,
        *,
        contents: str | None = None,
        data: Any = None,
    ) -> None:
        """Write contents to a file relative to the output directory.

        Args:
            fname_rel: Path relative to output directory.
            contents: String contents to write. If None, serialize data to json.
            data: Data to serialize as json. Mutually exclusive with contents.
        """
        if contents is None:
            contents = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
        elif data is not None:
            msg = "Cannot specify both contents and data"
            raise ValueError(msg)

        fname = self._resolve(fname_rel)
        if not self.is_possible_output(fname):
            msg = f"Wanted to write {fname!r} but is_possible_output() returns False"
            raise ValueError(msg)

        self._files_made.add(fname)
        action = "create"
        try:
            with open(fname, encoding="utf-8") as f:
                if f.read() == contents:
                    self._num_same += 1
                    return
            self._num_changed += 1
            action = "update"
        except (FileNotFoundError, UnicodeDecodeError):
            pass

        self._updates.append((action, fname))

        if self.dry_run:
            logger.info("dry-run: would {} {!r}", action, fname)
        else:
            logger.debug("Writing ({}) {!r}", action, fname)
            Path(fname).parent.mkdir(parents=True, exist_ok=True)
            with open(fname, "w", encoding="utf-8") as f:
                f.write(contents)

    def finalize(self) -> str:
        """Log update statistics and return a one-line summary."""
        if self._finalized:
            msg = "finalize() called twice"
            raise RuntimeError(msg)
        self._finalized = True

        num_new = len(self._files_made) - self._num_same - self._num_changed
        summary = (
            f"Outputs: {self._num_same} same, {self._num_changed} changed, {num_new} new"
        )
        if self._num_same == len(self._files_made):
            logger.debug(summary)
        else:
            logger.info(summary)
        for action, fname in sorted(self._updates):
            logger.debug("{} {}", action, fname)
        return summary
