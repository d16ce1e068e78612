"""Protocols for dependency injection in the build pipeline."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class WriterProtocol(Protocol):
    """Protocol for writers receiving the compiled documentation."""

    def make_data_file(
        self,
        fname_rel: str,
        *,
        contents: str | None = None,
        data: Any = None,
    ) -> None:
        """Write a file to the output directory."""
        ...

    def finalize(self) -> str:
        """Report what was written."""
        ...
