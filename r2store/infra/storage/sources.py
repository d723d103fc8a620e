"""Readable content sources accepted by upload operations.

An upload reads from either a local file or a caller-owned binary stream.
Both are exposed through the same ``open()`` context manager so the client
has a single upload path.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import IO, ContextManager, Iterator, Protocol, Union, runtime_checkable


@runtime_checkable
class ContentSource(Protocol):
    """Something that can be opened for binary reading."""

    def open(self) -> ContextManager[IO[bytes]]:
        """Yield a readable binary file object."""
        ...

    def describe(self) -> str:
        """Short label used in log records."""
        ...


@dataclass(frozen=True, slots=True)
class FileSource:
    """Content read from a local file, opened and closed per upload."""

    path: Path

    @contextmanager
    def open(self) -> Iterator[IO[bytes]]:
        with self.path.open("rb") as handle:
            yield handle

    def describe(self) -> str:
        return f"file:{self.path}"


@dataclass(frozen=True, slots=True)
class StreamSource:
    """Content read from a caller-owned stream; the stream is left open."""

    stream: IO[bytes]

    @contextmanager
    def open(self) -> Iterator[IO[bytes]]:
        yield self.stream

    def describe(self) -> str:
        return f"stream:{type(self.stream).__name__}"


SourceArg = Union[str, "os.PathLike[str]", IO[bytes], ContentSource]


def as_content_source(source: SourceArg | None, *, name: str = "source") -> ContentSource:
    """Coerce a path, stream, or ``ContentSource`` into a ``ContentSource``.

    Raises:
        ValueError: If ``source`` is None, an empty path, or not readable.
    """
    if source is None:
        raise ValueError(f"{name} is required")
    if isinstance(source, (FileSource, StreamSource)):
        return source
    if isinstance(source, (str, os.PathLike)):
        raw = os.fspath(source)
        if not raw:
            raise ValueError(f"{name} must be a non-empty path")
        return FileSource(Path(raw))
    if callable(getattr(source, "read", None)):
        return StreamSource(source)  # type: ignore[arg-type]
    if isinstance(source, ContentSource):
        return source
    raise ValueError(f"{name} must be a file path or a readable binary stream")
