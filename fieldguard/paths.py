"""Dot-path access into nested documents.

The engine only needs two operations from its host: read a value at a
dot-separated path, and write one, creating intermediate mappings. Any object
implementing PathAccessor can be handed to ValidationEngine; DotPathAccessor
is the default.
"""

from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from typing import Any, Protocol

from fieldguard.exceptions import MalformedPathError


class _NotFound:
    """Sentinel returned by PathAccessor.read for a missing location."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __bool__(self) -> bool:
        return False


NOT_FOUND = _NotFound()


class PathAccessor(Protocol):
    def read(self, document: Any, path: str) -> Any:
        """Return the value at path, or NOT_FOUND."""
        ...

    def write(self, document: MutableMapping, path: str, value: Any) -> None:
        """Store value at path. Raises MalformedPathError when impossible."""
        ...


def split_path(path: str) -> list[str]:
    """Split a dot path into segments, rejecting empty ones.

    Raises:
        MalformedPathError: for empty paths or empty segments ("a..b", ".a")
    """
    if not isinstance(path, str) or not path:
        raise MalformedPathError(str(path), "empty field path")
    segments = path.split(".")
    if any(not s or s != s.strip() for s in segments):
        raise MalformedPathError(path, "empty or padded path segment")
    return segments


def _index(segment: str, container: Sequence) -> int:
    if not segment.isdecimal():
        return -1
    idx = int(segment)
    return idx if idx < len(container) else -1


class DotPathAccessor:
    """Reads and writes nested mappings, indexing sequences by numeric segment."""

    def read(self, document: Any, path: str) -> Any:
        current = document
        for segment in split_path(path):
            if isinstance(current, Mapping):
                if segment not in current:
                    return NOT_FOUND
                current = current[segment]
            elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
                idx = _index(segment, current)
                if idx < 0:
                    return NOT_FOUND
                current = current[idx]
            else:
                return NOT_FOUND
        return current

    def write(self, document: MutableMapping, path: str, value: Any) -> None:
        segments = split_path(path)
        current: Any = document
        for depth, segment in enumerate(segments[:-1]):
            if isinstance(current, MutableMapping):
                nxt = current.get(segment)
                if nxt is None:
                    nxt = current[segment] = {}
            elif isinstance(current, MutableSequence):
                idx = _index(segment, current)
                if idx < 0:
                    raise MalformedPathError(path, f"no sequence item at {segment!r}")
                nxt = current[idx]
            else:
                raise MalformedPathError(
                    path, f"cannot descend into {type(current).__name__} at "
                          f"{'.'.join(segments[:depth]) or '<root>'}"
                )
            current = nxt

        last = segments[-1]
        if isinstance(current, MutableMapping):
            current[last] = value
        elif isinstance(current, MutableSequence) and _index(last, current) >= 0:
            current[int(last)] = value
        else:
            raise MalformedPathError(path, f"cannot write into {type(current).__name__}")


default_accessor = DotPathAccessor()
