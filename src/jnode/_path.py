"""Path resolution and rendering shared by the projector and mutation engine."""

from __future__ import annotations

import json
from dataclasses import dataclass

from jnode._types import Path, Segment
from jnode.errors import PathNotFoundError

_MISSING = object()


def _step(current: object, segment: Segment) -> object:
    """Index *current* by *segment*, returning _MISSING when absent."""
    if isinstance(current, dict):
        if isinstance(segment, str) and segment in current:
            return current[segment]
    elif isinstance(current, list):
        if isinstance(segment, int) and not isinstance(segment, bool):
            if 0 <= segment < len(current):
                return current[segment]
    return _MISSING


def _walk(data: object, segments: Path) -> object:
    current = data
    for position, segment in enumerate(segments):
        current = _step(current, segment)
        if current is _MISSING:
            raise PathNotFoundError(segment, position)
    return current


@dataclass
class ParentRef:
    """The container holding a path's final slot, and that slot's key."""

    container: object
    key: Segment
    position: int

    def assign(self, value: object) -> None:
        """Overwrite the slot with *value*."""
        if isinstance(self.container, dict) and isinstance(self.key, str):
            self.container[self.key] = value
            return
        if (
            isinstance(self.container, list)
            and isinstance(self.key, int)
            and not isinstance(self.key, bool)
            and 0 <= self.key < len(self.container)
        ):
            self.container[self.key] = value
            return
        raise PathNotFoundError(self.key, self.position)


def resolve_target(data: object, path: Path) -> object:
    """Return the value at *path*; raise PathNotFoundError if any segment is absent."""
    return _walk(data, tuple(path))


def resolve_parent(data: object, path: Path) -> ParentRef:
    """Return the parent container of *path*'s final slot.

    The root path has no parent; callers replace the whole document instead.
    """
    path = tuple(path)
    if not path:
        raise ValueError("root path has no parent")
    parent = _walk(data, path[:-1])
    return ParentRef(parent, path[-1], len(path) - 1)


def path_to_display_string(path: Path | None) -> str:
    """Render a path as $["key"][0]...; the root is $."""
    if not path:
        return "$"
    parts = ["$"]
    for segment in path:
        if isinstance(segment, int) and not isinstance(segment, bool):
            parts.append(f"[{segment}]")
        else:
            parts.append(f"[{json.dumps(segment, ensure_ascii=False)}]")
    return "".join(parts)
