"""Structural, path-addressed diffing of JSON documents."""

from __future__ import annotations

from typing import Any, Optional

from .models import Change, ChangeKind, JsonType
from .exceptions import MaxDepthExceededError
from .utils import Segment, build_path, default_max_depth, json_type_of, segment_label


class Differ:
    """
    Performs positional deep comparison of two JSON values.

    Handles:
    - Added/removed values (None on either side)
    - Type changes (reported as a full replace, no recursion)
    - Arrays compared index-by-index
    - Objects compared over the union of their keys
    """

    def __init__(self, max_depth: Optional[int] = None):
        self.max_depth = default_max_depth() if max_depth is None else max_depth

    def diff(
        self,
        old: Any,
        new: Any,
        segments: tuple[Segment, ...] = (),
    ) -> list[Change]:
        """
        Compare two values and return the forest of top-level changes.

        Args:
            old: The old/baseline value
            new: The new value
            segments: Location of both values within their documents

        Returns:
            Ordered list of changes; empty when the values are equal
        """
        if len(segments) > self.max_depth:
            raise MaxDepthExceededError(self.max_depth, build_path(segments))

        if old is None and new is None:
            return []

        if old is None:
            return [self._change(ChangeKind.ADDED, segments, new_value=new)]

        if new is None:
            return [self._change(ChangeKind.REMOVED, segments, old_value=old)]

        old_type = json_type_of(old)
        new_type = json_type_of(new)

        if old_type != new_type:
            return [self._change(ChangeKind.MODIFIED, segments, old, new)]

        if old_type == JsonType.ARRAY:
            return self._diff_arrays(old, new, segments)
        elif old_type == JsonType.OBJECT:
            return self._diff_objects(old, new, segments)
        else:
            return self._diff_scalars(old, new, segments)

    def _diff_scalars(
        self,
        old: Any,
        new: Any,
        segments: tuple[Segment, ...],
    ) -> list[Change]:
        """Compare two primitives of the same JSON type."""
        if old == new:
            return []
        return [self._change(ChangeKind.MODIFIED, segments, old, new)]

    def _diff_arrays(
        self,
        old: list,
        new: list,
        segments: tuple[Segment, ...],
    ) -> list[Change]:
        """Compare arrays index-by-index (order matters, no alignment)."""
        changes: list[Change] = []

        for i in range(max(len(old), len(new))):
            child = segments + (i,)

            if i >= len(old):
                changes.append(self._change(ChangeKind.ADDED, child, new_value=new[i]))
            elif i >= len(new):
                changes.append(self._change(ChangeKind.REMOVED, child, old_value=old[i]))
            else:
                changes.extend(self.diff(old[i], new[i], child))

        return changes

    def _diff_objects(
        self,
        old: dict,
        new: dict,
        segments: tuple[Segment, ...],
    ) -> list[Change]:
        """Compare two objects over the union of their keys."""
        changes: list[Change] = []
        # Old keys first, then keys only present in new
        all_keys = list(old.keys()) + [k for k in new.keys() if k not in old]

        for key in all_keys:
            child = segments + (key,)

            if key not in old:
                changes.append(self._change(ChangeKind.ADDED, child, new_value=new[key]))
                continue

            if key not in new:
                changes.append(self._change(ChangeKind.REMOVED, child, old_value=old[key]))
                continue

            nested = self.diff(old[key], new[key], child)
            if not any(c.kind != ChangeKind.UNCHANGED for c in nested):
                continue

            modified = self._change(ChangeKind.MODIFIED, child, old[key], new[key])
            if self._both_containers(old[key], new[key]):
                modified.children = nested
            changes.append(modified)

        return changes

    @staticmethod
    def _both_containers(old: Any, new: Any) -> bool:
        old_type = json_type_of(old)
        return old_type.is_container and old_type == json_type_of(new)

    @staticmethod
    def _change(
        kind: ChangeKind,
        segments: tuple[Segment, ...],
        old_value: Any = None,
        new_value: Any = None,
    ) -> Change:
        """Build a change record; only the values the kind carries are kept."""
        change = Change(
            kind=kind,
            key=segment_label(segments[-1]) if segments else "",
            path=build_path(segments),
        )
        if kind in (ChangeKind.REMOVED, ChangeKind.MODIFIED):
            change.old_value = old_value
        if kind in (ChangeKind.ADDED, ChangeKind.MODIFIED):
            change.new_value = new_value
        return change
