"""Diff engine facade and change-set helpers for jsonkit."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from .models import (
    Change,
    ChangeKind,
    DiffConfig,
    DiffReport,
    ExecutionInfo,
    Summary,
)
from .differ import Differ
from .exceptions import InvalidInputError
from .jsonpath_utils import JSONPathMatcher
from .utils import apply_log_level

logger = logging.getLogger(__name__)


class DiffEngine:
    """
    Compares two JSON documents and returns a path-addressed change set.

    The engine is stateless between calls: every compare builds a fresh
    Differ and the result shares nothing with either input besides the
    leaf values it reports.
    """

    VERSION = "1.0.0"

    def __init__(self, config: Optional[DiffConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Engine configuration (uses defaults if not provided)
        """
        self.config = config or DiffConfig()
        apply_log_level(self.config.log_level)

    def compare(self, old_json: Any, new_json: Any) -> list[Change]:
        """
        Compare two JSON values.

        Args:
            old_json: The baseline document
            new_json: The document to compare against it

        Returns:
            Ordered forest of top-level changes
        """
        differ = Differ(max_depth=self.config.max_depth)
        changes = differ.diff(old_json, new_json)

        if self.config.ignore_paths:
            changes = filter_changes(
                changes, self.config.ignore_paths, old_json, new_json
            )

        logger.debug("Compared documents: %d top-level changes", len(changes))
        return changes

    def report(self, old_json: Any, new_json: Any) -> DiffReport:
        """Compare two JSON values and wrap the result with summary and timing."""
        start_time = time.time()
        changes = self.compare(old_json, new_json)
        duration_ms = int((time.time() - start_time) * 1000)

        summary = Summary()
        for change in changes:
            if change.kind == ChangeKind.ADDED:
                summary.added += 1
            elif change.kind == ChangeKind.REMOVED:
                summary.removed += 1
            elif change.kind == ChangeKind.MODIFIED:
                summary.modified += 1

        return DiffReport(
            changes=changes,
            summary=summary,
            execution=ExecutionInfo(
                duration_ms=duration_ms,
                timestamp=datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
                engine_version=self.VERSION,
            ),
        )


def filter_changes(
    changes: list[Change],
    ignore_paths: Iterable[str],
    old_json: Any,
    new_json: Any
) -> list[Change]:
    """
    Drop changes located at any node the ignore patterns select.

    Patterns are JSONPath expressions evaluated against both documents, so a
    pattern reaches added nodes through the new document and removed nodes
    through the old one. Children are filtered too; a parent left without any
    children is dropped.

    Raises:
        InvalidInputError: If a pattern is not a valid JSONPath expression
    """
    patterns = list(ignore_paths)
    try:
        ignored = JSONPathMatcher.resolve((old_json, new_json), patterns)
    except ValueError as e:
        raise InvalidInputError(str(e), {"ignore_paths": patterns})
    return _drop_paths(changes, ignored)


def _drop_paths(changes: list[Change], ignored: set[str]) -> list[Change]:
    kept: list[Change] = []

    for change in changes:
        if change.path in ignored:
            continue
        if change.children:
            children = _drop_paths(change.children, ignored)
            if not children:
                continue
            change = Change(
                kind=change.kind,
                key=change.key,
                path=change.path,
                old_value=change.old_value,
                new_value=change.new_value,
                children=children,
            )
        kept.append(change)

    return kept


def changed_paths(changes: Iterable[Change]) -> list[str]:
    """Collect every path in a change forest, pre-order, without duplicates."""
    seen: dict[str, None] = {}

    def walk(items: Iterable[Change]):
        for change in items:
            seen.setdefault(change.path, None)
            if change.children:
                walk(change.children)

    walk(changes)
    return list(seen)


def highlight_paths(changes: Iterable[Change], side: str) -> set[str]:
    """
    Top-level paths to highlight on one side of a side-by-side diff view.

    Args:
        changes: Result of a compare
        side: 'old' (removed and modified) or 'new' (added and modified)
    """
    if side == "old":
        kinds = (ChangeKind.REMOVED, ChangeKind.MODIFIED)
    elif side == "new":
        kinds = (ChangeKind.ADDED, ChangeKind.MODIFIED)
    else:
        raise InvalidInputError("side must be 'old' or 'new'", {"side": side})
    return {c.path for c in changes if c.kind in kinds}


def compare(
    old_json: Any,
    new_json: Any,
    config: Optional[DiffConfig] = None
) -> list[Change]:
    """
    Convenience function to compare two JSON values.

    Args:
        old_json: The baseline document
        new_json: The document to compare against it
        config: Optional engine configuration

    Returns:
        Ordered forest of top-level changes
    """
    engine = DiffEngine(config)
    return engine.compare(old_json, new_json)
