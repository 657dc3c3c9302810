"""Data models for jsonkit."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class _Missing:
    """Marker for a value that is absent, as opposed to JSON null."""

    _instance: Optional["_Missing"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "MISSING"

    def __bool__(self):
        return False


MISSING = _Missing()


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class JsonType(Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"

    @property
    def is_container(self) -> bool:
        return self in (JsonType.ARRAY, JsonType.OBJECT)


class ChangeKind(Enum):
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    UNCHANGED = "unchanged"


@dataclass
class DiffConfig:
    """Configuration for the diff engine."""
    max_depth: Optional[int] = None  # None: derived from the recursion limit
    ignore_paths: list[str] = field(default_factory=list)
    log_level: Optional[LogLevel] = None


@dataclass
class ValidatorConfig:
    """Configuration for the schema validator."""
    max_depth: Optional[int] = None  # None: derived from the recursion limit
    strict_integers: bool = False
    log_level: Optional[LogLevel] = None


@dataclass
class Change:
    """A single add/remove/modify record found during comparison."""
    kind: ChangeKind
    key: str
    path: str
    old_value: Any = MISSING
    new_value: Any = MISSING
    children: Optional[list[Change]] = None

    @property
    def has_old(self) -> bool:
        return self.old_value is not MISSING

    @property
    def has_new(self) -> bool:
        return self.new_value is not MISSING

    def to_dict(self) -> dict:
        result = {
            "type": self.kind.value,
            "key": self.key,
            "path": self.path,
        }
        if self.has_old:
            result["oldValue"] = self.old_value
        if self.has_new:
            result["newValue"] = self.new_value
        if self.children:
            result["children"] = [c.to_dict() for c in self.children]
        return result


@dataclass
class ValidationError:
    """A single schema constraint violation."""
    path: str
    message: str
    schema_path: Optional[str] = None

    def to_dict(self) -> dict:
        result = {
            "path": self.path,
            "message": self.message,
        }
        if self.schema_path is not None:
            result["schemaPath"] = self.schema_path
        return result


@dataclass
class ValidationResult:
    """Outcome of validating one document against one schema."""
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "errors": [e.to_dict() for e in self.errors],
        }


@dataclass
class ExecutionInfo:
    """Execution metadata."""
    duration_ms: int
    timestamp: str
    engine_version: str = "1.0.0"

    def to_dict(self) -> dict:
        return {
            "duration_ms": self.duration_ms,
            "timestamp": self.timestamp,
            "engine_version": self.engine_version,
        }


@dataclass
class Summary:
    """Counts of top-level changes by kind."""
    added: int = 0
    removed: int = 0
    modified: int = 0

    @property
    def total(self) -> int:
        return self.added + self.removed + self.modified

    def to_dict(self) -> dict:
        return {
            "added": self.added,
            "removed": self.removed,
            "modified": self.modified,
            "total": self.total,
        }


@dataclass
class DiffReport:
    """Complete comparison report."""
    changes: list[Change]
    summary: Summary
    execution: ExecutionInfo

    @property
    def is_identical(self) -> bool:
        return not self.changes

    def to_dict(self) -> dict:
        return {
            "is_identical": self.is_identical,
            "execution": self.execution.to_dict(),
            "summary": self.summary.to_dict(),
            "changes": [c.to_dict() for c in self.changes],
        }
