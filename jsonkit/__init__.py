"""
jsonkit - Structural JSON Diff and Schema Validation

Two side-effect-free engines over plain JSON values: a positional,
path-addressed diff that returns a forest of change records, and a
JSON-Schema-like validator that reports every violation with its location.
"""

from .engine import (
    DiffEngine,
    compare,
    changed_paths,
    filter_changes,
    highlight_paths,
)
from .schema import SchemaValidator, SchemaChecker, validate
from .models import (
    MISSING,
    Change,
    ChangeKind,
    DiffConfig,
    DiffReport,
    JsonType,
    LogLevel,
    ValidationError,
    ValidationResult,
    ValidatorConfig,
)
from .exceptions import (
    JsonKitError,
    InvalidInputError,
    DocumentLoadError,
    MaxDepthExceededError,
)
from .loader import load_document, load_text
from .utils import format_value, json_type_of

__version__ = "1.0.0"
__all__ = [
    # Diff
    "DiffEngine",
    "DiffConfig",
    "DiffReport",
    "Change",
    "ChangeKind",
    "compare",
    "changed_paths",
    "filter_changes",
    "highlight_paths",
    # Validation
    "SchemaValidator",
    "SchemaChecker",
    "ValidatorConfig",
    "ValidationError",
    "ValidationResult",
    "validate",
    # Values
    "MISSING",
    "JsonType",
    "json_type_of",
    "format_value",
    "LogLevel",
    # Loading
    "load_document",
    "load_text",
    # Errors
    "JsonKitError",
    "InvalidInputError",
    "DocumentLoadError",
    "MaxDepthExceededError",
]
