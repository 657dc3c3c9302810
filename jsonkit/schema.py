"""Schema pre-checking and constraint validation for jsonkit."""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Optional

from .models import JsonType, ValidationError, ValidationResult, ValidatorConfig
from .formats import check_format, compile_pattern
from .utils import (
    Segment,
    apply_log_level,
    build_pointer,
    default_max_depth,
    is_integral,
    is_numeric,
    json_type_of,
    strict_equals,
    utf16_length,
)

logger = logging.getLogger(__name__)

VALID_TYPES = ('string', 'number', 'integer', 'boolean', 'null', 'object', 'array')


def _is_truthy(value: Any) -> bool:
    """JavaScript truthiness: empty objects and arrays count, 0 and NaN do not."""
    if isinstance(value, (dict, list)):
        return True
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def _format_number(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _format_type(value: Any) -> str:
    if isinstance(value, list):
        return ",".join(str(v) for v in value)
    return str(value)


class SchemaChecker:
    """Structural checks on a schema document before it is used."""

    @staticmethod
    def is_valid_type(type_decl: Any) -> bool:
        """Check a 'type' declaration: a known name or a list of known names."""
        if isinstance(type_decl, str):
            return type_decl in VALID_TYPES
        if isinstance(type_decl, list):
            return all(isinstance(t, str) and t in VALID_TYPES for t in type_decl)
        return False

    @classmethod
    def check(cls, schema: Any) -> Optional[ValidationError]:
        """
        Check that a schema is usable.

        Returns:
            None if the schema is usable, otherwise the defect found
        """
        if not isinstance(schema, dict):
            return ValidationError(path='/', message='Schema must be an object')

        type_decl = schema.get('type')
        if _is_truthy(type_decl) and not cls.is_valid_type(type_decl):
            return ValidationError(
                path='/type',
                message=f"Invalid type: {_format_type(type_decl)}"
            )

        return None


class SchemaValidator:
    """
    Validates a JSON value against a JSON-Schema-like document.

    Supported keywords:
    - type (single name or list; the type gate stops further checks)
    - required, properties, additionalProperties
    - minItems, maxItems, items (single schema or tuple)
    - minLength, maxLength, pattern, format
    - minimum, maximum, exclusiveMinimum, exclusiveMaximum, multipleOf
    - enum, const

    $ref is recognised but not resolved: a node carrying it is skipped.
    """

    def __init__(self, config: Optional[ValidatorConfig] = None):
        self.config = config or ValidatorConfig()
        apply_log_level(self.config.log_level)
        if self.config.max_depth is None:
            self.max_depth = default_max_depth()
        else:
            self.max_depth = self.config.max_depth

    def validate(self, data: Any, schema: Any) -> ValidationResult:
        """
        Validate data against a schema.

        Args:
            data: The JSON value to check
            schema: The schema document

        Returns:
            ValidationResult with every violation in document order
        """
        defect = SchemaChecker.check(schema)
        if defect is not None:
            logger.debug("Schema rejected: %s", defect.message)
            return ValidationResult(
                valid=False,
                errors=[ValidationError(
                    path='/',
                    message=f"Invalid JSON Schema: {defect.message}"
                )]
            )

        errors: list[ValidationError] = []
        self._validate_node(data, schema, (), errors)

        logger.debug("Validated document: %d errors", len(errors))
        return ValidationResult(valid=not errors, errors=errors)

    def _validate_node(
        self,
        value: Any,
        schema: Any,
        segments: tuple[Segment, ...],
        errors: list[ValidationError]
    ):
        """Recursively validate one value against one schema node."""
        if not isinstance(schema, dict):
            return

        if len(segments) > self.max_depth:
            self._add_error(
                errors,
                segments,
                f"Maximum depth ({self.max_depth}) exceeded",
                None
            )
            return

        if _is_truthy(schema.get('$ref')):
            return

        value_type = json_type_of(value)

        type_decl = schema.get('type')
        if _is_truthy(type_decl):
            allowed = type_decl if isinstance(type_decl, list) else [type_decl]
            if not self._type_matches(value, value_type, allowed):
                self._add_error(
                    errors,
                    segments,
                    f"Expected type {' or '.join(str(t) for t in allowed)}, got {value_type.value}",
                    '/type'
                )
                return

        if value_type == JsonType.OBJECT:
            self._validate_object(value, schema, segments, errors)
        elif value_type == JsonType.ARRAY:
            self._validate_array(value, schema, segments, errors)
        elif value_type == JsonType.STRING:
            self._validate_string(value, schema, segments, errors)
        elif value_type == JsonType.NUMBER:
            self._validate_number(value, schema, segments, errors)

        enum_values = schema.get('enum')
        if isinstance(enum_values, list):
            if not any(strict_equals(value, member) for member in enum_values):
                self._add_error(
                    errors,
                    segments,
                    "Value must be one of: " + ", ".join(
                        json.dumps(v) for v in enum_values
                    ),
                    '/enum'
                )

        if 'const' in schema and not strict_equals(value, schema['const']):
            self._add_error(
                errors,
                segments,
                f"Value must be {json.dumps(schema['const'])}",
                '/const'
            )

    def _type_matches(self, value: Any, value_type: JsonType, allowed: list) -> bool:
        """Check the runtime type of a value against the declared type names."""
        if value_type.value in allowed:
            return True
        if value_type == JsonType.NUMBER and 'integer' in allowed:
            # 'integer' only narrows 'number' when strict_integers is on
            return not self.config.strict_integers or is_integral(value)
        return False

    def _validate_object(
        self,
        obj: dict,
        schema: dict,
        segments: tuple[Segment, ...],
        errors: list[ValidationError]
    ):
        """Validate required, properties and additionalProperties."""
        properties = schema.get('properties')
        if not isinstance(properties, dict):
            properties = {}
        required = schema.get('required')
        if not isinstance(required, list):
            required = []

        for key in required:
            if isinstance(key, str) and key not in obj:
                self._add_error(
                    errors,
                    segments + (key,),
                    f'Required property "{key}" is missing',
                    '/required'
                )

        for key, item in obj.items():
            if key in properties:
                self._validate_node(item, properties[key], segments + (key,), errors)

        if schema.get('additionalProperties') is False:
            for key in obj:
                if key not in properties:
                    self._add_error(
                        errors,
                        segments + (key,),
                        f'Additional property "{key}" is not allowed',
                        '/additionalProperties'
                    )

    def _validate_array(
        self,
        arr: list,
        schema: dict,
        segments: tuple[Segment, ...],
        errors: list[ValidationError]
    ):
        """Validate minItems, maxItems and items."""
        min_items = schema.get('minItems')
        max_items = schema.get('maxItems')

        if is_numeric(min_items) and len(arr) < min_items:
            self._add_error(
                errors,
                segments,
                f"Array must have at least {_format_number(min_items)} items, got {len(arr)}",
                '/minItems'
            )

        if is_numeric(max_items) and len(arr) > max_items:
            self._add_error(
                errors,
                segments,
                f"Array must have at most {_format_number(max_items)} items, got {len(arr)}",
                '/maxItems'
            )

        items = schema.get('items')
        if isinstance(items, list):
            # Tuple mode: elements past the tuple length are not checked
            for index, (item, item_schema) in enumerate(zip(arr, items)):
                self._validate_node(item, item_schema, segments + (index,), errors)
        elif isinstance(items, dict):
            for index, item in enumerate(arr):
                self._validate_node(item, items, segments + (index,), errors)

    def _validate_string(
        self,
        text: str,
        schema: dict,
        segments: tuple[Segment, ...],
        errors: list[ValidationError]
    ):
        """Validate minLength, maxLength, pattern and format."""
        min_length = schema.get('minLength')
        max_length = schema.get('maxLength')
        pattern = schema.get('pattern')
        fmt = schema.get('format')
        length = utf16_length(text)

        if is_numeric(min_length) and length < min_length:
            self._add_error(
                errors,
                segments,
                f"String must be at least {_format_number(min_length)} characters long, got {length}",
                '/minLength'
            )

        if is_numeric(max_length) and length > max_length:
            self._add_error(
                errors,
                segments,
                f"String must be at most {_format_number(max_length)} characters long, got {length}",
                '/maxLength'
            )

        if isinstance(pattern, str) and pattern:
            try:
                regex = compile_pattern(pattern)
            except re.error:
                self._add_error(errors, segments, f"Invalid regex pattern: {pattern}", '/pattern')
            else:
                if not regex.search(text):
                    self._add_error(errors, segments, f"String must match pattern: {pattern}", '/pattern')

        if isinstance(fmt, str) and fmt:
            if not check_format(text, fmt):
                self._add_error(errors, segments, f"String must be a valid {fmt}", '/format')

    def _validate_number(
        self,
        num: int | float,
        schema: dict,
        segments: tuple[Segment, ...],
        errors: list[ValidationError]
    ):
        """Validate numeric bounds and multipleOf."""
        minimum = schema.get('minimum')
        maximum = schema.get('maximum')
        exclusive_minimum = schema.get('exclusiveMinimum')
        exclusive_maximum = schema.get('exclusiveMaximum')
        multiple_of = schema.get('multipleOf')
        shown = _format_number(num)

        if is_numeric(minimum) and num < minimum:
            self._add_error(
                errors,
                segments,
                f"Number must be >= {_format_number(minimum)}, got {shown}",
                '/minimum'
            )

        if is_numeric(maximum) and num > maximum:
            self._add_error(
                errors,
                segments,
                f"Number must be <= {_format_number(maximum)}, got {shown}",
                '/maximum'
            )

        if is_numeric(exclusive_minimum) and num <= exclusive_minimum:
            self._add_error(
                errors,
                segments,
                f"Number must be > {_format_number(exclusive_minimum)}, got {shown}",
                '/exclusiveMinimum'
            )

        if is_numeric(exclusive_maximum) and num >= exclusive_maximum:
            self._add_error(
                errors,
                segments,
                f"Number must be < {_format_number(exclusive_maximum)}, got {shown}",
                '/exclusiveMaximum'
            )

        if is_numeric(multiple_of):
            try:
                remainder = math.fmod(num, multiple_of)
            except (ValueError, OverflowError):
                # Zero divisor, infinite value or an int beyond float range
                remainder = math.nan
            if remainder != 0:
                self._add_error(
                    errors,
                    segments,
                    f"Number must be a multiple of {_format_number(multiple_of)}, got {shown}",
                    '/multipleOf'
                )

    def _add_error(
        self,
        errors: list[ValidationError],
        segments: tuple[Segment, ...],
        message: str,
        schema_path: Optional[str]
    ):
        """Add a validation error."""
        errors.append(ValidationError(
            path=build_pointer(segments),
            message=message,
            schema_path=schema_path
        ))


def validate(
    data: Any,
    schema: Any,
    config: Optional[ValidatorConfig] = None
) -> ValidationResult:
    """
    Convenience function to validate a JSON value against a schema.

    Args:
        data: The JSON value to check
        schema: The schema document
        config: Optional validator configuration

    Returns:
        ValidationResult
    """
    validator = SchemaValidator(config)
    return validator.validate(data, schema)
