"""JSONPath utilities for jsonkit."""

from __future__ import annotations

from typing import Any, Iterable

from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError
from jsonpath_ng.jsonpath import Child, Fields, Index

from .utils import Segment, build_path


class JSONPathMatcher:
    """Utility class for resolving JSONPath expressions to change paths."""

    # Cache for compiled JSONPath expressions
    _cache: dict = {}

    @classmethod
    def compile(cls, path: str):
        """Compile and cache a JSONPath expression ('$.' prefix optional)."""
        path = cls._rooted(path)
        if path not in cls._cache:
            try:
                cls._cache[path] = jsonpath_parse(path)
            except (JsonPathLexerError, JsonPathParserError) as e:
                raise ValueError(f"Invalid JSONPath expression '{path}': {e}")
        return cls._cache[path]

    @classmethod
    def find_paths(cls, data: Any, path: str) -> list[str]:
        """
        Find the concrete location of every match, rendered as change paths.

        Example:
            find_paths({"a": [{"b": 1}, {"b": 2}]}, "$.a[*].b") -> ["a[0].b", "a[1].b"]
        """
        expr = cls.compile(path)
        try:
            matches = expr.find(data)
        except (TypeError, KeyError, IndexError, AttributeError):
            # Index selectors applied to a value of the wrong shape
            return []
        return [build_path(cls.segments_of(m.full_path)) for m in matches]

    @classmethod
    def resolve(cls, documents: Iterable[Any], patterns: Iterable[str]) -> set[str]:
        """Collect the change paths every pattern matches in any of the documents."""
        documents = list(documents)
        resolved: set[str] = set()
        for pattern in patterns:
            for document in documents:
                resolved.update(cls.find_paths(document, pattern))
        return resolved

    @classmethod
    def segments_of(cls, path) -> list[Segment]:
        """Flatten a matched jsonpath_ng path into key/index segments."""
        if isinstance(path, Child):
            return cls.segments_of(path.left) + cls.segments_of(path.right)
        if isinstance(path, Fields):
            return list(path.fields)
        if isinstance(path, Index):
            # Older jsonpath_ng releases carry a single .index
            indices = getattr(path, 'indices', None) or (path.index,)
            return list(indices)
        # Root and This
        return []

    @staticmethod
    def _rooted(path: str) -> str:
        if not path or path.startswith('$'):
            return path or '$'
        if path.startswith('['):
            return f"${path}"
        return f"$.{path}"
