"""Custom exceptions for jsonkit."""


class JsonKitError(Exception):
    """Base exception for jsonkit errors."""
    pass


class InvalidInputError(JsonKitError):
    """Raised when an API is called with arguments outside its contract."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class DocumentLoadError(JsonKitError):
    """Raised when a JSON/YAML document cannot be read or parsed."""
    def __init__(self, message: str, path: str = None, reason: str = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.reason = reason


class MaxDepthExceededError(JsonKitError):
    """Raised when maximum recursion depth is exceeded."""
    def __init__(self, depth: int, path: str):
        super().__init__(f"Maximum depth ({depth}) exceeded at path: {path}")
        self.depth = depth
        self.path = path
