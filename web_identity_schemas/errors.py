# web_identity_schemas/errors.py
"""Custom exception classes for web-identity-schemas."""

from typing import Any, Dict, List, Optional


class WebIdentitySchemaError(Exception):
    """Base class for package-specific errors."""
    def __init__(self, message: str, error_code: str = "SchemaError"):
        self.message = message
        self.error_code = error_code
        super().__init__(f"[{error_code}] {message}")


class ConfigurationError(WebIdentitySchemaError):
    """Error raised when a schema factory is called with unusable arguments."""
    def __init__(self, message: str):
        super().__init__(message, error_code="ConfigurationError")


class InvalidInputError(WebIdentitySchemaError):
    """Error for invalid command or worker input."""
    def __init__(self, message: str):
        super().__init__(message, error_code="InvalidInput")


class UnknownSchemaError(InvalidInputError):
    """Error when a schema name is not registered."""
    def __init__(self, name: str):
        super().__init__(f"Unknown schema: {name}")
        self.error_code = "UnknownSchema"
        self.name = name


class SchemaValidationError(WebIdentitySchemaError):
    """A value was rejected by a schema.

    Carries every issue reported by the validator, not just the first one.
    """
    def __init__(self, message: str, issues: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message, error_code="ValidationFailed")
        self.issues = issues or []
