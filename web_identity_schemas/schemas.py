# web_identity_schemas/schemas.py
"""Pydantic models for command input and structured output."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

IssueKind = Literal["shape", "pattern", "semantic"]


class InputSchema(BaseModel):
    func_name: Literal["validate", "list", "list-schemas", "check-did"]

    func_input_data: Dict[str, Any] = Field(default_factory=dict)


class ValidationIssue(BaseModel):
    """One reason a value was rejected."""
    path: str = Field(..., description="Dotted path to the offending member, empty for the value itself.")
    message: str = Field(..., description="Human readable reason.")
    type: str = Field(..., description="Machine readable error type.")
    kind: IssueKind = Field(..., description="Wrong structure, failed format, or failed cross-field rule.")


class ValidationOutput(BaseModel):
    """Result of validating a value against a schema."""
    valid: bool = Field(..., description="True if the value satisfies the schema.")
    schema_name: Optional[str] = Field(None, description="Registered name of the schema, when known.")
    data: Optional[Any] = Field(None, description="The accepted value after normalisation (if valid).")
    issues: List[ValidationIssue] = Field(default_factory=list, description="Every violation found (if invalid).")


class DidCheckOutput(BaseModel):
    """Output data for the 'check-did' function."""
    did: str
    valid: bool
    method: Optional[str] = Field(None, description="DID method name (if the DID is valid).")


class SchemaListOutput(BaseModel):
    schemas: List[str] = Field(..., description="Names accepted by the 'validate' function.")


class ErrorOutput(BaseModel):
    """Standardized error output format."""
    error: str = Field(..., description="A short error code or category.")
    message: str = Field(..., description="A human-readable description of the error.")
