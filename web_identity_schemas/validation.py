# web_identity_schemas/validation.py
"""Running schemas against untrusted input and reporting every issue."""

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import TypeAdapter, ValidationError

from .constants import NESTING_DEPTH_ERROR, PATTERN_ERROR_TYPES, SEMANTIC_ERROR_TYPES, UNION_TAGS
from .errors import SchemaValidationError
from .schemas import ValidationIssue, ValidationOutput

logger = logging.getLogger(__name__)

_ADAPTERS: Dict[Any, TypeAdapter] = {}


def get_adapter(schema: Any) -> TypeAdapter:
    """Return a (cached) ``TypeAdapter`` for a model class or annotated type."""
    try:
        adapter = _ADAPTERS.get(schema)
    except TypeError:
        # Unhashable annotation metadata, build a fresh adapter each time.
        return TypeAdapter(schema)
    if adapter is None:
        adapter = TypeAdapter(schema)
        _ADAPTERS[schema] = adapter
    return adapter


def _item(value: Any, index: int) -> Any:
    if isinstance(value, (list, tuple)) and -len(value) <= index < len(value):
        return value[index]
    return None


def format_path(loc: Sequence[Union[str, int]], value: Any = None) -> str:
    """Render a pydantic error location as ``a.b[0].c``, without union tags.

    The location is walked alongside the validated input: a part naming a
    member present in the input is always kept, even when it spells a tag.
    Without the input every part equal to a tag is dropped.
    """
    path = ""
    current = value
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
            current = _item(current, part)
            continue
        if isinstance(current, dict) and part in current:
            current = current[part]
        elif part in UNION_TAGS:
            continue
        else:
            current = None
        path = f"{path}.{part}" if path else str(part)
    return path


def issue_kind(error_type: str) -> str:
    if error_type in SEMANTIC_ERROR_TYPES:
        return "semantic"
    if error_type in PATTERN_ERROR_TYPES:
        return "pattern"
    return "shape"


def issues_from_error(error: ValidationError, value: Any = None) -> List[ValidationIssue]:
    """Convert every error of a ``ValidationError`` into a :class:`ValidationIssue`.

    ``value`` is the rejected input, used to tell member names from union tags.
    """
    return [
        ValidationIssue(
            path=format_path(detail["loc"], value),
            message=detail["msg"],
            type=detail["type"],
            kind=issue_kind(detail["type"]),
        )
        for detail in error.errors(include_url=False)
    ]


def dump(schema: Any, value: Any) -> Any:
    """Serialize a validated value back to JSON-compatible data.

    Members the input did not carry are left out, so the output mirrors the
    input apart from normalisation (e.g. a bare ``type`` string becomes a list).
    """
    return get_adapter(schema).dump_python(value, mode="json", by_alias=True, exclude_unset=True)


def parse(schema: Any, value: Any) -> Any:
    """Validate ``value`` and return the validated object.

    Args:
        schema: Model class or annotated type.
        value: Untrusted input, usually decoded JSON.

    Returns:
        The validated (and possibly reshaped) value.

    Raises:
        SchemaValidationError: If ``value`` is rejected; ``issues`` lists every violation.
    """
    try:
        return get_adapter(schema).validate_python(value)
    except ValidationError as e:
        issues = issues_from_error(e, value)
        raise SchemaValidationError(
            f"Validation failed with {len(issues)} issue(s)",
            issues=[issue.model_dump() for issue in issues],
        )


def validate(schema: Any, value: Any, schema_name: Optional[str] = None) -> ValidationOutput:
    """Validate ``value`` and describe the outcome without raising.

    Rejection is an ordinary result: ``valid`` is False and ``issues`` holds
    every violation with its path.
    """
    try:
        validated = get_adapter(schema).validate_python(value)
    except ValidationError as e:
        issues = issues_from_error(e, value)
        logger.debug(f"Validation against {schema_name or schema!r} failed with {len(issues)} issue(s)")
        return ValidationOutput(valid=False, schema_name=schema_name, issues=issues)
    try:
        data = dump(schema, validated)
    except ValueError as e:
        # Serializer depth limit, reached by deeply nested open members.
        logger.debug(f"Serializing value accepted by {schema_name or schema!r} failed: {e}")
        issue = ValidationIssue(
            path="",
            message="Value is nested too deeply to be serialized",
            type=NESTING_DEPTH_ERROR,
            kind=issue_kind(NESTING_DEPTH_ERROR),
        )
        return ValidationOutput(valid=False, schema_name=schema_name, issues=[issue])
    return ValidationOutput(valid=True, schema_name=schema_name, data=data)


def is_valid(schema: Any, value: Any) -> bool:
    try:
        get_adapter(schema).validate_python(value)
    except ValidationError:
        return False
    return True
