# web_identity_schemas/utils.py
"""Shared schema building blocks: pattern checks, one-or-many and containment."""

import logging
import re
from typing import Annotated, Any, Iterable, List, Sequence, Union

from pydantic import AfterValidator, BaseModel, BeforeValidator, Discriminator, Field, Tag
from pydantic_core import PydanticCustomError

from .constants import ARRAY_TAG, NUMBER_TAG, OBJECT_TAG, SINGLE_TAG, STRING_TAG

logger = logging.getLogger(__name__)


def pattern_validator(regex: "re.Pattern[str]", error_type: str, message: str) -> AfterValidator:
    """Build an after-validator that fully matches a string against ``regex``.

    Args:
        regex: Compiled pattern; the whole string must match.
        error_type: pydantic error type reported on mismatch.
        message: Human readable error message.

    Returns:
        An ``AfterValidator`` usable inside ``Annotated[str, ...]``.
    """
    def _check(value: str) -> str:
        if regex.fullmatch(value) is None:
            raise PydanticCustomError(error_type, message)
        return value

    return AfterValidator(_check)


def ensure_list(value: Any) -> List[Any]:
    """Wrap a bare value in a list; lists pass through unchanged."""
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    return [value]


def one_or_many(item_type: Any) -> Any:
    """Accept ``T`` or ``List[T]`` and always produce ``List[T]``."""
    return Annotated[List[item_type], BeforeValidator(ensure_list)]


def _cardinality(value: Any) -> str:
    return ARRAY_TAG if isinstance(value, (list, tuple)) else SINGLE_TAG


def single_or_array(item_type: Any, min_length: int = 0) -> Any:
    """Accept ``T`` or ``List[T]`` and keep whichever form was given."""
    array_type = List[item_type]
    if min_length:
        array_type = Annotated[List[item_type], Field(min_length=min_length)]
    return Annotated[
        Union[
            Annotated[item_type, Tag(SINGLE_TAG)],
            Annotated[array_type, Tag(ARRAY_TAG)],
        ],
        Discriminator(_cardinality),
    ]


def json_shape(value: Any) -> Union[str, None]:
    """Name the JSON shape of a value, or ``None`` for anything non-JSON."""
    if isinstance(value, str):
        return STRING_TAG
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return NUMBER_TAG
    if isinstance(value, (list, tuple)):
        return ARRAY_TAG
    if isinstance(value, (dict, BaseModel)):
        return OBJECT_TAG
    return None


def shape_union(message: str, **variants: Any) -> Any:
    """Union selected by the JSON shape of the input.

    Keyword names must be shape tags (``string``, ``number``, ``array`` or
    ``object``). Inputs of any other shape fail with ``message``.
    """
    members = tuple(Annotated[schema, Tag(tag)] for tag, schema in variants.items())
    return Annotated[
        Union[members],
        Discriminator(
            json_shape,
            custom_error_type="invalid_shape",
            custom_error_message=message,
        ),
    ]


def missing_elements(values: Iterable[Any], required: Sequence[Any]) -> List[Any]:
    """Return the entries of ``required`` that are absent from ``values``."""
    present = list(values)
    return [item for item in required if item not in present]


def includes_all(values: Iterable[Any], required: Sequence[Any]) -> bool:
    """Containment test: every required element appears somewhere in ``values``."""
    return not missing_elements(values, required)


def includes_all_validator(
    required: Sequence[Any],
    error_type: str = "missing_elements",
    message: str = "Array must contain all required values, missing: {missing}",
) -> AfterValidator:
    """After-validator wrapping :func:`includes_all` for list fields.

    ``message`` may use ``{missing}``, the comma separated absent values.
    """
    required = tuple(required)

    def _check(value: List[Any]) -> List[Any]:
        if includes_all(value, required):
            return value
        raise PydanticCustomError(
            error_type,
            message,
            {"missing": ", ".join(str(item) for item in missing_elements(value, required))},
        )

    return AfterValidator(_check)
