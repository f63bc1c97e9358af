# web_identity_schemas/json_ld.py
"""JSON-LD ``@context`` validation.

Only the presence of mandated context URIs is checked. Contexts are never
fetched, expanded or compacted.
"""

import logging
from functools import lru_cache
from typing import Annotated, Any, Dict, List, Tuple

from pydantic import AfterValidator
from pydantic_core import PydanticCustomError

from .errors import ConfigurationError
from .primitives import Uri, is_uri
from .constants import ARRAY_TAG, OBJECT_TAG, STRING_TAG
from .utils import includes_all_validator, missing_elements, shape_union

logger = logging.getLogger(__name__)


MISSING_CONTEXT_MESSAGE = "Context must include all required contexts, missing: {missing}"


def _missing_context_error(missing: List[str]) -> PydanticCustomError:
    return PydanticCustomError("context_missing", MISSING_CONTEXT_MESSAGE, {"missing": ", ".join(missing)})


@lru_cache(maxsize=None)
def _build_context_type(required: Tuple[str, ...], allow_map: bool) -> Any:
    def check_string(value: str) -> str:
        # A bare string only satisfies a single mandated context.
        if len(required) == 1 and value == required[0]:
            return value
        raise _missing_context_error(missing_elements([value], required))

    variants = {
        STRING_TAG: Annotated[str, AfterValidator(check_string)],
        ARRAY_TAG: Annotated[
            List[Uri],
            includes_all_validator(required, "context_missing", MISSING_CONTEXT_MESSAGE),
        ],
    }
    forms = "a string or an array"
    if allow_map:
        variants[OBJECT_TAG] = Dict[str, Uri]
        forms = "a string, an array or a map"

    logger.debug(f"Building @context schema requiring {', '.join(required)} (map allowed: {allow_map})")
    return shape_union(
        f"Context must be {forms} including: {', '.join(required)}",
        **variants,
    )


def jsonld_context(*required: str, allow_map: bool = True) -> Any:
    """Create an ``@context`` type that mandates the given context URIs.

    Accepted forms:

    * a bare string, only when exactly one context is mandated and it equals it;
    * an array of URIs containing every mandated URI, in any order, extras allowed;
    * a term-to-URI map whose values are all URIs (unless ``allow_map`` is False).

    Args:
        *required: Mandated context URIs, most significant first.
        allow_map: Whether the map form is accepted.

    Returns:
        An annotated type usable as a pydantic field type.

    Raises:
        ConfigurationError: If no context is given or one is not a URI.
    """
    if not required:
        raise ConfigurationError("At least one required JSON-LD context must be given")
    invalid = [context for context in required if not is_uri(context)]
    if invalid:
        raise ConfigurationError(f"Required contexts must be URIs: {', '.join(map(str, invalid))}")
    # Duplicates add nothing to the containment check.
    unique = tuple(dict.fromkeys(required))
    return _build_context_type(unique, allow_map)
