import dataclasses
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Callable, get_args

from pydantic import BaseModel, GetCoreSchemaHandler
from pydantic_core import CoreSchema, PydanticCustomError, core_schema

from oneormany.logconfig import TRACE

logger = logging.getLogger(__name__)

EXPECTING = "a sequence of at least one element or a single element"

# Values which are decoded as the single element of a new container.
SCALAR_TYPES = (str, int, float, bool)

_STRING_TYPES = (str, bytes, bytearray)


def encode(value: Iterable) -> list:
    """Return the canonical wire shape of a container: a list holding the head
    followed by every remaining element."""
    return list(value)


def is_keyed(value: Any) -> bool:
    """Return True if `value` is a single structured value: a mapping, a pydantic
    model instance or a dataclass instance."""
    return (
        isinstance(value, (Mapping, BaseModel))
        or dataclasses.is_dataclass(value)
        and not isinstance(value, type)
    )


def collapse_shape(value: Any) -> list:
    """Normalize any accepted input shape into a list of raw elements.

    Sequences pass through (their length is checked by the list schema which
    follows), while a bare scalar or a structured value becomes the sole element
    of a one item list. Anything else is rejected."""
    if isinstance(value, list):
        return value
    if isinstance(value, Sequence) and not isinstance(value, _STRING_TYPES):
        try:
            return list(value)
        except RuntimeError as e:
            # A OneOrMany which was already consumed by into_iter()
            raise PydanticCustomError(
                "one_or_many_consumed",
                "Input can no longer be read: {reason}",
                {"reason": str(e)},
            ) from e
    if isinstance(value, SCALAR_TYPES) or is_keyed(value):
        logger.log(
            TRACE, "Collapsing %s input into a single element", type(value).__name__
        )
        return [value]
    raise PydanticCustomError(
        "one_or_many_type", "Input should be {expecting}", {"expecting": EXPECTING}
    )


def one_or_many_schema(
    factory: Callable[[Any, Iterable], Any],
    source_type: Any,
    handler: GetCoreSchemaHandler,
) -> CoreSchema:
    """Build the pydantic core schema for a (possibly parametrized) container type.

    `factory` is called with the head and the remaining elements once the input has
    been collapsed into a non-empty list and every element has been validated
    against the item schema."""
    args = get_args(source_type)
    item_schema = handler.generate_schema(args[0]) if args else core_schema.any_schema()

    def build(items: list) -> Any:
        return factory(items[0], items[1:])

    return core_schema.no_info_after_validator_function(
        build,
        core_schema.no_info_before_validator_function(
            collapse_shape, core_schema.list_schema(item_schema, min_length=1)
        ),
        serialization=core_schema.plain_serializer_function_ser_schema(
            encode,
            info_arg=False,
            return_schema=core_schema.list_schema(item_schema),
        ),
    )
