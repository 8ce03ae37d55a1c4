"""Encode and decode OneOrMany values outside of a pydantic model.

Each item type gets its own cached :py:class:`pydantic.TypeAdapter`, so values
decode with exactly the same rules as a model field annotated ``OneOrMany[T]``."""

import functools
from typing import Any, Literal, Union

from pydantic import TypeAdapter

from oneormany.collection import OneOrMany


@functools.lru_cache(maxsize=128)
def adapter_for(item_type: Any = Any) -> TypeAdapter:
    """Return the (cached) TypeAdapter for ``OneOrMany[item_type]``."""
    return TypeAdapter(OneOrMany[item_type])


def to_python(
    value: OneOrMany, item_type: Any = Any, mode: Literal["python", "json"] = "python"
) -> list:
    """Encode `value` as a list of plain Python objects."""
    return adapter_for(item_type).dump_python(value, mode=mode)


def to_json(value: OneOrMany, item_type: Any = Any) -> bytes:
    """Encode `value` as a JSON array."""
    return adapter_for(item_type).dump_json(value)


def from_python(raw: Any, item_type: Any = Any) -> OneOrMany:
    """Decode a sequence, a scalar or a mapping into a OneOrMany.

    Raise a pydantic.ValidationError if `raw` is an empty sequence, has some other
    shape, or contains elements which are not valid for `item_type`."""
    return adapter_for(item_type).validate_python(raw)


def from_json(data: Union[str, bytes], item_type: Any = Any) -> OneOrMany:
    """Decode a JSON document into a OneOrMany; see :py:func:`from_python`."""
    return adapter_for(item_type).validate_json(data)
