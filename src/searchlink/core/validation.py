"""Payload validation — Required identifier keys.

Message handlers receive loosely-shaped payloads. Before touching the search
backend they check that the identifiers they rely on are present and are
UUID strings; any other key in the payload is left alone.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from functools import lru_cache
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictStr, ValidationError, create_model
from pydantic_core import PydanticCustomError

from searchlink.core.exceptions import PayloadValidationError

_HEX_UUID = r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
# Hyphenated 8-4-4-4-12 hex, optionally wrapped in one matched pair of braces.
_UUID_RE = re.compile(rf"{_HEX_UUID}|\{{{_HEX_UUID}\}}")


def _check_uuid(value: str) -> str:
    if _UUID_RE.fullmatch(value) is None:
        raise PydanticCustomError("uuid_string", "Input should be a valid UUID string")
    return value


UUIDString = Annotated[StrictStr, AfterValidator(_check_uuid)]


@lru_cache(maxsize=128)
def _required_keys_model(keys: tuple[str, ...]) -> type[BaseModel]:
    # Payload keys are arbitrary strings, so they live in aliases rather than field names.
    fields: dict[str, Any] = {f"key_{i}": (UUIDString, Field(alias=key)) for i, key in enumerate(keys)}
    return create_model("RequiredKeys", __config__=ConfigDict(extra="ignore"), **fields)


def validate_required_keys(payload: Any, keys: Iterable[str]) -> None:
    """Check that every key in ``keys`` maps to a UUID string in ``payload``.

    Args:
        payload: The message payload. Unknown keys are permitted.
        keys: Names of the keys that must hold UUID strings.

    Raises:
        PayloadValidationError: On the first missing or malformed key.
    """
    model = _required_keys_model(tuple(dict.fromkeys(keys)))
    data = dict(payload) if isinstance(payload, Mapping) else payload

    try:
        model.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        field = str(first["loc"][0]) if first["loc"] else "payload"
        raise PayloadValidationError(f"{field}: {first['msg']}", field=field) from e
