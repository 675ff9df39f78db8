"""Rendering of Python values as GraphQL input literals."""

import json
from collections.abc import Mapping
from datetime import date, time
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from .projection import UnsetType


class InputValueSerializer:
    """Serializes argument values to GraphQL literal syntax.

    Example:
        InputValueSerializer().serialize({"movieId": 1234, "tags": ["a"]})
        # '{movieId: 1234, tags: ["a"]}'
    """

    def serialize(self, value: Any) -> str:
        if value is None or isinstance(value, UnsetType):
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, Enum):
            return value.value if isinstance(value.value, str) else value.name
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        if isinstance(value, str):
            return json.dumps(value)
        if isinstance(value, (date, time)):
            return json.dumps(value.isoformat())
        if isinstance(value, UUID):
            return json.dumps(str(value))
        if isinstance(value, BaseModel):
            return self.serialize(value.model_dump(by_alias=True, exclude_unset=True))
        if isinstance(value, Mapping):
            items = ", ".join(f"{k}: {self.serialize(v)}" for k, v in value.items())
            return "{" + items + "}"
        if isinstance(value, (list, tuple, set, frozenset)):
            return "[" + ", ".join(self.serialize(v) for v in value) + "]"
        raise TypeError(f"Cannot serialize {type(value).__name__} as a GraphQL value")
