"""Wire encoding for documents sent to the CRPT API."""

from __future__ import annotations

from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from .errors import SerializationError


class Serializer(ABC):
    """Encodes documents into request payloads and decodes response bodies."""

    @abstractmethod
    def encode(self, value: Any) -> bytes:
        """Encode ``value`` into a request payload."""

    @abstractmethod
    def decode(self, data: bytes | str, target: Any = None) -> Any:
        """Decode ``data`` into an instance of ``target`` (raw values when ``None``)."""


@lru_cache(maxsize=None)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


class JsonSerializer(Serializer):
    """JSON codec for pydantic documents.

    Field aliases are always used, so models with a camelCase alias generator
    (the document's ``Description``) are written in camelCase. Dates use ISO
    ``YYYY-MM-DD``.
    """

    def encode(self, value: Any) -> bytes:
        try:
            if isinstance(value, BaseModel):
                return value.model_dump_json(by_alias=True).encode("utf-8")
            return _adapter(Any).dump_json(value, by_alias=True)
        except (TypeError, ValueError, RecursionError) as exc:
            raise SerializationError(
                f"Could not encode {type(value).__name__}: {exc}"
            ) from exc

    def decode(self, data: bytes | str, target: Any = None) -> Any:
        name = getattr(target, "__name__", None) or repr(target)
        try:
            return _adapter(Any if target is None else target).validate_json(data)
        except (ValidationError, TypeError, ValueError, RecursionError) as exc:
            raise SerializationError(f"Could not decode payload as {name}: {exc}") from exc
