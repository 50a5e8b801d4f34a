"""JSON codec for structured preference values."""

import json
from dataclasses import asdict
from typing import Any, TypeVar, Union

from ..core.models import Filter, SortFilter

T = TypeVar("T", Filter, SortFilter)


class CodecError(Exception):
    """Base class for codec failures."""


class EncodingError(CodecError):
    """Raised when a value cannot be serialized."""


class DecodingError(CodecError):
    """Raised when stored data cannot be turned back into a value."""


class JsonCodec:
    """Encodes filters and sort orders as UTF-8 JSON.

    A Filter becomes an object holding its fields, a SortFilter becomes its
    string value, so stored blobs decode without any outside schema.
    """

    def encode(self, value: Union[Filter, SortFilter]) -> bytes:
        """Serialize a value.

        Args:
            value: Filter or SortFilter to encode

        Returns:
            The encoded bytes

        Raises:
            EncodingError: If the value cannot be serialized
        """
        if isinstance(value, Filter):
            payload: Any = asdict(value)
        elif isinstance(value, SortFilter):
            payload = value.value
        else:
            raise EncodingError(f"Unsupported value type: {type(value).__name__}")

        try:
            return json.dumps(payload, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise EncodingError(f"Failed to encode {type(value).__name__}: {e}") from e

    def decode(self, data: Any, kind: type[T]) -> T:
        """Deserialize a value of the given type.

        Args:
            data: Bytes previously produced by encode
            kind: Filter or SortFilter

        Returns:
            The decoded value

        Raises:
            DecodingError: If the data is malformed or does not match kind
        """
        if not isinstance(data, (bytes, bytearray)):
            raise DecodingError(f"Expected bytes, got {type(data).__name__}")

        try:
            payload = json.loads(bytes(data).decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DecodingError(f"Malformed data: {e}") from e

        if kind is Filter:
            return self._decode_filter(payload)
        if kind is SortFilter:
            try:
                return SortFilter(payload)
            except ValueError as e:
                raise DecodingError(f"Unknown sort filter: {payload!r}") from e

        raise DecodingError(f"Unsupported value type: {kind!r}")

    def _decode_filter(self, payload: Any) -> Filter:
        """Build a Filter from a decoded JSON object."""
        if not isinstance(payload, dict):
            raise DecodingError("Filter must be a JSON object")

        try:
            group_name = payload["group_name"]
            key = payload["key"]
            value = payload["value"]
        except KeyError as e:
            raise DecodingError(f"Filter is missing field {e}") from e

        display_name = payload.get("display_name", "")
        is_on = payload.get("is_on", True)

        if not all(isinstance(v, str) for v in (group_name, key, value, display_name)):
            raise DecodingError("Filter text fields must be strings")
        if not isinstance(is_on, bool):
            raise DecodingError("Filter is_on must be a boolean")

        return Filter(
            group_name=group_name,
            key=key,
            value=value,
            display_name=display_name,
            is_on=is_on,
        )
