"""Storage and persistence layer."""

from .backend import KeyValueBackend, MemoryBackend, JsonFileBackend
from .codec import JsonCodec, CodecError, EncodingError, DecodingError
from .settings import SettingsManager

__all__ = [
    "KeyValueBackend",
    "MemoryBackend",
    "JsonFileBackend",
    "JsonCodec",
    "CodecError",
    "EncodingError",
    "DecodingError",
    "SettingsManager",
]
