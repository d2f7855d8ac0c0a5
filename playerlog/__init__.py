"""
playerlog - Compact binary wire format for player connection logs.

This package implements:
- A validated, editable record form and its compact wire form
- A byte-exact single-record binary codec
- A length-prefixed batch codec with chunked parallel encoding
- A gzip compression wrapper around the batch codec
"""

__version__ = "0.1.0"

from playerlog.batch import (
    BatchConfig,
    BatchSerializer,
    CompressedBatchSerializer,
    CompressionLevel,
    deserialize_many,
    deserialize_many_compressed,
    serialize_many,
    serialize_many_compressed,
)
from playerlog.core import (
    BINARY_VERSION,
    CompactPlayerLog,
    CompressionError,
    FormatError,
    LogFlags,
    PlayerLog,
    PlayerLogError,
    ValidationError,
    deserialize_record,
    serialize_record,
)

__all__ = [
    "BINARY_VERSION",
    "BatchConfig",
    "BatchSerializer",
    "CompactPlayerLog",
    "CompressedBatchSerializer",
    "CompressionError",
    "CompressionLevel",
    "FormatError",
    "LogFlags",
    "PlayerLog",
    "PlayerLogError",
    "ValidationError",
    "deserialize_many",
    "deserialize_many_compressed",
    "deserialize_record",
    "serialize_many",
    "serialize_many_compressed",
    "serialize_record",
]
