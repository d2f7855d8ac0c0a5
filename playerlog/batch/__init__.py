"""
Batch encoding of player log records.

This package provides:
- Length-prefixed batch codec with chunked parallel encoding
- gzip compression wrapper around the batch codec
"""

from playerlog.batch.codec import (
    BatchConfig,
    BatchSerializer,
    deserialize_many,
    serialize_many,
    split_chunks,
)
from playerlog.batch.compression import (
    CompressedBatchSerializer,
    CompressionLevel,
    deserialize_many_compressed,
    serialize_many_compressed,
)

__all__ = [
    "BatchConfig",
    "BatchSerializer",
    "CompressedBatchSerializer",
    "CompressionLevel",
    "deserialize_many",
    "deserialize_many_compressed",
    "serialize_many",
    "serialize_many_compressed",
    "split_chunks",
]
