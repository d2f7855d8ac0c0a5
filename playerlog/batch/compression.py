"""
Compression wrapper for serialized batches.

Streams the batch codec's output through a gzip (deflate) filter. The
compressed form is a plain gzip container around the uncompressed batch
bytes, with no framing of its own.
"""

import gzip
import io
import zlib
from enum import IntEnum
from typing import List, Optional, Sequence, Union

from playerlog.batch.codec import BatchConfig, BatchSerializer
from playerlog.core.errors import DecompressionFailedError, FormatError
from playerlog.core.record import CompactPlayerLog
from playerlog.utils.config import Config
from playerlog.utils.logging import get_logger

logger = get_logger(__name__)


class CompressionLevel(IntEnum):
    """
    Named gzip compression levels.
    
    Any integer from NONE to BEST is accepted where a level is expected.
    - NONE: Stored blocks, no compression
    - FASTEST: Lowest CPU cost
    - DEFAULT: Balanced ratio and speed
    - BEST: Best ratio, slowest
    """
    
    NONE = 0
    FASTEST = 1
    DEFAULT = 6
    BEST = 9
    
    @classmethod
    def validate(cls, level: Union[int, "CompressionLevel"]) -> int:
        """
        Raises:
            ValueError: If level is outside 0-9
        """
        if not isinstance(level, int) or not cls.NONE <= level <= cls.BEST:
            raise ValueError(
                f"Compression level must be between {int(cls.NONE)} and {int(cls.BEST)}, got {level!r}"
            )
        return int(level)


class CompressedBatchSerializer:
    """
    Batch serializer that compresses on write and decompresses on read.
    
    Compression happens as a stream filter around BatchSerializer.dump()
    and BatchSerializer.load().
    """
    
    def __init__(
        self,
        level: Union[int, CompressionLevel] = CompressionLevel.DEFAULT,
        serializer: Optional[BatchSerializer] = None,
    ):
        """
        Initialize compressed serializer.
        
        Args:
            level: gzip compression level (0-9)
            serializer: Underlying batch serializer (defaults if None)
        """
        self.level = CompressionLevel.validate(level)
        self.serializer = serializer or BatchSerializer()
    
    @classmethod
    def from_config(cls, config: Config) -> "CompressedBatchSerializer":
        return cls(
            level=config.get("compression.level", CompressionLevel.DEFAULT),
            serializer=BatchSerializer(BatchConfig.from_config(config)),
        )
    
    def serialize_many(self, records: Sequence[CompactPlayerLog]) -> bytes:
        """
        Serialize and compress records.
        
        Raises:
            FormatError: If any record fails to encode
        """
        output = io.BytesIO()
        with gzip.GzipFile(fileobj=output, mode="wb", compresslevel=self.level) as stream:
            original_size = self.serializer.dump(records, stream)
        
        compressed = output.getvalue()
        
        logger.debug(
            "Compressed batch",
            level=self.level,
            records=len(records),
            original_size=original_size,
            compressed_size=len(compressed),
            compression_ratio=f"{(1.0 - len(compressed) / original_size) * 100:.1f}%",
        )
        
        return compressed
    
    def deserialize_many(self, data: bytes) -> List[CompactPlayerLog]:
        """
        Decompress and deserialize records.
        
        A batch error is only reported once the rest of the container has
        been read and its checksum verified, so damaged deflate data that
        still inflates raises DecompressionFailedError.
        
        Raises:
            DecompressionFailedError: If data is not a valid gzip stream
            FormatError: If the decompressed batch is malformed
        """
        if not data:
            raise DecompressionFailedError("Empty input is not a compressed stream")
        
        try:
            with gzip.GzipFile(fileobj=io.BytesIO(data), mode="rb") as stream:
                try:
                    return self.serializer.load(stream)
                except FormatError:
                    stream.read()
                    raise
        except (OSError, EOFError, zlib.error) as e:
            logger.error(
                "Decompression failed",
                compressed_size=len(data),
                error=str(e),
            )
            raise DecompressionFailedError(f"Decompression failed: {e}") from e


def serialize_many_compressed(
    records: Sequence[CompactPlayerLog],
    level: Union[int, CompressionLevel] = CompressionLevel.DEFAULT,
) -> bytes:
    """Serialize records into a gzip-compressed batch."""
    return CompressedBatchSerializer(level).serialize_many(records)


def deserialize_many_compressed(data: bytes) -> List[CompactPlayerLog]:
    """Deserialize a gzip-compressed batch."""
    return CompressedBatchSerializer().deserialize_many(data)
