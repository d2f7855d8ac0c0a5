"""
Length-prefixed batch codec for player log records.

Wire format:
    Record count (8 bytes, big-endian)
    Records (variable) - Each record in single-record format, in order

Encoding splits the input into contiguous chunks and encodes them on a
thread pool, then joins the chunk buffers in order. Chunking is invisible
on the wire. Decoding is a single sequential pass.
"""

import io
import struct
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import BinaryIO, List, Optional, Sequence

from playerlog.core.format import RecordReader, read_record, write_record
from playerlog.core.record import CompactPlayerLog
from playerlog.utils.config import Config
from playerlog.utils.logging import get_logger

logger = get_logger(__name__)

_COUNT = struct.Struct(">Q")

COUNT_SIZE = _COUNT.size
DEFAULT_MAX_CHUNKS = 10


@dataclass
class BatchConfig:
    """
    Batch codec settings.
    
    Attributes:
        max_chunks: Upper bound on chunks encoded in parallel
        max_workers: Thread pool size (None for executor default)
        parallel: Encode chunks on a thread pool
    """
    
    max_chunks: int = DEFAULT_MAX_CHUNKS
    max_workers: Optional[int] = None
    parallel: bool = True
    
    def __post_init__(self) -> None:
        if self.max_chunks < 1:
            raise ValueError(f"max_chunks must be at least 1, got {self.max_chunks}")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")
    
    @classmethod
    def from_config(cls, config: Config) -> "BatchConfig":
        return cls(
            max_chunks=config.get("batch.max_chunks", DEFAULT_MAX_CHUNKS),
            max_workers=config.get("batch.max_workers"),
            parallel=config.get("batch.parallel", True),
        )


def split_chunks(
    records: Sequence[CompactPlayerLog],
    max_chunks: int = DEFAULT_MAX_CHUNKS,
) -> List[Sequence[CompactPlayerLog]]:
    """
    Partition records into contiguous chunks.
    
    Produces min(max_chunks, len(records)) chunks whose sizes differ by at
    most one, earlier chunks taking the remainder.
    
    Args:
        records: Records to partition
        max_chunks: Upper bound on the number of chunks
    
    Returns:
        Chunks in original order
    """
    count = len(records)
    if count == 0:
        return []
    
    num_chunks = min(max_chunks, count)
    base, remainder = divmod(count, num_chunks)
    
    chunks = []
    start = 0
    for i in range(num_chunks):
        end = start + base + (1 if i < remainder else 0)
        chunks.append(records[start:end])
        start = end
    return chunks


def _encode_chunk(chunk: Sequence[CompactPlayerLog]) -> bytearray:
    buffer = bytearray()
    for record in chunk:
        write_record(record, buffer)
    return buffer


class BatchSerializer:
    """
    Serializes sequences of compact records.
    
    Each call owns its buffers and thread pool; a serializer holds no state
    between calls and may be shared across threads.
    """
    
    def __init__(self, config: Optional[BatchConfig] = None):
        """
        Initialize serializer.
        
        Args:
            config: Batch settings (defaults if None)
        """
        self.config = config or BatchConfig()
    
    def serialize_many(self, records: Sequence[CompactPlayerLog]) -> bytes:
        """
        Serialize records, encoding chunks in parallel.
        
        Args:
            records: Records to encode
        
        Returns:
            Count prefix followed by every record in order
        
        Raises:
            FormatError: If any record fails to encode; nothing is returned
        """
        if not self.config.parallel:
            return self.serialize_many_sequential(records)
        
        chunks = split_chunks(records, self.config.max_chunks)
        
        if len(chunks) <= 1:
            buffers = [_encode_chunk(chunk) for chunk in chunks]
        else:
            with ThreadPoolExecutor(
                max_workers=self.config.max_workers,
                thread_name_prefix="playerlog-encode",
            ) as executor:
                buffers = list(executor.map(_encode_chunk, chunks))
        
        output = bytearray(_COUNT.pack(len(records)))
        for buffer in buffers:
            output += buffer
        
        logger.debug(
            "Serialized batch",
            records=len(records),
            chunks=len(chunks),
            bytes=len(output),
        )
        
        return bytes(output)
    
    def serialize_many_sequential(self, records: Sequence[CompactPlayerLog]) -> bytes:
        """Serialize records on the calling thread."""
        output = bytearray(_COUNT.pack(len(records)))
        for record in records:
            write_record(record, output)
        
        logger.debug("Serialized batch sequentially", records=len(records), bytes=len(output))
        
        return bytes(output)
    
    def dump(self, records: Sequence[CompactPlayerLog], stream: BinaryIO) -> int:
        """
        Write a serialized batch to a binary stream.
        
        The batch is fully encoded before the first write, so a failing
        record leaves the stream untouched.
        
        Returns:
            Number of bytes written
        """
        data = self.serialize_many(records)
        stream.write(data)
        return len(data)
    
    def load(self, stream: BinaryIO) -> List[CompactPlayerLog]:
        """
        Read a whole batch from a binary stream.
        
        Args:
            stream: Stream positioned at the count prefix
        
        Returns:
            Records in wire order
        
        Raises:
            TruncatedInputError: If the stream ends early
            TrailingDataError: If bytes follow the last record
            FormatError: If any record is malformed
        """
        reader = RecordReader(stream)
        count = reader.read_u64("record count")
        
        records = []
        for _ in range(count):
            records.append(read_record(reader))
        
        reader.expect_end()
        
        logger.debug("Deserialized batch", records=count, bytes=reader.position)
        
        return records
    
    def deserialize_many(self, data: bytes) -> List[CompactPlayerLog]:
        """Deserialize a batch produced by serialize_many()."""
        return self.load(io.BytesIO(data))


_default_serializer = BatchSerializer()


def serialize_many(records: Sequence[CompactPlayerLog]) -> bytes:
    """Serialize records with default settings."""
    return _default_serializer.serialize_many(records)


def deserialize_many(data: bytes) -> List[CompactPlayerLog]:
    """Deserialize a batch with default settings."""
    return _default_serializer.deserialize_many(data)
