"""
Binary format for a single player log record.

Wire format (big-endian):
    Binary version (1 byte) - Layout version, always BINARY_VERSION
    Flags (1 byte) - PLAYER_AUTH | IS_ONLINE
    Player UUID (16 bytes) - Only present when IS_ONLINE is set
    Name length (1 byte)
    Name (variable)
    Player IP (4 bytes)
    Server IP (4 bytes)
    Server port (2 bytes)
    Hostname length (1 byte)
    Hostname (variable)
    Version code (1 byte)

The codec works on raw bytes only. Text fields are not checked for UTF-8
here, so any compact record round-trips byte for byte.
"""

import io
import struct
from typing import BinaryIO, Optional

from playerlog.core.errors import (
    FieldTooLongError,
    FormatError,
    InvalidFlagsError,
    MissingIdentityError,
    TrailingDataError,
    TruncatedInputError,
    UnsupportedVersionError,
)
from playerlog.core.flags import LogFlags
from playerlog.core.record import BINARY_VERSION, CompactPlayerLog

UUID_SIZE = 16
IPV4_SIZE = 4
MAX_FIELD_LENGTH = 0xFF

_U8 = struct.Struct(">B")
_U16 = struct.Struct(">H")
_U64 = struct.Struct(">Q")
_HEADER = struct.Struct(">BB")
_ADDRESSES = struct.Struct(f">{IPV4_SIZE}s{IPV4_SIZE}sH")


class RecordReader:
    """
    Sequential cursor over a binary stream.
    
    Every read either returns exactly the requested number of bytes or
    raises TruncatedInputError.
    """
    
    def __init__(self, stream: BinaryIO):
        """
        Initialize reader.
        
        Args:
            stream: Readable binary stream positioned at the first record
        """
        self._stream = stream
        self.position = 0
    
    @classmethod
    def from_bytes(cls, data: bytes) -> "RecordReader":
        return cls(io.BytesIO(data))
    
    def read_exact(self, size: int, field: str) -> bytes:
        """
        Read exactly size bytes.
        
        Args:
            size: Number of bytes
            field: Field name used in the error message
        
        Raises:
            TruncatedInputError: If the stream ends first
        """
        data = self._stream.read(size)
        while len(data) < size:
            more = self._stream.read(size - len(data))
            if not more:
                raise TruncatedInputError(
                    f"Truncated {field} at position {self.position}: "
                    f"expected {size} bytes, got {len(data)}"
                )
            data += more
        self.position += size
        return data
    
    def read_u8(self, field: str) -> int:
        return self.read_exact(1, field)[0]
    
    def read_u16(self, field: str) -> int:
        return _U16.unpack(self.read_exact(_U16.size, field))[0]
    
    def read_u64(self, field: str) -> int:
        return _U64.unpack(self.read_exact(_U64.size, field))[0]
    
    def expect_end(self) -> None:
        """
        Raises:
            TrailingDataError: If any bytes remain in the stream
        """
        if self._stream.read(1):
            raise TrailingDataError(f"Unexpected trailing data at position {self.position}")


def _check_fixed(value: Optional[bytes], size: int, field: str) -> bytes:
    if not isinstance(value, (bytes, bytearray)) or len(value) != size:
        raise FormatError(f"{field} must be {size} bytes, got {value!r}")
    return value


def _check_variable(value: bytes, field: str) -> bytes:
    if not isinstance(value, (bytes, bytearray)):
        raise FormatError(f"{field} must be bytes, got {type(value)}")
    if len(value) > MAX_FIELD_LENGTH:
        raise FieldTooLongError(f"{field} too long: {len(value)} > {MAX_FIELD_LENGTH} bytes")
    return value


def write_record(record: CompactPlayerLog, buffer: bytearray) -> int:
    """
    Append the encoding of one record to a buffer.
    
    All fields are checked before anything is appended, so a failed call
    leaves the buffer untouched.
    
    Args:
        record: Record to encode
        buffer: Destination buffer
    
    Returns:
        Number of bytes appended
    
    Raises:
        MissingIdentityError: If IS_ONLINE is set but player_uuid is None
        FieldTooLongError: If name or hostname exceed 255 bytes
        FormatError: If a fixed-width or integer field is out of range
    """
    flags = LogFlags.from_bits_retain(record.flags)
    
    player_uuid = None
    if flags.contains(LogFlags.IS_ONLINE):
        if record.player_uuid is None:
            raise MissingIdentityError("IS_ONLINE flag set but player UUID is missing")
        player_uuid = _check_fixed(record.player_uuid, UUID_SIZE, "Player UUID")
    
    player_name = _check_variable(record.player_name, "Player name")
    server_hostname = _check_variable(record.server_hostname, "Server hostname")
    player_ip = _check_fixed(record.player_ip, IPV4_SIZE, "Player IP")
    server_ip = _check_fixed(record.server_ip, IPV4_SIZE, "Server IP")
    
    try:
        header = _HEADER.pack(record.binary_version, record.flags)
        addresses = _ADDRESSES.pack(player_ip, server_ip, record.server_port)
        version_code = _U8.pack(record.version_code)
    except struct.error as e:
        raise FormatError(f"Field out of range: {e}") from e
    
    start = len(buffer)
    buffer += header
    if player_uuid is not None:
        buffer += player_uuid
    buffer.append(len(player_name))
    buffer += player_name
    buffer += addresses
    buffer.append(len(server_hostname))
    buffer += server_hostname
    buffer += version_code
    return len(buffer) - start


def serialize_record(record: CompactPlayerLog) -> bytes:
    """Serialize one record to bytes."""
    buffer = bytearray()
    write_record(record, buffer)
    return bytes(buffer)


def read_record(reader: RecordReader) -> CompactPlayerLog:
    """
    Read one record from the reader's current position.
    
    Raises:
        UnsupportedVersionError: If the binary version is not BINARY_VERSION
        InvalidFlagsError: If reserved flag bits are set
        TruncatedInputError: If the input ends inside the record
    """
    binary_version = reader.read_u8("binary version")
    if binary_version != BINARY_VERSION:
        raise UnsupportedVersionError(
            f"Unsupported binary version {binary_version} at position {reader.position - 1}"
        )
    
    raw_flags = reader.read_u8("flags")
    if raw_flags & ~LogFlags.ALL:
        raise InvalidFlagsError(
            f"Invalid flags 0x{raw_flags:02x} at position {reader.position - 1}"
        )
    flags = LogFlags.from_bits_retain(raw_flags)
    
    player_uuid = None
    if flags.contains(LogFlags.IS_ONLINE):
        player_uuid = reader.read_exact(UUID_SIZE, "player UUID")
    
    name_length = reader.read_u8("player name length")
    player_name = reader.read_exact(name_length, "player name")
    
    player_ip, server_ip, server_port = _ADDRESSES.unpack(
        reader.read_exact(_ADDRESSES.size, "addresses")
    )
    
    hostname_length = reader.read_u8("server hostname length")
    server_hostname = reader.read_exact(hostname_length, "server hostname")
    
    version_code = reader.read_u8("version code")
    
    return CompactPlayerLog(
        binary_version=binary_version,
        flags=raw_flags,
        player_uuid=player_uuid,
        player_name=player_name,
        player_ip=player_ip,
        server_ip=server_ip,
        server_port=server_port,
        server_hostname=server_hostname,
        version_code=version_code,
    )


def deserialize_record(data: bytes) -> CompactPlayerLog:
    """
    Deserialize exactly one record.
    
    Raises:
        FormatError: If the data is not exactly one valid record
    """
    reader = RecordReader.from_bytes(data)
    record = read_record(reader)
    reader.expect_end()
    return record


def record_size(record: CompactPlayerLog) -> int:
    """
    Calculate the serialized size of a record.
    
    Returns:
        Size in bytes
    """
    size = _HEADER.size + 1 + len(record.player_name) + _ADDRESSES.size
    size += 1 + len(record.server_hostname) + _U8.size
    if LogFlags.from_bits_retain(record.flags).contains(LogFlags.IS_ONLINE):
        size += UUID_SIZE
    return size
