"""
Core player log format.

This package provides:
- Version registry and flag set
- Validated and compact record forms
- Single-record binary codec
"""

from playerlog.core.errors import (
    CompressionError,
    DecompressionFailedError,
    FieldTooLongError,
    FormatError,
    InvalidFlagsError,
    InvalidHostnameError,
    InvalidNameError,
    MissingIdentityError,
    NameTooLongError,
    PlayerLogError,
    TrailingDataError,
    TruncatedInputError,
    UnknownVersionCodeError,
    UnknownVersionError,
    UnsupportedVersionError,
    ValidationError,
)
from playerlog.core.flags import LogFlags
from playerlog.core.format import (
    RecordReader,
    deserialize_record,
    read_record,
    record_size,
    serialize_record,
    write_record,
)
from playerlog.core.record import BINARY_VERSION, CompactPlayerLog, PlayerLog
from playerlog.core.versions import VERSIONS, code_for, label_for, labels

__all__ = [
    "BINARY_VERSION",
    "CompactPlayerLog",
    "CompressionError",
    "DecompressionFailedError",
    "FieldTooLongError",
    "FormatError",
    "InvalidFlagsError",
    "InvalidHostnameError",
    "InvalidNameError",
    "LogFlags",
    "MissingIdentityError",
    "NameTooLongError",
    "PlayerLog",
    "PlayerLogError",
    "RecordReader",
    "TrailingDataError",
    "TruncatedInputError",
    "UnknownVersionCodeError",
    "UnknownVersionError",
    "UnsupportedVersionError",
    "VERSIONS",
    "ValidationError",
    "code_for",
    "deserialize_record",
    "label_for",
    "labels",
    "read_record",
    "record_size",
    "serialize_record",
    "write_record",
]
