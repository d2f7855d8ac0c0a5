"""
Exceptions raised by the player log codec.

Three families:
- ValidationError: a record cannot be converted between its editable and
  compact forms
- FormatError: bytes on the wire (or a compact record about to be written)
  break the binary layout
- CompressionError: the compressed container around a batch is unusable
"""


class PlayerLogError(Exception):
    """Base class for all player log errors."""


class ValidationError(PlayerLogError, ValueError):
    """Record failed validation during build or reverse-build."""


class NameTooLongError(ValidationError):
    """Player name exceeds the 16 character limit."""


class UnknownVersionError(ValidationError):
    """Server version label is not in the version registry."""


class UnknownVersionCodeError(ValidationError):
    """Server version code is not in the version registry."""


class InvalidNameError(ValidationError):
    """Player name bytes are not valid UTF-8."""


class InvalidHostnameError(ValidationError):
    """Server hostname bytes are not valid UTF-8."""


class FormatError(PlayerLogError, ValueError):
    """Binary layout violation."""


class UnsupportedVersionError(FormatError):
    """Binary format version tag is not supported."""


class InvalidFlagsError(FormatError):
    """Flags byte has reserved bits set."""


class MissingIdentityError(FormatError):
    """IS_ONLINE flag is set but the record carries no player UUID."""


class TruncatedInputError(FormatError):
    """Input ended before a field was fully read."""


class FieldTooLongError(FormatError):
    """Variable-length field does not fit its one-byte length prefix."""


class TrailingDataError(FormatError):
    """Bytes remain after the last expected record."""


class CompressionError(PlayerLogError):
    """Compression container error."""


class DecompressionFailedError(CompressionError):
    """Input is not a valid compressed stream."""
