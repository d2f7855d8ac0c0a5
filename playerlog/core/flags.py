"""Bit-packed boolean attributes of a player log record."""

from typing import Union

from playerlog.core.errors import InvalidFlagsError


class LogFlags:
    """
    One-byte flag set.
    
    Bits:
        PLAYER_AUTH (bit 0) - Player was authenticated
        IS_ONLINE (bit 1) - Player is online, so the record carries a UUID
    
    Bits 2-7 are reserved. from_bits() rejects them; from_bits_retain()
    keeps them for callers that validate on their own.
    """
    
    PLAYER_AUTH = 0x01
    IS_ONLINE = 0x02
    ALL = PLAYER_AUTH | IS_ONLINE
    
    _NAMES = (("PLAYER_AUTH", PLAYER_AUTH), ("IS_ONLINE", IS_ONLINE))
    
    __slots__ = ("_bits",)
    
    def __init__(self, bits: int = 0):
        self._bits = bits
    
    @classmethod
    def empty(cls) -> "LogFlags":
        return cls(0)
    
    @classmethod
    def from_bits(cls, bits: int) -> "LogFlags":
        """
        Strictly construct flags from a raw byte.
        
        Raises:
            InvalidFlagsError: If bits outside PLAYER_AUTH | IS_ONLINE are set
        """
        if not isinstance(bits, int) or not 0 <= bits <= 0xFF:
            raise InvalidFlagsError(f"Flags must be a byte, got {bits!r}")
        if bits & ~cls.ALL:
            raise InvalidFlagsError(f"Invalid flags: 0x{bits:02x}")
        return cls(bits)
    
    @classmethod
    def from_bits_retain(cls, bits: int) -> "LogFlags":
        """Construct flags from a raw byte, keeping reserved bits."""
        return cls(bits & 0xFF)
    
    @staticmethod
    def _as_int(flag: Union[int, "LogFlags"]) -> int:
        return flag.bits() if isinstance(flag, LogFlags) else flag
    
    def bits(self) -> int:
        return self._bits
    
    def contains(self, flag: Union[int, "LogFlags"]) -> bool:
        """Check that every bit of flag is set."""
        mask = self._as_int(flag)
        return self._bits & mask == mask
    
    def insert(self, flag: Union[int, "LogFlags"]) -> None:
        self._bits |= self._as_int(flag)
    
    def remove(self, flag: Union[int, "LogFlags"]) -> None:
        self._bits &= ~self._as_int(flag) & 0xFF
    
    def __eq__(self, other: object) -> bool:
        if isinstance(other, LogFlags):
            return self._bits == other._bits
        return NotImplemented
    
    def __repr__(self) -> str:
        names = [name for name, bit in self._NAMES if self._bits & bit]
        reserved = self._bits & ~self.ALL
        if reserved:
            names.append(f"0x{reserved:02x}")
        return f"LogFlags({' | '.join(names) or 'empty'})"
