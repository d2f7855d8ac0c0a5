"""
Player log record structures.

PlayerLog is the editable, validated form of a record. CompactPlayerLog is
the byte-oriented form that the binary codec reads and writes. build() and
from_compact() convert between the two.
"""

import ipaddress
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from playerlog.core.errors import (
    InvalidHostnameError,
    InvalidNameError,
    NameTooLongError,
    ValidationError,
)
from playerlog.core.flags import LogFlags
from playerlog.core.versions import code_for, label_for

BINARY_VERSION = 1

MAX_NAME_LENGTH = 16
MAX_HOSTNAME_BYTES = 255


@dataclass
class CompactPlayerLog:
    """
    Wire-oriented player log record.
    
    Attributes:
        binary_version: Binary layout version tag
        flags: Raw flags byte
        player_uuid: 16 raw UUID bytes, present iff IS_ONLINE is set
        player_name: Name bytes (at most 255)
        player_ip: 4 packed octets
        server_ip: 4 packed octets
        server_port: Port number (0-65535)
        server_hostname: Hostname bytes (at most 255)
        version_code: Registry code of the server version
    """
    
    binary_version: int
    flags: int
    player_uuid: Optional[bytes]
    player_name: bytes
    player_ip: bytes
    server_ip: bytes
    server_port: int
    server_hostname: bytes
    version_code: int


@dataclass
class PlayerLog:
    """
    Editable player log record.
    
    Attributes:
        flags: Record flags
        player_uuid: Player identity, expected iff IS_ONLINE is set
        player_name: Player name (at most 16 characters)
        player_ip: Address the player connected from
        server_ip: Address of the server
        server_port: Server port (0-65535)
        server_hostname: Hostname the player connected to
        server_version: Version label, must be in the version registry
    """
    
    flags: LogFlags
    player_uuid: Optional[uuid.UUID]
    player_name: str
    player_ip: ipaddress.IPv4Address
    server_ip: ipaddress.IPv4Address
    server_port: int
    server_hostname: str
    server_version: str
    
    def __post_init__(self) -> None:
        """Coerce address strings and check field types."""
        if not isinstance(self.flags, LogFlags):
            raise TypeError(f"Flags must be LogFlags, got {type(self.flags)}")
        if self.player_uuid is not None and not isinstance(self.player_uuid, uuid.UUID):
            raise TypeError(f"Player UUID must be UUID or None, got {type(self.player_uuid)}")
        self.player_ip = _ipv4(self.player_ip)
        self.server_ip = _ipv4(self.server_ip)
        if not 0 <= self.server_port <= 0xFFFF:
            raise ValueError(f"Server port out of range: {self.server_port}")
    
    def build(self) -> CompactPlayerLog:
        """
        Convert to the compact wire form.
        
        The name limit counts characters, not encoded bytes. The hostname is
        cut to 255 bytes, which can split a multi-byte character.
        
        Returns:
            Compact record
        
        Raises:
            NameTooLongError: If the name exceeds 16 characters
            UnknownVersionError: If the server version is not registered
        """
        if len(self.player_name) > MAX_NAME_LENGTH:
            raise NameTooLongError(
                f"Player name too long: {len(self.player_name)} > {MAX_NAME_LENGTH}"
            )
        
        player_uuid = self.player_uuid.bytes if self.player_uuid is not None else None
        server_hostname = self.server_hostname.encode("utf-8")[:MAX_HOSTNAME_BYTES]
        
        return CompactPlayerLog(
            binary_version=BINARY_VERSION,
            flags=self.flags.bits(),
            player_uuid=player_uuid,
            player_name=self.player_name.encode("utf-8"),
            player_ip=self.player_ip.packed,
            server_ip=self.server_ip.packed,
            server_port=self.server_port,
            server_hostname=server_hostname,
            version_code=code_for(self.server_version),
        )
    
    @classmethod
    def from_compact(cls, log: CompactPlayerLog) -> "PlayerLog":
        """
        Rebuild the editable form from a compact record.
        
        Raises:
            InvalidFlagsError: If reserved flag bits are set
            InvalidNameError: If the name is not valid UTF-8
            InvalidHostnameError: If the hostname is not valid UTF-8
            UnknownVersionCodeError: If the version code is not registered
        """
        flags = LogFlags.from_bits(log.flags)
        
        player_uuid = uuid.UUID(bytes=log.player_uuid) if log.player_uuid is not None else None
        
        try:
            player_name = log.player_name.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidNameError(f"Invalid player name: {e}") from e
        
        try:
            server_hostname = log.server_hostname.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidHostnameError(f"Invalid server hostname: {e}") from e
        
        return cls(
            flags=flags,
            player_uuid=player_uuid,
            player_name=player_name,
            player_ip=ipaddress.IPv4Address(log.player_ip),
            server_ip=ipaddress.IPv4Address(log.server_ip),
            server_port=log.server_port,
            server_hostname=server_hostname,
            server_version=label_for(log.version_code),
        )
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "flags": self.flags.bits(),
            "player_uuid": str(self.player_uuid) if self.player_uuid is not None else None,
            "player_name": self.player_name,
            "player_ip": str(self.player_ip),
            "server_ip": str(self.server_ip),
            "server_port": self.server_port,
            "server_hostname": self.server_hostname,
            "server_version": self.server_version,
        }
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerLog":
        """
        Create from dictionary produced by to_dict().
        
        Raises:
            InvalidFlagsError: If reserved flag bits are set
            ValidationError: If a field is missing or malformed
        """
        flags = LogFlags.from_bits(data.get("flags", 0))
        try:
            raw_uuid = data.get("player_uuid")
            return cls(
                flags=flags,
                player_uuid=uuid.UUID(raw_uuid) if raw_uuid is not None else None,
                player_name=data["player_name"],
                player_ip=data["player_ip"],
                server_ip=data["server_ip"],
                server_port=int(data["server_port"]),
                server_hostname=data["server_hostname"],
                server_version=data["server_version"],
            )
        except KeyError as e:
            raise ValidationError(f"Missing field: {e.args[0]}") from e
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Malformed player log: {e}") from e


def _ipv4(value: Union[str, bytes, int, ipaddress.IPv4Address]) -> ipaddress.IPv4Address:
    if isinstance(value, ipaddress.IPv4Address):
        return value
    return ipaddress.IPv4Address(value)
