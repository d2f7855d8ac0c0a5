"""Tests for single-record serialization and deserialization."""

import dataclasses
import io
import struct

import pytest

from playerlog.core.errors import (
    FieldTooLongError,
    FormatError,
    InvalidFlagsError,
    MissingIdentityError,
    TrailingDataError,
    TruncatedInputError,
    UnsupportedVersionError,
)
from playerlog.core.format import (
    RecordReader,
    deserialize_record,
    read_record,
    record_size,
    serialize_record,
    write_record,
)
from playerlog.core.record import CompactPlayerLog, PlayerLog


class TestSerialize:
    """Test record serialization."""
    
    def test_online_layout(self, alice):
        """Test exact byte layout of an online record."""
        data = serialize_record(alice.build())
        
        hostname = b"play.example.com"
        expected_size = 1 + 1 + 16 + (1 + 5) + 4 + 4 + 2 + (1 + len(hostname)) + 1
        
        assert len(data) == expected_size
        assert data[0] == 0x01
        assert data[1] == 0x02
        assert data[2:18] == bytes(range(16))
        assert data[18] == 5
        assert data[19:24] == b"Alice"
        assert data[24:28] == bytes([1, 2, 3, 4])
        assert data[28:32] == bytes([5, 6, 7, 8])
        assert data[32:34] == struct.pack(">H", 25565)
        assert data[34] == len(hostname)
        assert data[35:35 + len(hostname)] == hostname
        assert data[-1] == 0x0D
    
    def test_seventeen_byte_hostname_layout(self, alice):
        """Test a 17 byte hostname gives a 53 byte record."""
        log = dataclasses.replace(alice, server_hostname="play.example.com.")
        
        data = serialize_record(log.build())
        
        assert len(data) == 53
        assert data[0] == 0x01
        assert data[1] == 0x02
        assert data[-1] == 0x0D
    
    def test_offline_layout_has_no_uuid(self, offline_log):
        """Test offline records skip the UUID field."""
        data = serialize_record(offline_log.build())
        
        assert data[:2] == b"\x01\x01"
        assert data[2] == 3
        assert data[3:6] == b"Bob"
        assert len(data) == 1 + 1 + (1 + 3) + 4 + 4 + 2 + (1 + 8) + 1
    
    def test_uuid_skipped_when_offline(self, alice):
        """Test a UUID without IS_ONLINE is not written."""
        compact = dataclasses.replace(alice.build(), flags=0)
        
        data = serialize_record(compact)
        
        assert len(data) == record_size(compact)
        assert bytes(range(16)) not in data
    
    def test_missing_identity(self, alice):
        """Test IS_ONLINE without a UUID raises MissingIdentityError."""
        compact = dataclasses.replace(alice.build(), player_uuid=None)
        
        with pytest.raises(MissingIdentityError):
            serialize_record(compact)
    
    def test_field_too_long(self, alice):
        """Test name over 255 bytes raises FieldTooLongError."""
        compact = dataclasses.replace(alice.build(), player_name=b"x" * 256)
        
        with pytest.raises(FieldTooLongError, match="Player name too long"):
            serialize_record(compact)
    
    def test_wrong_address_width(self, alice):
        """Test IP fields must be exactly 4 bytes."""
        compact = dataclasses.replace(alice.build(), server_ip=b"\x01\x02\x03")
        
        with pytest.raises(FormatError, match="Server IP"):
            serialize_record(compact)
    
    def test_port_out_of_range(self, alice):
        """Test port outside 16 bits raises FormatError."""
        compact = dataclasses.replace(alice.build(), server_port=0x10000)
        
        with pytest.raises(FormatError, match="out of range"):
            serialize_record(compact)
    
    def test_failed_write_leaves_buffer_untouched(self, alice):
        """Test a failed write appends nothing."""
        buffer = bytearray(b"prefix")
        compact = dataclasses.replace(alice.build(), player_uuid=None)
        
        with pytest.raises(MissingIdentityError):
            write_record(compact, buffer)
        
        assert buffer == b"prefix"
    
    def test_write_record_appends(self, alice, offline_log):
        """Test write_record appends and reports size."""
        buffer = bytearray()
        
        first = write_record(alice.build(), buffer)
        second = write_record(offline_log.build(), buffer)
        
        assert first + second == len(buffer)
        assert buffer[:first] == serialize_record(alice.build())
    
    def test_record_size(self, alice, offline_log):
        """Test computed size matches serialized length."""
        for log in (alice, offline_log):
            compact = log.build()
            assert record_size(compact) == len(serialize_record(compact))


class TestDeserialize:
    """Test record deserialization."""
    
    def test_round_trip(self, alice, offline_log):
        """Test decode(encode(c)) == c."""
        for log in (alice, offline_log):
            compact = log.build()
            assert deserialize_record(serialize_record(compact)) == compact
    
    def test_round_trip_raw_bytes(self, alice):
        """Test non UTF-8 payloads survive the codec."""
        compact = dataclasses.replace(
            alice.build(),
            player_name=b"\xff\x00\xfe",
            server_hostname=bytes(range(256))[:255],
        )
        
        assert deserialize_record(serialize_record(compact)) == compact
    
    def test_unsupported_version(self, alice):
        """Test binary version other than 1 raises UnsupportedVersionError."""
        data = bytearray(serialize_record(alice.build()))
        data[0] = 2
        
        with pytest.raises(UnsupportedVersionError, match="Unsupported binary version 2"):
            deserialize_record(bytes(data))
    
    @pytest.mark.parametrize("flags", [0x04, 0x08, 0x80, 0xFF])
    def test_invalid_flags(self, alice, flags):
        """Test reserved flag bits raise InvalidFlagsError."""
        data = bytearray(serialize_record(alice.build()))
        data[1] = flags
        
        with pytest.raises(InvalidFlagsError, match="Invalid flags"):
            deserialize_record(bytes(data))
    
    def test_truncated_at_every_position(self, alice):
        """Test every proper prefix raises TruncatedInputError."""
        data = serialize_record(alice.build())
        
        for end in range(len(data)):
            with pytest.raises(TruncatedInputError):
                deserialize_record(data[:end])
    
    def test_truncated_name(self, offline_log):
        """Test name length promising more bytes than available."""
        data = serialize_record(offline_log.build())
        
        with pytest.raises(TruncatedInputError, match="player name"):
            deserialize_record(data[:4])
    
    def test_trailing_data(self, alice):
        """Test bytes after the record raise TrailingDataError."""
        data = serialize_record(alice.build()) + b"\x00"
        
        with pytest.raises(TrailingDataError):
            deserialize_record(data)
    
    def test_decoded_record_converts_back(self, alice):
        """Test the full chain back to the editable form."""
        compact = deserialize_record(serialize_record(alice.build()))
        
        assert PlayerLog.from_compact(compact) == alice


class TestRecordReader:
    """Test RecordReader cursor."""
    
    def test_sequential_reads(self, alice, offline_log):
        """Test reading consecutive records from one stream."""
        data = serialize_record(alice.build()) + serialize_record(offline_log.build())
        reader = RecordReader(io.BytesIO(data))
        
        assert read_record(reader) == alice.build()
        assert read_record(reader) == offline_log.build()
        assert reader.position == len(data)
        reader.expect_end()
    
    def test_short_reads_are_retried(self):
        """Test streams returning partial reads are handled."""
        
        class Trickle(io.RawIOBase):
            def __init__(self, data):
                self._data = data
            
            def readable(self):
                return True
            
            def read(self, size=-1):
                chunk, self._data = self._data[:1], self._data[1:]
                return chunk
        
        reader = RecordReader(Trickle(b"\x00\x00\x00\x00\x00\x00\x00\x05"))
        
        assert reader.read_u64("count") == 5
    
    def test_read_exact_zero(self):
        """Test zero length reads succeed at end of stream."""
        reader = RecordReader.from_bytes(b"")
        
        assert reader.read_exact(0, "empty") == b""
    
    def test_compact_record_type(self, alice):
        """Test decoder returns CompactPlayerLog."""
        compact = deserialize_record(serialize_record(alice.build()))
        
        assert isinstance(compact, CompactPlayerLog)
        assert isinstance(compact.player_uuid, bytes)
