#!/usr/bin/env python3
"""
Simple demo of the player log codec.

Builds one record by hand, then round-trips a generated batch through the
plain and compressed batch codecs.
"""

import ipaddress
import uuid

from playerlog import (
    CompressionLevel,
    LogFlags,
    PlayerLog,
    deserialize_many,
    deserialize_many_compressed,
    deserialize_record,
    serialize_many,
    serialize_many_compressed,
    serialize_record,
)
from playerlog.generator import generate_logs
from playerlog.utils.logging import configure_logging


def main():
    configure_logging(log_level="WARNING")
    
    print("=" * 60)
    print("playerlog - Simple Codec Demo")
    print("=" * 60)
    
    print("\n[1] Building a single record...")
    log = PlayerLog(
        flags=LogFlags(LogFlags.IS_ONLINE | LogFlags.PLAYER_AUTH),
        player_uuid=uuid.uuid4(),
        player_name="Alice",
        player_ip=ipaddress.IPv4Address("1.2.3.4"),
        server_ip=ipaddress.IPv4Address("5.6.7.8"),
        server_port=25565,
        server_hostname="play.example.com",
        server_version="1.20",
    )
    data = serialize_record(log.build())
    print(f"  Encoded {len(data)} bytes: {data.hex()}")
    
    restored = PlayerLog.from_compact(deserialize_record(data))
    print(f"  Decoded back: {restored == log}")
    
    print("\n[2] Encoding a batch of 10,000 generated records...")
    compact = [entry.build() for entry in generate_logs(10_000, seed=42)]
    
    batch = serialize_many(compact)
    print(f"  Batch: {len(batch):,} bytes, round trip {deserialize_many(batch) == compact}")
    
    for level in (CompressionLevel.FASTEST, CompressionLevel.DEFAULT, CompressionLevel.BEST):
        compressed = serialize_many_compressed(compact, level)
        ok = deserialize_many_compressed(compressed) == compact
        print(f"  {level.name:<8} {len(compressed):>10,} bytes, round trip {ok}")
    
    print("\n" + "=" * 60)
    print("Demo complete")
    print("=" * 60)


if __name__ == "__main__":
    main()
