"""Shared fixtures for playerlog tests."""

import ipaddress
import uuid

import pytest

from playerlog.core.flags import LogFlags
from playerlog.core.record import PlayerLog
from playerlog.generator import generate_logs

ALICE_UUID = uuid.UUID(bytes=bytes(range(16)))


@pytest.fixture
def alice():
    """Online player log used across codec tests."""
    return PlayerLog(
        flags=LogFlags(LogFlags.IS_ONLINE),
        player_uuid=ALICE_UUID,
        player_name="Alice",
        player_ip=ipaddress.IPv4Address("1.2.3.4"),
        server_ip=ipaddress.IPv4Address("5.6.7.8"),
        server_port=25565,
        server_hostname="play.example.com",
        server_version="1.20",
    )


@pytest.fixture
def offline_log():
    """Offline, authenticated player log without a UUID."""
    return PlayerLog(
        flags=LogFlags(LogFlags.PLAYER_AUTH),
        player_uuid=None,
        player_name="Bob",
        player_ip="10.0.0.1",
        server_ip="10.0.0.2",
        server_port=1,
        server_hostname="mc.local",
        server_version="1.8",
    )


@pytest.fixture
def compact_logs():
    """Reproducible batch of compact logs."""
    return [log.build() for log in generate_logs(57, seed=1234)]
