"""
Synthetic player log generator.

Produces random valid records for tests, demos and benchmarks.
"""

import ipaddress
import random
import string
import uuid
from typing import List, Optional

from playerlog.core.flags import LogFlags
from playerlog.core.record import PlayerLog
from playerlog.core.versions import labels

CHARSET = string.ascii_uppercase + string.digits


def _random_string(rng: random.Random, min_length: int, max_length: int) -> str:
    """Random string with length in [min_length, max_length)."""
    length = rng.randrange(min_length, max_length)
    return "".join(rng.choice(CHARSET) for _ in range(length))


def _random_ip(rng: random.Random) -> ipaddress.IPv4Address:
    return ipaddress.IPv4Address(bytes(rng.randrange(1, 255) for _ in range(4)))


def generate_log(rng: Optional[random.Random] = None) -> PlayerLog:
    """
    Generate a random valid player log.
    
    Half of the records are online (carry a UUID), and half are
    authenticated, independently.
    
    Args:
        rng: Random source (unseeded if None)
    
    Returns:
        Record that always builds successfully
    """
    rng = rng or random.Random()
    
    flags = LogFlags.empty()
    player_uuid = None
    if rng.random() < 0.5:
        player_uuid = uuid.UUID(int=rng.getrandbits(128), version=4)
        flags.insert(LogFlags.IS_ONLINE)
    
    if rng.random() < 0.5:
        flags.insert(LogFlags.PLAYER_AUTH)
    
    return PlayerLog(
        flags=flags,
        player_uuid=player_uuid,
        player_name=_random_string(rng, 4, 16),
        player_ip=_random_ip(rng),
        server_ip=_random_ip(rng),
        server_port=rng.randrange(0, 0x10000),
        server_hostname=_random_string(rng, 4, 255),
        server_version=rng.choice(labels()),
    )


def generate_logs(count: int, seed: Optional[int] = None) -> List[PlayerLog]:
    """
    Generate count random player logs.
    
    Args:
        count: Number of records
        seed: Seed for reproducible output
    """
    rng = random.Random(seed)
    return [generate_log(rng) for _ in range(count)]
