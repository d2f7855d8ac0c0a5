#!/usr/bin/env python3
"""
Serialization benchmarks for player logs.

Compares JSON against the binary batch codec, plain and compressed.

Usage:
    python -m playerlog.benchmark --count 500000
    python -m playerlog.benchmark --count 10000 --level 9 --log-level DEBUG
"""

import argparse
import json
import sys
import time
from typing import Callable, List, Optional, Sequence

from playerlog.batch.codec import BatchConfig, BatchSerializer
from playerlog.batch.compression import CompressedBatchSerializer, CompressionLevel
from playerlog.core.errors import PlayerLogError
from playerlog.core.record import CompactPlayerLog, PlayerLog
from playerlog.generator import generate_logs
from playerlog.utils.config import get_config
from playerlog.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def _round_trip(name: str, encode: Callable[[], bytes], decode: Callable[[bytes], object], expected) -> dict:
    start_time = time.perf_counter()
    
    encoded = encode()
    decoded = decode(encoded)
    
    duration = time.perf_counter() - start_time
    
    return {
        "test": name,
        "duration_sec": duration,
        "size_bytes": len(encoded),
        "ok": decoded == expected,
    }


def benchmark_json(logs: Sequence[PlayerLog]) -> dict:
    """
    Benchmark JSON round trip of the editable records.
    
    Args:
        logs: Records to encode
    
    Returns:
        Performance metrics
    """
    return _round_trip(
        "json",
        lambda: json.dumps([log.to_dict() for log in logs]).encode("utf-8"),
        lambda data: [PlayerLog.from_dict(item) for item in json.loads(data)],
        list(logs),
    )


def benchmark_binary(compact: Sequence[CompactPlayerLog], serializer: BatchSerializer) -> dict:
    """Benchmark binary batch round trip."""
    return _round_trip(
        "binary",
        lambda: serializer.serialize_many(compact),
        serializer.deserialize_many,
        list(compact),
    )


def benchmark_compressed(
    compact: Sequence[CompactPlayerLog],
    serializer: CompressedBatchSerializer,
) -> dict:
    """Benchmark compressed binary batch round trip."""
    result = _round_trip(
        "binary_compressed",
        lambda: serializer.serialize_many(compact),
        serializer.deserialize_many,
        list(compact),
    )
    result["level"] = serializer.level
    return result


def run_benchmarks(count: int, level: int, batch_config: BatchConfig, seed: Optional[int] = None) -> List[dict]:
    """
    Generate records and run every benchmark.
    
    Returns:
        One metrics dict per benchmark
    """
    start_time = time.perf_counter()
    logs = generate_logs(count, seed=seed)
    compact = [log.build() for log in logs]
    logger.info(
        "Generated logs",
        count=len(logs),
        duration_sec=round(time.perf_counter() - start_time, 3),
    )
    
    serializer = BatchSerializer(batch_config)
    return [
        benchmark_json(logs),
        benchmark_binary(compact, serializer),
        benchmark_compressed(compact, CompressedBatchSerializer(level, serializer)),
    ]


def parse_args(argv: Optional[Sequence[str]] = None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description='Player log serialization benchmark'
    )
    
    parser.add_argument(
        '--count',
        type=int,
        default=100_000,
        help='Number of records to generate (default: 100000)'
    )
    
    parser.add_argument(
        '--level',
        type=int,
        default=None,
        choices=range(int(CompressionLevel.NONE), int(CompressionLevel.BEST) + 1),
        help='gzip compression level 0-9 (default: from config)'
    )
    
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for reproducible records'
    )
    
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to a YAML configuration file'
    )
    
    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: from config)'
    )
    
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    config = get_config(args.config)
    
    configure_logging(
        log_level=args.log_level or config.get("logging.level", "INFO"),
        log_format=config.get("logging.format", "console"),
    )
    
    level = args.level if args.level is not None else config.get("compression.level")
    
    try:
        results = run_benchmarks(
            count=args.count,
            level=level,
            batch_config=BatchConfig.from_config(config),
            seed=args.seed,
        )
    except PlayerLogError as e:
        logger.error("Benchmark failed", error=str(e), exc_info=True)
        return 1
    
    failed = False
    for result in results:
        print(
            f"{result['test']}: {result['duration_sec'] * 1000:.1f}ms, "
            f"{result['size_bytes']:,} bytes"
        )
        if not result["ok"]:
            failed = True
            logger.error("Round trip mismatch", test=result["test"])
    
    if failed:
        return 1
    
    print("all round trips successful")
    return 0


if __name__ == '__main__':
    sys.exit(main())
