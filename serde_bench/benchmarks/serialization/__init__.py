"""
Serialization benchmarks - JSON vs MessagePack round trips.
"""

from .benchmark import (
    SerializationFormat,
    JSON_FORMAT,
    MSGPACK_FORMAT,
    FORMATS,
    get_format,
    payload_path,
    write_operation,
    read_operation,
    measure_format,
    SerializationBenchmarkSuite,
)

__all__ = [
    "SerializationFormat",
    "JSON_FORMAT",
    "MSGPACK_FORMAT",
    "FORMATS",
    "get_format",
    "payload_path",
    "write_operation",
    "read_operation",
    "measure_format",
    "SerializationBenchmarkSuite",
]
