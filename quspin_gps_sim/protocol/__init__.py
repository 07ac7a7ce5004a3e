"""
Wire Protocols
==============

Pure encoders for the emulated sensors' serial output:

- NMEA 0183 $GNGGA / $GNZDA sentences (GPS receiver)
- QuSpin ASCII data lines (magnetometer)
"""

from .nmea import (
    compute_checksum,
    verify_checksum,
    format_latitude,
    format_longitude,
    encode_gngga,
    encode_gnzda,
)
from .quspin import QuSpinParseError, encode_quspin_line, parse_quspin_line

__all__ = [
    'compute_checksum',
    'verify_checksum',
    'format_latitude',
    'format_longitude',
    'encode_gngga',
    'encode_gnzda',
    'QuSpinParseError',
    'encode_quspin_line',
    'parse_quspin_line',
]
