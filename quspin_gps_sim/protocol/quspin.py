"""
QuSpin Line Protocol
====================

ASCII data line of the QuSpin total-field magnetometer (no checksum):

    !52930.412_X-785.203=@012>86336848s139v114\n

    !<scalar nT><_ valid | * invalid>
    <axis><vector nT><= valid | ? invalid>
    @<data counter, 3 digits>
    ><timestamp ms>
    s<scalar sensitivity, 3 digits>
    v<vector sensitivity, 3 digits>
"""

import re

from ..simulation.magnetometer_model import Axis, MagnetometerSample

SCALAR_VALID = '_'
SCALAR_INVALID = '*'
VECTOR_VALID = '='
VECTOR_INVALID = '?'

_LINE_RE = re.compile(
    r'^!(?P<scalar>-?\d+\.\d{3})(?P<scalar_flag>[_*])'
    r'(?P<axis>[XYZ])(?P<vector>-?\d+\.\d{3})(?P<vector_flag>[=?])'
    r'@(?P<counter>\d{3})>(?P<timestamp>\d+)'
    r's(?P<ss>\d{3})v(?P<vs>\d{3})$'
)


class QuSpinParseError(ValueError):
    """Raised when a line does not follow the QuSpin data format."""


def encode_quspin_line(sample: MagnetometerSample) -> str:
    """Encode a sample as a newline-terminated QuSpin data line."""
    scalar_flag = SCALAR_VALID if sample.scalar_valid else SCALAR_INVALID
    vector_flag = VECTOR_VALID if sample.vector_valid else VECTOR_INVALID
    return (
        f"!{sample.scalar_field_nT:.3f}{scalar_flag}"
        f"{sample.axis.value}{sample.vector_field_nT:.3f}{vector_flag}"
        f"@{sample.counter:03d}"
        f">{sample.timestamp_ms}"
        f"s{sample.scalar_sensitivity:03d}"
        f"v{sample.vector_sensitivity:03d}\n"
    )


def parse_quspin_line(line: str) -> MagnetometerSample:
    """
    Parse a QuSpin data line.
    
    Args:
        line: One line, with or without the trailing newline
        
    Returns:
        Decoded sample (field values rounded to the wire precision)
        
    Raises:
        QuSpinParseError: If the line is malformed
    """
    match = _LINE_RE.match(line.rstrip('\r\n'))
    if not match:
        raise QuSpinParseError(f"Not a QuSpin data line: {line!r}")
        
    return MagnetometerSample(
        scalar_field_nT=float(match['scalar']),
        scalar_valid=match['scalar_flag'] == SCALAR_VALID,
        axis=Axis(match['axis']),
        vector_field_nT=float(match['vector']),
        vector_valid=match['vector_flag'] == VECTOR_VALID,
        counter=int(match['counter']),
        timestamp_ms=int(match['timestamp']),
        scalar_sensitivity=int(match['ss']),
        vector_sensitivity=int(match['vs']),
    )
