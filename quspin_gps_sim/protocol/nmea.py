"""
NMEA Encoder
============

Builds the sentences a u-blox style GNSS receiver emits:

    $GNGGA,HHMMSS.SS,DDMM.MMMMM,N,DDDMM.MMMMM,W,1,09,0.57,208.7,M,-36.0,M,,*XX\r\n
    $GNZDA,HHMMSS.SS,DD,MM,YYYY,00,00*XX\r\n

The checksum is the XOR of every character between '$' and '*', written as
two uppercase hex digits.
"""

from datetime import date, datetime, timezone
from typing import Optional, Union

from ..simulation.gps_model import GPSSample, UTCTime

GEOID_SEPARATION = "-36.0"


def compute_checksum(payload: str) -> str:
    """
    Compute XOR checksum for an NMEA sentence.
    
    Args:
        payload: Sentence content between $ and *
        
    Returns:
        Two-character uppercase hex checksum
    """
    checksum = 0
    for c in payload:
        checksum ^= ord(c)
    return f"{checksum:02X}"


def verify_checksum(sentence: str) -> bool:
    """
    Verify the checksum of an NMEA sentence.
    
    Args:
        sentence: Full sentence including $ and *XX (line ending allowed)
        
    Returns:
        True if checksum is valid
    """
    sentence = sentence.strip()
    if not sentence.startswith('$') or '*' not in sentence:
        return False
        
    star = sentence.index('*')
    expected = sentence[star + 1:]
    if len(expected) != 2:
        return False
    return compute_checksum(sentence[1:star]) == expected.upper()


def _wrap(payload: str) -> str:
    return f"${payload}*{compute_checksum(payload)}\r\n"


def _format_coordinate(value: float, degree_width: int) -> str:
    abs_value = abs(value)
    degrees = int(abs_value)
    minutes = round((abs_value - degrees) * 60.0, 5)
    # 59.999999' rounds to 60.00000'
    if minutes >= 60.0:
        degrees += 1
        minutes -= 60.0
    return f"{degrees:0{degree_width}d}{minutes:08.5f}"


def format_latitude(latitude: float) -> str:
    """Decimal degrees to DDMM.MMMMM (hemisphere handled separately)."""
    return _format_coordinate(latitude, 2)


def format_longitude(longitude: float) -> str:
    """Decimal degrees to DDDMM.MMMMM (hemisphere handled separately)."""
    return _format_coordinate(longitude, 3)


def encode_gngga(sample: GPSSample) -> str:
    """Encode a fix as a $GNGGA sentence, CRLF terminated."""
    payload = (
        f"GNGGA,{sample.utc_time},"
        f"{format_latitude(sample.latitude)},{'N' if sample.latitude >= 0 else 'S'},"
        f"{format_longitude(sample.longitude)},{'E' if sample.longitude >= 0 else 'W'},"
        f"{sample.fix_quality},{sample.satellites:02d},{sample.hdop:.2f},"
        f"{sample.altitude:.1f},M,{GEOID_SEPARATION},M,,"
    )
    return _wrap(payload)


def encode_gnzda(utc_time: Union[UTCTime, str], utc_date: Optional[date] = None) -> str:
    """
    Encode a $GNZDA time/date sentence, CRLF terminated.
    
    Args:
        utc_time: Time of day of the accompanying fix
        utc_date: Date to report; None reads the current UTC date from the
            system clock, as the emulated receiver always has
    """
    if utc_date is None:
        utc_date = datetime.now(timezone.utc).date()
    payload = f"GNZDA,{utc_time},{utc_date.day:02d},{utc_date.month:02d},{utc_date.year},00,00"
    return _wrap(payload)
