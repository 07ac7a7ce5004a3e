"""
Tests for NMEA Encoder
======================

Checksum, coordinate formatting and the exact $GNGGA / $GNZDA layouts.
"""

from datetime import date, datetime, timezone
from functools import reduce

import pytest

from quspin_gps_sim.protocol.nmea import (
    compute_checksum,
    verify_checksum,
    format_latitude,
    format_longitude,
    encode_gngga,
    encode_gnzda,
)
from quspin_gps_sim.simulation.gps_model import GPSSample, UTCTime


def xor_fold(sentence: str) -> str:
    """Reference checksum: XOR of everything between '$' and '*'."""
    body = sentence[sentence.index('$') + 1:sentence.index('*')]
    return f"{reduce(lambda acc, c: acc ^ ord(c), body, 0):02X}"


class TestChecksum:
    """Tests for the XOR checksum."""
    
    def test_known_sentence(self):
        """Classic GGA example from the NMEA reference."""
        payload = "GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,"
        assert compute_checksum(payload) == "47"
        
    def test_uppercase_two_digits(self):
        assert compute_checksum("") == "00"
        assert compute_checksum("A") == "41"
        assert compute_checksum("GNZ") == f"{ord('G') ^ ord('N') ^ ord('Z'):02X}"
        
    def test_verify_valid(self):
        assert verify_checksum("$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47")
        assert verify_checksum("$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47\r\n")
        
    def test_verify_invalid(self):
        assert not verify_checksum("$GPGGA,123519*00")
        assert not verify_checksum("GPGGA,123519*47")
        assert not verify_checksum("$GPGGA,123519")
        assert not verify_checksum("$GPGGA,123519*4")


class TestCoordinateFormat:
    """Tests for DDMM.MMMMM / DDDMM.MMMMM conversion."""
    
    def test_reference_latitude(self):
        """43.833357 -> 43 degrees 50.00142 minutes"""
        assert format_latitude(43.833357) == "4350.00142"
        
    def test_reference_longitude(self):
        assert format_longitude(-79.310330) == "07918.61980"
        
    def test_degree_padding(self):
        assert format_latitude(5.5) == "0530.00000"
        assert format_longitude(5.5) == "00530.00000"
        
    def test_minute_padding(self):
        """Minutes below 10 keep two integer digits."""
        assert format_latitude(5.05) == "0503.00000"
        
    def test_sign_dropped(self):
        """Hemisphere carries the sign, the field does not."""
        assert format_latitude(-33.5) == "3330.00000"
        
    def test_minutes_round_up_carries(self):
        """59.9999999' rounds into the next degree instead of 60.00000'."""
        assert format_latitude(10.99999999999) == "1100.00000"
        
    def test_zero(self):
        assert format_latitude(0.0) == "0000.00000"
        assert format_longitude(0.0) == "00000.00000"


class TestGNGGA:
    """Tests for $GNGGA encoding."""
    
    def test_exact_layout(self, sample_gps):
        sentence = encode_gngga(sample_gps)
        body = "GNGGA,165732.50,4350.00142,N,07918.61980,W,1,09,0.57,208.7,M,-36.0,M,,"
        assert sentence == f"${body}*{compute_checksum(body)}\r\n"
        
    def test_checksum_property(self, sample_gps, gps_model):
        """XOR-folding the body reproduces the trailing digits."""
        sentences = [encode_gngga(sample_gps)] + [encode_gngga(gps_model.tick()) for _ in range(50)]
        for sentence in sentences:
            assert sentence.endswith("\r\n")
            assert sentence.rstrip()[-2:] == xor_fold(sentence)
            assert verify_checksum(sentence)
            
    def test_field_count(self, sample_gps):
        fields = encode_gngga(sample_gps).split('*')[0].split(',')
        assert len(fields) == 15
        assert fields[0] == "$GNGGA"
        
    def test_hemispheres(self, sample_gps):
        sample_gps.latitude = -12.25
        sample_gps.longitude = 130.5
        fields = encode_gngga(sample_gps).split(',')
        assert fields[2:6] == ["1215.00000", "S", "13030.00000", "E"]
        
    def test_precision(self):
        sample = GPSSample(
            latitude=1.0, longitude=2.0, altitude=12.345, hdop=1.2,
            satellites=12, fix_quality=1, utc_time=UTCTime(1, 2, 3, 4)
        )
        fields = encode_gngga(sample).split(',')
        assert fields[1] == "010203.04"
        assert fields[7] == "12"
        assert fields[8] == "1.20"
        assert fields[9] == "12.3"
        
    def test_negative_altitude(self, sample_gps):
        sample_gps.altitude = -3.26
        fields = encode_gngga(sample_gps).split(',')
        assert fields[9] == "-3.3"
        assert verify_checksum(encode_gngga(sample_gps))


class TestGNZDA:
    """Tests for $GNZDA encoding."""
    
    def test_exact_layout(self):
        sentence = encode_gnzda(UTCTime(16, 57, 32, 50), date(2025, 3, 7))
        body = "GNZDA,165732.50,07,03,2025,00,00"
        assert sentence == f"${body}*{compute_checksum(body)}\r\n"
        
    def test_accepts_string_time(self):
        sentence = encode_gnzda("165732.50", date(2025, 3, 7))
        assert sentence.startswith("$GNZDA,165732.50,07,03,2025,00,00*")
        
    def test_system_date(self):
        """Without a date the current UTC date is reported."""
        before = datetime.now(timezone.utc).date()
        sentence = encode_gnzda(UTCTime(0, 0, 0, 0))
        after = datetime.now(timezone.utc).date()
        
        fields = sentence.split('*')[0].split(',')
        reported = date(int(fields[4]), int(fields[3]), int(fields[2]))
        assert reported in (before, after)
        assert verify_checksum(sentence)
        
    def test_checksum_property(self):
        sentence = encode_gnzda(UTCTime(23, 59, 59, 90), date(1999, 12, 31))
        assert sentence.rstrip()[-2:] == xor_fold(sentence)
