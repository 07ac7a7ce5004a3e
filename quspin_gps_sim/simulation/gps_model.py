"""
GPS Sample Model
================

Random-walk position around a fixed fix, plus a synthetic UTC clock that
advances by exactly one tick per sample and is never tied to real time.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional

from .noise import NoiseSource

logger = logging.getLogger(__name__)


@dataclass
class UTCTime:
    """Time of day with centisecond resolution."""
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    centiseconds: int = 0

    @classmethod
    def parse(cls, text: str) -> 'UTCTime':
        """Parse 'HH:MM:SS.cc' (centiseconds optional)."""
        clock, _, fraction = text.strip().partition('.')
        hours, minutes, seconds = (int(part) for part in clock.split(':'))
        centiseconds = int(fraction.ljust(2, '0')[:2]) if fraction else 0
        if not (0 <= hours < 24 and 0 <= minutes < 60 and 0 <= seconds < 60):
            raise ValueError(f"Invalid time of day: {text!r}")
        return cls(hours, minutes, seconds, centiseconds)

    def advance(self, centiseconds: int) -> bool:
        """
        Advance the clock, carrying into seconds, minutes and hours.
        
        Args:
            centiseconds: Amount to add
            
        Returns:
            True if the clock wrapped past midnight
        """
        total = (
            ((self.hours * 60 + self.minutes) * 60 + self.seconds) * 100
            + self.centiseconds + centiseconds
        )
        days, total = divmod(total, 24 * 60 * 60 * 100)
        
        total, self.centiseconds = divmod(total, 100)
        total, self.seconds = divmod(total, 60)
        self.hours, self.minutes = divmod(total, 60)
        return days > 0
        
    def __str__(self) -> str:
        """HHMMSS.SS as used in NMEA sentences."""
        return f"{self.hours:02d}{self.minutes:02d}{self.seconds:02d}.{self.centiseconds:02d}"


@dataclass
class GPSSample:
    """Current GPS fix."""
    latitude: float = 0.0       # decimal degrees, north positive
    longitude: float = 0.0      # decimal degrees, east positive
    altitude: float = 0.0       # meters
    hdop: float = 0.57
    satellites: int = 9
    fix_quality: int = 1        # 0=no fix, 1=GPS fix
    utc_time: UTCTime = field(default_factory=UTCTime)
    utc_date: Optional[date] = None  # None: GNZDA uses the system date


@dataclass
class GPSModelConfig:
    """Baseline fix and tick parameters."""
    base_latitude: float = 43.833357     # 43°50.00142'N
    base_longitude: float = -79.310330   # 079°18.61980'W
    base_altitude: float = 208.7
    
    hdop: float = 0.57
    satellites: int = 9
    fix_quality: int = 1
    
    # Start of the synthetic clock (16:57:32.50)
    start_time: UTCTime = field(default_factory=lambda: UTCTime(16, 57, 32, 50))
    start_date: Optional[date] = None
    
    tick_centiseconds: int = 10
    
    # Small-noise scaling of the random walk
    position_noise_scale: float = 1e-6   # degrees
    altitude_noise_scale: float = 0.1    # meters


class GPSSampleModel:
    """Single long-lived GPS fix, mutated in place on every tick."""
    
    def __init__(self, noise: NoiseSource, config: Optional[GPSModelConfig] = None):
        self.config = config or GPSModelConfig()
        self.noise = noise
        
        cfg = self.config
        self.sample = GPSSample(
            latitude=cfg.base_latitude,
            longitude=cfg.base_longitude,
            altitude=cfg.base_altitude,
            hdop=cfg.hdop,
            satellites=cfg.satellites,
            fix_quality=cfg.fix_quality,
            utc_time=UTCTime(
                cfg.start_time.hours,
                cfg.start_time.minutes,
                cfg.start_time.seconds,
                cfg.start_time.centiseconds,
            ),
            utc_date=cfg.start_date,
        )
        
    def tick(self) -> GPSSample:
        """Perturb the position, advance the clock one tick and return the fix."""
        cfg = self.config
        sample = self.sample
        
        sample.latitude += self.noise.small_noise() * cfg.position_noise_scale
        sample.longitude += self.noise.small_noise() * cfg.position_noise_scale
        sample.altitude += self.noise.small_noise() * cfg.altitude_noise_scale
        
        wrapped = sample.utc_time.advance(cfg.tick_centiseconds)
        if wrapped and sample.utc_date is not None:
            sample.utc_date += timedelta(days=1)
            
        return sample
