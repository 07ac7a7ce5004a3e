"""
GPS Emulator
============

Emulates a GNSS receiver on a 9600 baud serial line.

Streaming output at 10 Hz:
    $GNGGA,... every tick
    $GNZDA,... after every 50th $GNGGA
"""

import threading
import logging
from dataclasses import dataclass
from typing import List, Optional

from .base import SensorEmulator, EmulatorConfig
from .sinks import ByteSink
from ..protocol.nmea import encode_gngga, encode_gnzda
from ..simulation.gps_model import GPSSampleModel

logger = logging.getLogger(__name__)


@dataclass
class GPSEmulatorConfig(EmulatorConfig):
    """Configuration for the GPS emulator."""
    name: str = "GPS"
    port: str = "/dev/ttyAMA0"
    baudrate: int = 9600
    update_rate_hz: float = 10.0
    
    # One $GNZDA per this many $GNGGA sentences
    zda_interval: int = 50


class GPSEmulator(SensorEmulator):
    """Streams $GNGGA fixes with a periodic $GNZDA."""
    
    def __init__(
        self,
        model: GPSSampleModel,
        sink: Optional[ByteSink] = None,
        config: Optional[GPSEmulatorConfig] = None,
        stop_event: Optional[threading.Event] = None
    ):
        config = config or GPSEmulatorConfig()
        super().__init__(config, sink, stop_event)
        self.gps_config = config
        self.model = model
        self._gga_count = 0
        
    def _generate_frames(self) -> List[str]:
        sample = self.model.tick()
        frames = [encode_gngga(sample)]
        
        self._gga_count += 1
        if self._gga_count >= self.gps_config.zda_interval:
            frames.append(encode_gnzda(sample.utc_time, sample.utc_date))
            self._gga_count = 0
            
        return frames
