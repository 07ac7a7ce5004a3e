"""
Magnetometer Emulator
=====================

Emulates one QuSpin magnetometer on a 115200 baud serial line, one data
line every 4 ms (250 Hz).

Both units share a SharedModeState. In identical mode unit 1 generates and
publishes every sample and unit 2 re-emits it, so the two ports carry the
same bytes as a single sensor behind a splitter.
"""

import threading
import logging
from dataclasses import dataclass
from typing import List, Optional

from .base import SensorEmulator, EmulatorConfig
from .sinks import ByteSink
from ..protocol.quspin import encode_quspin_line
from ..simulation.magnetometer_model import MagnetometerSample, MagnetometerSampleModel
from ..simulation.shared_state import SharedModeState

logger = logging.getLogger(__name__)


@dataclass
class MagnetometerEmulatorConfig(EmulatorConfig):
    """Configuration for a magnetometer emulator."""
    name: str = "MAG1"
    port: str = "/dev/ttyAMA2"
    baudrate: int = 115200
    update_rate_hz: float = 250.0


class MagnetometerEmulator(SensorEmulator):
    """Streams QuSpin data lines for one magnetometer unit."""
    
    def __init__(
        self,
        model: MagnetometerSampleModel,
        mode: SharedModeState,
        sink: Optional[ByteSink] = None,
        config: Optional[MagnetometerEmulatorConfig] = None,
        stop_event: Optional[threading.Event] = None
    ):
        config = config or MagnetometerEmulatorConfig()
        super().__init__(config, sink, stop_event)
        self.model = model
        self.mode = mode
        self.last_sample: Optional[MagnetometerSample] = None
        
    def _generate_frames(self) -> List[str]:
        sample = self.model.next_sample(self.mode)
        if sample is None:
            return []
        self.last_sample = sample
        return [encode_quspin_line(sample)]
