"""
Emulator Orchestrator
=====================

Wires the three emulated sensors together.

Manages:
- Independent noise sources for each stream
- The identical-mode flag shared by the magnetometers
- The stop event observed by every loop
- Virtual port creation and cleanup
"""

import threading
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from .base import SensorEmulator
from .gps_emulator import GPSEmulator, GPSEmulatorConfig
from .magnetometer_emulator import MagnetometerEmulator, MagnetometerEmulatorConfig
from .sinks import ByteSink
from .virtual_port import VirtualSerialPort
from ..simulation.gps_model import GPSModelConfig, GPSSampleModel
from ..simulation.magnetometer_model import MagnetometerModelConfig, MagnetometerSampleModel
from ..simulation.noise import NoiseSource
from ..simulation.shared_state import SharedModeState

logger = logging.getLogger(__name__)


@dataclass
class OrchestratorConfig:
    """Configuration for the GPS + two magnetometer suite."""
    # Stream configs
    gps: GPSEmulatorConfig = field(default_factory=GPSEmulatorConfig)
    mag1: MagnetometerEmulatorConfig = field(default_factory=MagnetometerEmulatorConfig)
    mag2: MagnetometerEmulatorConfig = field(
        default_factory=lambda: MagnetometerEmulatorConfig(name="MAG2", port="/dev/ttyAMA4")
    )

    # Model configs (unit_id is assigned per magnetometer)
    gps_model: GPSModelConfig = field(default_factory=GPSModelConfig)
    magnetometer: MagnetometerModelConfig = field(default_factory=MagnetometerModelConfig)

    identical_mode: bool = False
    seed: Optional[int] = None  # None: fresh OS entropy every run


class EmulatorOrchestrator:
    """
    Launch and coordinate the GPS and magnetometer emulators.
    
    Streams are keyed 'gps', 'mag1' and 'mag2'. Any stream without an
    injected sink gets a VirtualSerialPort at its configured path.
    """
    
    def __init__(
        self,
        config: Optional[OrchestratorConfig] = None,
        sinks: Optional[Dict[str, ByteSink]] = None
    ):
        self.config = config or OrchestratorConfig()
        self.mode = SharedModeState(self.config.identical_mode)
        self._stop_event = threading.Event()
        self._sinks = dict(sinks or {})
        self._ports: List[VirtualSerialPort] = []
        self.running = False
        
        gps_noise, mag1_noise, mag2_noise = NoiseSource.independent(3, self.config.seed)
        
        self.gps = GPSEmulator(
            GPSSampleModel(gps_noise, self.config.gps_model),
            config=self.config.gps,
            stop_event=self._stop_event
        )
        self.mag1 = MagnetometerEmulator(
            MagnetometerSampleModel(mag1_noise, replace(self.config.magnetometer, unit_id=1)),
            self.mode,
            config=self.config.mag1,
            stop_event=self._stop_event
        )
        self.mag2 = MagnetometerEmulator(
            MagnetometerSampleModel(mag2_noise, replace(self.config.magnetometer, unit_id=2)),
            self.mode,
            config=self.config.mag2,
            stop_event=self._stop_event
        )
        
    @property
    def emulators(self) -> Dict[str, SensorEmulator]:
        return {'gps': self.gps, 'mag1': self.mag1, 'mag2': self.mag2}
        
    def start(self) -> bool:
        """
        Attach sinks and start all emulators.
        
        Returns:
            True if all streams started successfully
        """
        if self.running:
            return True
        self._stop_event.clear()
        
        try:
            for key, emulator in self.emulators.items():
                emulator.sink = self._sinks.get(key) or self._open_port(emulator)
                
            for emulator in self.emulators.values():
                if not emulator.start():
                    raise RuntimeError(f"{emulator.name} emulator failed to start")
                    
            self.running = True
            logger.info(
                f"Emulator orchestrator started "
                f"(magnetometers {'IDENTICAL' if self.identical_mode else 'INDEPENDENT'})"
            )
            return True
            
        except (OSError, ValueError, RuntimeError) as e:
            logger.error(f"Failed to start orchestrator: {e}")
            self.stop()
            return False
            
    def stop(self):
        """Stop all emulators and remove the virtual ports."""
        self._stop_event.set()
        for emulator in self.emulators.values():
            emulator.stop()
            
        for port in self._ports:
            port.close()
        self._ports.clear()
        
        self.running = False
        logger.info("Emulator orchestrator stopped")
        
    def request_stop(self):
        """Ask every loop to exit; safe to call from a signal handler."""
        self._stop_event.set()
        
    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until a stop is requested.
        
        Returns:
            True if stop was requested, False on timeout
        """
        return self._stop_event.wait(timeout)
        
    @property
    def stop_requested(self) -> bool:
        return self._stop_event.is_set()
        
    @property
    def identical_mode(self) -> bool:
        return self.mode.identical_mode
        
    def set_identical_mode(self, value: bool):
        self.mode.set_identical_mode(value)
        
    def toggle_identical_mode(self) -> bool:
        """Flip identical/independent mode and return the new value."""
        return self.mode.toggle()
        
    @property
    def status(self) -> Dict[str, Any]:
        """Current mode and per-stream statistics."""
        return {
            "running": self.running,
            "identical_mode": self.identical_mode,
            "streams": {
                key: {
                    "port": emulator.config.port,
                    "state": emulator.state.name,
                    "ticks": emulator.ticks,
                    "frames_written": emulator.frames_written,
                    "write_failures": emulator.write_failures,
                }
                for key, emulator in self.emulators.items()
            },
        }
        
    def _open_port(self, emulator: SensorEmulator) -> ByteSink:
        port = VirtualSerialPort(emulator.config.port, emulator.config.baudrate)
        sink = port.open()
        self._ports.append(port)
        return sink
