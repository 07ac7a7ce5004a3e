"""
Base Sensor Emulator
====================

Fixed-rate emulation loop shared by the GPS and magnetometer emulators.

Each emulator runs on its own thread: check the stop event, generate the
frames for this tick, write them to the sink, wait for the next deadline.
Write failures are counted and dropped, never retried.
"""

import time
import threading
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .sinks import ByteSink

logger = logging.getLogger(__name__)


class EmulatorState(Enum):
    """Emulation loop states."""
    STOPPED = 0
    RUNNING = 1


@dataclass
class EmulatorConfig:
    """Base configuration for a sensor emulator."""
    name: str = "emulator"
    port: str = ""
    baudrate: int = 115200
    update_rate_hz: float = 100.0
    
    @property
    def update_interval(self) -> float:
        """Time between ticks in seconds."""
        return 1.0 / self.update_rate_hz


class SensorEmulator(ABC):
    """
    Base class for sensor emulators.
    
    Subclasses produce the frames for one tick; this class owns the thread,
    the pacing and the sink writes.
    """
    
    def __init__(
        self,
        config: EmulatorConfig,
        sink: Optional[ByteSink] = None,
        stop_event: Optional[threading.Event] = None
    ):
        """
        Initialize the emulator.
        
        Args:
            config: Emulator configuration
            sink: Destination for encoded frames (may be attached later)
            stop_event: Cancellation flag, usually shared by all emulators
        """
        self.config = config
        self.sink = sink
        self._stop_event = stop_event or threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.state = EmulatorState.STOPPED
        
        # Statistics
        self.ticks = 0
        self.frames_written = 0
        self.write_failures = 0
        
    @property
    def name(self) -> str:
        return self.config.name
        
    @property
    def running(self) -> bool:
        return self.state == EmulatorState.RUNNING
        
    def start(self) -> bool:
        """
        Start the emulation thread.
        
        Returns:
            True if started successfully
        """
        if self.running:
            return True
        if self.sink is None:
            logger.error(f"{self.name}: no sink attached")
            return False
        if self._stop_event.is_set():
            logger.error(f"{self.name}: stop already requested")
            return False
        if not self.config.update_rate_hz > 0:
            logger.error(f"{self.name}: invalid update rate {self.config.update_rate_hz!r}")
            return False
            
        self.state = EmulatorState.RUNNING
        self._thread = threading.Thread(
            target=self._run,
            daemon=True,
            name=f"{self.name}-emulator"
        )
        self._thread.start()
        logger.info(f"{self.name} emulator started at {self.config.update_rate_hz:g} Hz")
        return True
        
    def stop(self, timeout: float = 2.0):
        """Request cancellation and wait for the thread to exit."""
        self._stop_event.set()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=timeout)
        self._thread = None
        self.state = EmulatorState.STOPPED
        logger.info(f"{self.name} emulator stopped ({self.ticks} ticks, {self.write_failures} dropped frames)")
        
    def tick(self) -> int:
        """
        Run one iteration: generate this tick's frames and write them.
        
        Returns:
            Number of frames written successfully
        """
        frames = self._generate_frames()
        self.ticks += 1
        
        written = 0
        for frame in frames:
            if self._write(frame.encode('ascii')):
                written += 1
        self.frames_written += written
        return written
        
    def _run(self):
        """Emulation loop - runs at the configured rate until stopped."""
        try:
            interval = self.config.update_interval
            next_update = time.monotonic()
            
            while not self._stop_event.is_set():
                try:
                    self.tick()
                except Exception as e:
                    logger.error(f"{self.name} emulation step error: {e}")
                    break
                    
                next_update += interval
                now = time.monotonic()
                
                # Resynchronise instead of bursting after a stall
                if next_update < now - interval:
                    next_update = now
                    
                self._stop_event.wait(max(0.0, next_update - now))
        finally:
            self.state = EmulatorState.STOPPED
            
    def _write(self, data: bytes) -> bool:
        """Write one frame, dropping it if the sink is unavailable."""
        try:
            self.sink.write(data)
            return True
        except OSError as e:
            self.write_failures += 1
            if self.write_failures == 1:
                logger.warning(f"{self.name}: sink unavailable, dropping frames ({e})")
            else:
                logger.debug(f"{self.name}: dropped frame ({e})")
            return False
            
    @abstractmethod
    def _generate_frames(self) -> List[str]:
        """
        Produce the encoded frames for the current tick.
        
        Subclasses pull the next sample from their model and encode it.
        An empty list means nothing is emitted this tick.
        """
