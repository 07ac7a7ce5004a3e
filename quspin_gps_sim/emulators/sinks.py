"""
Byte Sinks
==========

Destinations the emulators write encoded frames into.

Every sink raises SinkUnavailableError when a write cannot be delivered.
The emulation loops treat that as a dropped frame and carry on.
"""

import os
import threading
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import serial

logger = logging.getLogger(__name__)


class SinkUnavailableError(OSError):
    """A frame could not be written to its sink."""


class ByteSink(ABC):
    """Destination for one emulated serial stream."""
    
    name: str = "sink"
    
    @abstractmethod
    def write(self, data: bytes):
        """
        Write one encoded frame.
        
        Raises:
            SinkUnavailableError: If the frame could not be written
        """
        
    def close(self):
        """Release the underlying resource."""


class MemorySink(ByteSink):
    """
    Collects frames in memory.
    
    Used by tests and for inspecting a stream without a serial device.
    Setting available to False makes every write fail.
    """
    
    def __init__(self, name: str = "memory"):
        self.name = name
        self.available = True
        self._frames: List[bytes] = []
        self._lock = threading.Lock()
        
    def write(self, data: bytes):
        if not self.available:
            raise SinkUnavailableError(f"{self.name} unavailable")
        with self._lock:
            self._frames.append(bytes(data))
            
    @property
    def frames(self) -> List[bytes]:
        """Copy of the frames written so far."""
        with self._lock:
            return list(self._frames)
            
    def lines(self) -> List[str]:
        """Decoded frames split into lines (terminators stripped)."""
        text = b''.join(self.frames).decode('ascii')
        return [line.rstrip('\r') for line in text.split('\n') if line]
        
    def clear(self):
        with self._lock:
            self._frames.clear()


class FileDescriptorSink(ByteSink):
    """Writes to an already open file descriptor, e.g. a pty master."""
    
    def __init__(self, fd: int, name: str = "fd", close_fd: bool = False):
        self.fd = fd
        self.name = name
        self._close_fd = close_fd
        
    def write(self, data: bytes):
        try:
            written = os.write(self.fd, data)
        except OSError as e:
            raise SinkUnavailableError(f"{self.name}: {e}") from e
        if written < len(data):
            raise SinkUnavailableError(f"{self.name}: short write ({written}/{len(data)} bytes)")
            
    def close(self):
        if self._close_fd and self.fd >= 0:
            try:
                os.close(self.fd)
            except OSError as e:
                logger.debug(f"Closing {self.name} failed: {e}")
            self.fd = -1


class SerialSink(ByteSink):
    """
    Writes to an existing serial device through pyserial.
    
    Useful when the virtual port pair is created externally, e.g. with
    socat -d -d pty,raw,echo=0 pty,raw,echo=0
    """
    
    def __init__(self, port: str, baudrate: int = 115200, name: Optional[str] = None):
        self.port = port
        self.baudrate = baudrate
        self.name = name or port
        try:
            self._serial = serial.Serial(port, baudrate, write_timeout=0)
        except serial.SerialException as e:
            raise SinkUnavailableError(f"Cannot open {port}: {e}") from e
        logger.info(f"Serial sink opened on {port} at {baudrate} baud")
        
    def write(self, data: bytes):
        try:
            self._serial.write(data)
        except serial.SerialException as e:
            raise SinkUnavailableError(f"{self.name}: {e}") from e
            
    def close(self):
        if self._serial.is_open:
            self._serial.close()
