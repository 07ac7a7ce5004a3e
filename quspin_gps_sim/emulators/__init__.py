"""
Sensor Emulators
================

Fixed-rate emulation loops that write encoded sensor frames into byte sinks:

- GPS Emulator: $GNGGA at 10 Hz, $GNZDA every 50 fixes, 9600 baud
- Magnetometer Emulator: QuSpin data lines at 250 Hz, 115200 baud

Usage:
    from quspin_gps_sim.emulators import EmulatorOrchestrator, MemorySink
    
    sinks = {'gps': MemorySink(), 'mag1': MemorySink(), 'mag2': MemorySink()}
    orchestrator = EmulatorOrchestrator(sinks=sinks)
    orchestrator.start()
    # ...
    orchestrator.stop()
"""

from .base import SensorEmulator, EmulatorConfig, EmulatorState
from .sinks import (
    ByteSink,
    SinkUnavailableError,
    MemorySink,
    FileDescriptorSink,
    SerialSink,
)
from .gps_emulator import GPSEmulator, GPSEmulatorConfig
from .magnetometer_emulator import MagnetometerEmulator, MagnetometerEmulatorConfig
from .virtual_port import VirtualSerialPort
from .orchestrator import EmulatorOrchestrator, OrchestratorConfig

__all__ = [
    'SensorEmulator',
    'EmulatorConfig',
    'EmulatorState',
    'ByteSink',
    'SinkUnavailableError',
    'MemorySink',
    'FileDescriptorSink',
    'SerialSink',
    'GPSEmulator',
    'GPSEmulatorConfig',
    'MagnetometerEmulator',
    'MagnetometerEmulatorConfig',
    'VirtualSerialPort',
    'EmulatorOrchestrator',
    'OrchestratorConfig',
]
