"""
Simulation Module
=================

Stochastic sample models for the emulated sensors.
"""

from .noise import NoiseSource
from .magnetometer_model import (
    Axis,
    MagnetometerSample,
    MagnetometerModelConfig,
    MagnetometerSampleModel,
    next_counter,
)
from .gps_model import UTCTime, GPSSample, GPSModelConfig, GPSSampleModel
from .shared_state import SharedModeState

__all__ = [
    'NoiseSource',
    'Axis', 'MagnetometerSample', 'MagnetometerModelConfig',
    'MagnetometerSampleModel', 'next_counter',
    'UTCTime', 'GPSSample', 'GPSModelConfig', 'GPSSampleModel',
    'SharedModeState',
]
