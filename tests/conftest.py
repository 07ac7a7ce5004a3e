"""
Shared test fixtures for emulator unit tests.
"""

import pytest

from quspin_gps_sim.simulation.noise import NoiseSource
from quspin_gps_sim.simulation.shared_state import SharedModeState
from quspin_gps_sim.simulation.magnetometer_model import (
    Axis,
    MagnetometerSample,
    MagnetometerModelConfig,
    MagnetometerSampleModel,
)
from quspin_gps_sim.simulation.gps_model import GPSSample, GPSSampleModel, UTCTime
from quspin_gps_sim.emulators.sinks import MemorySink


@pytest.fixture
def noise():
    """Seeded noise source for reproducible tests."""
    return NoiseSource(seed=1234)


@pytest.fixture
def mode():
    """Shared state in independent mode."""
    return SharedModeState()


@pytest.fixture
def identical_mode():
    """Shared state in identical (splitter) mode."""
    return SharedModeState(identical_mode=True)


@pytest.fixture
def mag1():
    """Primary magnetometer unit."""
    return MagnetometerSampleModel(
        NoiseSource(seed=1),
        MagnetometerModelConfig(unit_id=1)
    )


@pytest.fixture
def mag2():
    """Secondary magnetometer unit (no read delay)."""
    return MagnetometerSampleModel(
        NoiseSource(seed=2),
        MagnetometerModelConfig(unit_id=2, secondary_delay=0.0)
    )


@pytest.fixture
def gps_model(noise):
    """GPS model at the default fix."""
    return GPSSampleModel(noise)


@pytest.fixture
def memory_sink():
    """In-memory byte sink."""
    return MemorySink("test")


@pytest.fixture
def sample_magnetometer():
    """Known magnetometer sample for encoding tests."""
    return MagnetometerSample(
        scalar_field_nT=52930.4121,
        scalar_valid=True,
        axis=Axis.X,
        vector_field_nT=-785.2034,
        vector_valid=True,
        counter=12,
        timestamp_ms=86336848,
        scalar_sensitivity=139,
        vector_sensitivity=114,
    )


@pytest.fixture
def sample_gps():
    """Known GPS fix for encoding tests."""
    return GPSSample(
        latitude=43.833357,
        longitude=-79.310330,
        altitude=208.7,
        hdop=0.57,
        satellites=9,
        fix_quality=1,
        utc_time=UTCTime(16, 57, 32, 50),
    )
