"""
Magnetometer Sample Model
=========================

Generates QuSpin readings for one magnetometer unit.

Each sample carries one scalar reading |B| and one vector component. The
vector axis rotates X -> Y -> Z -> X on every sample, the data counter steps
by 2 in [0, 498] and the hardware timestamp steps by 4 ms without wraparound.

Two units can run either independently (each with its own noise and unit 2
offset by a fixed baseline separation) or in identical mode, where unit 1
is the only source of data and unit 2 re-emits the sample unit 1 published,
like a single sensor behind a passive splitter.
"""

import time
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, TYPE_CHECKING

from .noise import NoiseSource

if TYPE_CHECKING:
    from .shared_state import SharedModeState

logger = logging.getLogger(__name__)

PRIMARY_UNIT = 1

COUNTER_STEP = 2
COUNTER_MAX = 498
TIMESTAMP_STEP_MS = 4


class Axis(Enum):
    """Vector channel reported by a sample."""
    X = 'X'
    Y = 'Y'
    Z = 'Z'
    
    def next(self) -> 'Axis':
        """Next axis in the fixed X -> Y -> Z -> X cycle."""
        return _AXIS_CYCLE[self]


_AXIS_CYCLE = {Axis.X: Axis.Y, Axis.Y: Axis.Z, Axis.Z: Axis.X}


def next_counter(counter: int, step: int = COUNTER_STEP, limit: int = COUNTER_MAX) -> int:
    """Advance the data counter, resetting to 0 when the step passes the limit."""
    counter += step
    if counter > limit:
        counter = 0
    return counter


@dataclass
class MagnetometerSample:
    """One QuSpin reading."""
    scalar_field_nT: float = 0.0
    scalar_valid: bool = True
    
    axis: Axis = Axis.X
    vector_field_nT: float = 0.0
    vector_valid: bool = True
    
    counter: int = 0              # 0-498, steps of 2
    timestamp_ms: int = 0         # free-running, steps of 4
    scalar_sensitivity: int = 0   # 135-144
    vector_sensitivity: int = 0   # 110-119


@dataclass
class MagnetometerModelConfig:
    """Baselines and cadence constants for a magnetometer unit."""
    unit_id: int = 1
    
    # Earth-field baselines (nT)
    base_scalar_field: float = 52930.0
    base_vector_x: float = -785.0
    base_vector_y: float = 53000.0
    base_vector_z: float = 990.0
    
    # Y channel is noisier than X/Z
    y_noise_gain: float = 10.0
    
    # Baseline separation of unit 2 in independent mode (nT)
    independent_offset: float = 10.0
    
    initial_timestamp_ms: int = 86336800
    
    scalar_sensitivity_base: int = 135
    vector_sensitivity_base: int = 110
    sensitivity_span: int = 9
    
    # Head start given to the primary before the secondary reads (seconds)
    secondary_delay: float = 0.0001
    
    @property
    def is_primary(self) -> bool:
        return self.unit_id == PRIMARY_UNIT
        
    @property
    def offset(self) -> float:
        """Scalar offset applied in independent mode."""
        return 0.0 if self.is_primary else self.independent_offset


class MagnetometerSampleModel:
    """
    Produces successive samples for one magnetometer unit.
    
    Holds the running axis, counter and timestamp. In identical mode only
    the primary unit advances them; the secondary copies what the primary
    last published.
    """
    
    def __init__(self, noise: NoiseSource, config: Optional[MagnetometerModelConfig] = None):
        self.config = config or MagnetometerModelConfig()
        self.noise = noise
        
        self.axis = Axis.X
        self.counter = 0
        self.timestamp_ms = self.config.initial_timestamp_ms
        
    @property
    def unit_id(self) -> int:
        return self.config.unit_id
        
    @property
    def is_primary(self) -> bool:
        return self.config.is_primary
        
    def next_sample(self, mode: 'SharedModeState') -> Optional[MagnetometerSample]:
        """
        Produce the sample for the current tick.
        
        Args:
            mode: Shared identical-mode flag and sample cell
            
        Returns:
            The sample to emit, or None when this is the secondary unit in
            identical mode and the primary has not published anything yet
        """
        identical = mode.identical_mode
        
        if identical and not self.is_primary:
            if self.config.secondary_delay > 0:
                time.sleep(self.config.secondary_delay)
            return mode.latest()
            
        offset = 0.0 if identical else self.config.offset
        sample = self._generate(offset)
        self.advance()
        
        if identical:
            mode.publish(sample)
        return sample
        
    def advance(self):
        """Step counter (+2, wrap at 498), timestamp (+4 ms) and axis."""
        self.counter = next_counter(self.counter)
        self.timestamp_ms += TIMESTAMP_STEP_MS
        self.axis = self.axis.next()
        
    def _generate(self, offset: float) -> MagnetometerSample:
        """Build a sample from the current counters without advancing them."""
        cfg = self.config
        
        scalar = cfg.base_scalar_field + offset + self.noise.medium_noise()
        
        if self.axis == Axis.X:
            vector = cfg.base_vector_x + self.noise.medium_noise()
        elif self.axis == Axis.Y:
            vector = cfg.base_vector_y + self.noise.medium_noise() * cfg.y_noise_gain
        else:
            vector = cfg.base_vector_z + self.noise.medium_noise()
            
        return MagnetometerSample(
            scalar_field_nT=scalar,
            scalar_valid=True,
            axis=self.axis,
            vector_field_nT=vector,
            vector_valid=True,
            counter=self.counter,
            timestamp_ms=self.timestamp_ms,
            scalar_sensitivity=cfg.scalar_sensitivity_base + self.noise.integer(0, cfg.sensitivity_span),
            vector_sensitivity=cfg.vector_sensitivity_base + self.noise.integer(0, cfg.sensitivity_span),
        )
