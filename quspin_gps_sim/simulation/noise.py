"""
Noise Source
============

Bounded uniform perturbations used by all sample models.

Every emulation loop owns its own generator. Generators created together
through NoiseSource.independent() come from one numpy SeedSequence, so a
single seed reproduces a whole run without correlating the streams.
"""

from typing import List, Optional

import numpy as np


class NoiseSource:
    """Uniform noise generator backed by numpy.random.Generator."""
    
    SMALL_AMPLITUDE = 0.1
    MEDIUM_AMPLITUDE = 1.0
    
    def __init__(self, seed: Optional[int] = None, *, seed_sequence: Optional[np.random.SeedSequence] = None):
        """
        Initialize the noise source.
        
        Args:
            seed: Integer seed, None for OS entropy
            seed_sequence: Pre-spawned SeedSequence (takes precedence over seed)
        """
        if seed_sequence is None:
            seed_sequence = np.random.SeedSequence(seed)
        self._rng = np.random.default_rng(seed_sequence)
        
    @classmethod
    def independent(cls, count: int, seed: Optional[int] = None) -> List['NoiseSource']:
        """
        Create statistically independent noise sources.
        
        Args:
            count: Number of sources to create
            seed: Root seed, None for OS entropy
            
        Returns:
            List of noise sources, one per consumer
        """
        children = np.random.SeedSequence(seed).spawn(count)
        return [cls(seed_sequence=child) for child in children]
        
    def small_noise(self) -> float:
        """Uniform value in [-0.1, 0.1]."""
        return float(self._rng.uniform(-self.SMALL_AMPLITUDE, self.SMALL_AMPLITUDE))
        
    def medium_noise(self) -> float:
        """Uniform value in [-1.0, 1.0]."""
        return float(self._rng.uniform(-self.MEDIUM_AMPLITUDE, self.MEDIUM_AMPLITUDE))
        
    def integer(self, low: int, high: int) -> int:
        """Uniform integer in [low, high] (inclusive)."""
        return int(self._rng.integers(low, high, endpoint=True))
