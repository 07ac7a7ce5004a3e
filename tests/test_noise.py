"""
Tests for NoiseSource.
"""

import pytest

from quspin_gps_sim.simulation.noise import NoiseSource


class TestNoiseSource:
    """Tests for bounded noise generation."""
    
    def test_small_noise_bounds(self, noise):
        """Small noise stays within +/-0.1."""
        values = [noise.small_noise() for _ in range(2000)]
        assert all(-0.1 <= v <= 0.1 for v in values)
        assert min(values) < -0.05
        assert max(values) > 0.05
        
    def test_medium_noise_bounds(self, noise):
        """Medium noise stays within +/-1.0."""
        values = [noise.medium_noise() for _ in range(2000)]
        assert all(-1.0 <= v <= 1.0 for v in values)
        assert min(values) < -0.5
        assert max(values) > 0.5
        
    def test_returns_python_floats(self, noise):
        """Values are plain floats, not numpy scalars."""
        assert type(noise.small_noise()) is float
        assert type(noise.medium_noise()) is float
        
    def test_integer_inclusive(self, noise):
        """integer() covers both ends of the range."""
        values = {noise.integer(0, 9) for _ in range(1000)}
        assert values == set(range(10))
        
    def test_seed_reproducible(self):
        """Same seed gives the same sequence."""
        a = NoiseSource(seed=7)
        b = NoiseSource(seed=7)
        assert [a.medium_noise() for _ in range(10)] == [b.medium_noise() for _ in range(10)]


class TestIndependentSources:
    """Tests for NoiseSource.independent()."""
    
    def test_count(self):
        """Requested number of sources is created."""
        assert len(NoiseSource.independent(3, seed=1)) == 3
        
    def test_sources_differ(self):
        """Sources spawned together produce different sequences."""
        a, b = NoiseSource.independent(2, seed=1)
        assert [a.medium_noise() for _ in range(10)] != [b.medium_noise() for _ in range(10)]
        
    def test_root_seed_reproducible(self):
        """Same root seed reproduces every spawned source."""
        first = NoiseSource.independent(3, seed=99)
        second = NoiseSource.independent(3, seed=99)
        for a, b in zip(first, second):
            assert a.small_noise() == b.small_noise()
