"""
Shared Mode State
=================

Coordination between the two magnetometer loops.

identical_mode is a threading.Event so any thread can read or flip it
without a lock; a flip becomes visible to the loops on their next tick.
latest_sample is a single-writer (unit 1) / single-reader (unit 2) cell
guarded by a lock.
"""

import threading
import logging
from dataclasses import replace
from typing import Optional

from .magnetometer_model import MagnetometerSample

logger = logging.getLogger(__name__)


class SharedModeState:
    """Identical-mode flag plus the sample cell unit 1 publishes into."""
    
    def __init__(self, identical_mode: bool = False):
        self._identical = threading.Event()
        if identical_mode:
            self._identical.set()
            
        self._lock = threading.Lock()
        self._latest: Optional[MagnetometerSample] = None
        
    @property
    def identical_mode(self) -> bool:
        return self._identical.is_set()
        
    @identical_mode.setter
    def identical_mode(self, value: bool):
        self.set_identical_mode(value)
        
    def set_identical_mode(self, value: bool):
        """
        Switch between identical (splitter) and independent mode.

        Any change of mode empties the sample cell, so unit 2 never
        re-emits a sample from an earlier identical session.
        """
        if value != self.identical_mode:
            with self._lock:
                self._latest = None
        if value:
            self._identical.set()
        else:
            self._identical.clear()
        logger.info(f"Magnetometers set to {'IDENTICAL' if value else 'INDEPENDENT'} mode")
        
    def toggle(self) -> bool:
        """
        Flip the mode.
        
        Returns:
            The new value of identical_mode
        """
        new_value = not self.identical_mode
        self.set_identical_mode(new_value)
        return new_value
        
    def publish(self, sample: MagnetometerSample):
        """Store the primary unit's latest sample."""
        with self._lock:
            self._latest = replace(sample)
            
    def latest(self) -> Optional[MagnetometerSample]:
        """Copy of the most recently published sample, or None."""
        with self._lock:
            if self._latest is None:
                return None
            return replace(self._latest)
