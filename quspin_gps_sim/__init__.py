"""
QuSpin + GPS Serial Emulator
============================

Emulates two QuSpin magnetometer units and a GNSS receiver by generating
synthetic readings and writing them in the exact wire formats of the real
hardware into virtual serial ports.

Usage:
    from quspin_gps_sim.emulators import EmulatorOrchestrator
    
    orchestrator = EmulatorOrchestrator()
    orchestrator.start()
    orchestrator.toggle_identical_mode()
    # ... downstream software reads /dev/ttyAMA0, /dev/ttyAMA2, /dev/ttyAMA4
    orchestrator.stop()
"""

__version__ = "1.0.0"
