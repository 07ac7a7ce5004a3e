"""
Control Console
===============

Interactive command loop for a running emulator suite.

Commands (one per line):
    i - toggle identical (Y-splitter) / independent magnetometers
    m - show the menu
    q - quit
"""

import sys
import threading
import logging
from typing import Optional, TextIO

from .emulators.orchestrator import EmulatorOrchestrator

logger = logging.getLogger(__name__)


class ControlConsole:
    """Reads commands from a text stream and applies them to the orchestrator."""
    
    def __init__(
        self,
        orchestrator: EmulatorOrchestrator,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None
    ):
        self.orchestrator = orchestrator
        self.input = input_stream if input_stream is not None else sys.stdin
        self.output = output_stream if output_stream is not None else sys.stdout
        self._thread: Optional[threading.Thread] = None
        
    def start(self):
        """Run the command loop on a daemon thread."""
        self._thread = threading.Thread(target=self.run, daemon=True, name="control-console")
        self._thread.start()
        
    def run(self):
        """Show the menu and process commands until quit, EOF or stop."""
        self.show_menu()
        while not self.orchestrator.stop_requested:
            line = self.input.readline()
            if not line:
                logger.info("Control input closed, stopping")
                self.orchestrator.request_stop()
                break
            if not self.handle_command(line):
                break
                
    def handle_command(self, command: str) -> bool:
        """
        Apply one command.
        
        Returns:
            False if the console should exit
        """
        command = command.strip().lower()
        
        if command == 'q':
            self.orchestrator.request_stop()
            return False
            
        elif command == 'i':
            identical = self.orchestrator.toggle_identical_mode()
            if identical:
                self._print("\n*** Magnetometers set to: IDENTICAL (Y-splitter) ***")
                self._print("Both magnetometers now emit exactly the same data.\n")
            else:
                self._print("\n*** Magnetometers set to: INDEPENDENT ***")
                self._print("Each magnetometer generates its own data with its own noise.\n")
                
        elif command == 'm':
            self.show_menu()
            
        elif command:
            self._print(f"Unknown command '{command}' (m for menu)")
            
        return True
        
    def show_menu(self):
        """Print ports, current mode and usage hints."""
        cfg = self.orchestrator.config
        mode = "YES - IDENTICAL" if self.orchestrator.identical_mode else "NO - INDEPENDENT"
        
        self._print("\n=== QUSPIN v2 + GPS EMULATOR ===")
        self._print("Active virtual ports:")
        self._print(f"  - GPS:            {cfg.gps.port}")
        self._print(f"  - Magnetometer 1: {cfg.mag1.port}")
        self._print(f"  - Magnetometer 2: {cfg.mag2.port}")
        self._print("\nCommands:")
        self._print(f"  i - Toggle identical magnetometers/Y-splitter (current: {mode})")
        self._print("  m - Show this menu")
        self._print("  q - Quit")
        self._print("\nCurrent configuration:")
        self._print(f"  - GPS: {cfg.gps.baudrate} baud, 8N1")
        self._print(f"  - Magnetometers: {cfg.mag1.baudrate} baud, 8N1")
        self._print("  - Datacount: 0-498 (steps of 2)")
        self._print("  - Timestamp: steps of 4 ms")
        self._print("\nTo test from another terminal:")
        self._print(f"  GPS:  screen {cfg.gps.port} {cfg.gps.baudrate}")
        self._print(f"  MAG1: screen {cfg.mag1.port} {cfg.mag1.baudrate}")
        self._print(f"  MAG2: screen {cfg.mag2.port} {cfg.mag2.baudrate}")
        self._print("================================\n")
        
    def _print(self, text: str):
        print(text, file=self.output, flush=True)
