"""
Tests for the interactive Control Console.
"""

import io

import pytest

from quspin_gps_sim.control import ControlConsole
from quspin_gps_sim.emulators.orchestrator import EmulatorOrchestrator, OrchestratorConfig
from quspin_gps_sim.emulators.sinks import MemorySink


@pytest.fixture
def orchestrator():
    sinks = {'gps': MemorySink(), 'mag1': MemorySink(), 'mag2': MemorySink()}
    orch = EmulatorOrchestrator(OrchestratorConfig(seed=1), sinks=sinks)
    yield orch
    orch.stop()


@pytest.fixture
def output():
    return io.StringIO()


class TestHandleCommand:
    """Tests for single commands."""
    
    def test_toggle(self, orchestrator, output):
        console = ControlConsole(orchestrator, io.StringIO(), output)
        
        assert console.handle_command("i\n")
        assert orchestrator.identical_mode
        assert "IDENTICAL" in output.getvalue()
        
        assert console.handle_command("i")
        assert not orchestrator.identical_mode
        assert "INDEPENDENT" in output.getvalue()
        
    def test_quit(self, orchestrator, output):
        console = ControlConsole(orchestrator, io.StringIO(), output)
        assert console.handle_command("q") is False
        assert orchestrator.stop_requested
        
    def test_menu(self, orchestrator, output):
        console = ControlConsole(orchestrator, io.StringIO(), output)
        console.handle_command("m")
        text = output.getvalue()
        assert "/dev/ttyAMA0" in text
        assert "/dev/ttyAMA2" in text
        assert "/dev/ttyAMA4" in text
        assert "NO - INDEPENDENT" in text
        assert "9600" in text
        assert "115200" in text
        
    def test_menu_shows_current_mode(self, orchestrator, output):
        orchestrator.set_identical_mode(True)
        ControlConsole(orchestrator, io.StringIO(), output).show_menu()
        assert "YES - IDENTICAL" in output.getvalue()
        
    def test_unknown_command(self, orchestrator, output):
        console = ControlConsole(orchestrator, io.StringIO(), output)
        assert console.handle_command("x")
        assert "Unknown command" in output.getvalue()
        assert not orchestrator.stop_requested
        
    def test_blank_line_ignored(self, orchestrator, output):
        console = ControlConsole(orchestrator, io.StringIO(), output)
        assert console.handle_command("\n")
        assert output.getvalue() == ""


class TestRun:
    """Tests for the command loop."""
    
    def test_commands_then_quit(self, orchestrator, output):
        console = ControlConsole(orchestrator, io.StringIO("i\nm\nq\ni\n"), output)
        console.run()
        
        assert orchestrator.identical_mode
        assert orchestrator.stop_requested
        
    def test_eof_stops(self, orchestrator, output):
        console = ControlConsole(orchestrator, io.StringIO("i\n"), output)
        console.run()
        assert orchestrator.stop_requested
        
    def test_threaded(self, orchestrator, output):
        console = ControlConsole(orchestrator, io.StringIO("q\n"), output)
        console.start()
        assert orchestrator.wait(2.0)
