"""
Virtual Serial Port
===================

Pseudo-terminal exposed under a fixed device path, so downstream software
can open e.g. /dev/ttyAMA2 exactly as it would the real sensor.

    open():  pty pair, non-blocking master, raw slave at the requested baud,
             symlink path -> /dev/pts/N (an existing device at path is
             moved to path.backup first)
    close(): remove the symlink, restore the backup
    
Creating links under /dev requires root.
"""

import os
import pty
import stat
import termios
import tty
import logging
from typing import Optional

from .sinks import FileDescriptorSink

logger = logging.getLogger(__name__)


class VirtualSerialPort:
    """Pty-backed stand-in for a serial device."""
    
    BACKUP_SUFFIX = ".backup"
    
    def __init__(self, path: str, baudrate: int = 115200):
        self.path = path
        self.baudrate = baudrate
        self.slave_name: Optional[str] = None
        self.sink: Optional[FileDescriptorSink] = None
        
        self._master_fd = -1
        self._slave_fd = -1
        self._backup_path: Optional[str] = None
        
    @property
    def is_open(self) -> bool:
        return self._master_fd >= 0
        
    def open(self) -> FileDescriptorSink:
        """
        Create the pty and the device link.
        
        Returns:
            Sink writing into the master side of the pty
            
        Raises:
            OSError: If the pty or the link cannot be created
            ValueError: If the baud rate is not supported by termios
        """
        speed = getattr(termios, f"B{self.baudrate}", None)
        if speed is None:
            raise ValueError(f"Unsupported baud rate: {self.baudrate}")
            
        self._master_fd, self._slave_fd = pty.openpty()
        try:
            self.slave_name = os.ttyname(self._slave_fd)
            os.set_blocking(self._master_fd, False)
            self._configure_slave(speed)
            
            self._move_existing()
            os.symlink(self.slave_name, self.path)
            os.chmod(self.path, 0o666)
        except OSError:
            self.close()
            raise
            
        self.sink = FileDescriptorSink(self._master_fd, name=self.path)
        logger.info(f"Virtual port created: {self.path} -> {self.slave_name} ({self.baudrate} baud)")
        return self.sink
        
    def close(self):
        """Close the pty, remove the link and restore any backed-up device."""
        for fd in (self._master_fd, self._slave_fd):
            if fd >= 0:
                try:
                    os.close(fd)
                except OSError:
                    pass
        self._master_fd = self._slave_fd = -1
        self.sink = None
        
        if self.slave_name and os.path.islink(self.path):
            try:
                if os.readlink(self.path) == self.slave_name:
                    os.unlink(self.path)
            except OSError as e:
                logger.warning(f"Could not remove {self.path}: {e}")
                
        if self._backup_path and os.path.lexists(self._backup_path) and not os.path.lexists(self.path):
            try:
                os.rename(self._backup_path, self.path)
                logger.info(f"Restored original {self.path}")
            except OSError as e:
                logger.warning(f"Could not restore {self.path} from {self._backup_path}: {e}")
        self._backup_path = None
        
    def _configure_slave(self, speed: int):
        """Raw mode (no echo back into the master) at the requested speed."""
        tty.setraw(self._slave_fd)
        attrs = termios.tcgetattr(self._slave_fd)
        attrs[4] = speed  # ispeed
        attrs[5] = speed  # ospeed
        termios.tcsetattr(self._slave_fd, termios.TCSANOW, attrs)
        
    def _move_existing(self):
        """Back up a real device at path, remove a stale link or file."""
        if not os.path.lexists(self.path):
            return
            
        mode = os.lstat(self.path).st_mode
        if stat.S_ISCHR(mode):
            self._backup_path = self.path + self.BACKUP_SUFFIX
            logger.warning(f"{self.path} is a real device, moving it to {self._backup_path}")
            os.rename(self.path, self._backup_path)
        else:
            logger.warning(f"{self.path} already exists, replacing it")
            os.unlink(self.path)
            
    def __enter__(self) -> 'VirtualSerialPort':
        self.open()
        return self
        
    def __exit__(self, exc_type, exc, tb):
        self.close()
