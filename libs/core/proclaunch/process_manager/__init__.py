"""Process starting with pid discovery and retry classification."""

from proclaunch.process_manager.probes import (
    FreeBSDProcessProbe,
    MacProcessProbe,
    NullProcessProbe,
    ProcessIdProbe,
    UnixProcessProbe,
    WindowsProcessProbe,
    detect_probe,
)
from proclaunch.process_manager.process_handle import ProcessHandle
from proclaunch.process_manager.retry import RetryDriver
from proclaunch.process_manager.start_attempt import StartProcessAttempt
from proclaunch.process_manager.startup_grace import StartupGrace

__all__ = [
    "FreeBSDProcessProbe",
    "MacProcessProbe",
    "NullProcessProbe",
    "ProcessHandle",
    "ProcessIdProbe",
    "RetryDriver",
    "StartProcessAttempt",
    "StartupGrace",
    "UnixProcessProbe",
    "WindowsProcessProbe",
    "detect_probe",
]
