"""proclaunch: start a worker process and decide between success, retry and abort."""

from proclaunch.actions import LaunchActions
from proclaunch.errors import (
    ConfigError,
    ProclaunchError,
    ProcessStartError,
    RetryTimeoutError,
)
from proclaunch.models import (
    PID_UNKNOWN,
    LaunchConfig,
    LaunchOutcome,
    OutcomeKind,
    ProcessQuery,
    RetryConfig,
    SpawnSpec,
)
from proclaunch.process_manager import (
    ProcessHandle,
    RetryDriver,
    StartProcessAttempt,
    StartupGrace,
    detect_probe,
)

__all__ = [
    # Actions
    "LaunchActions",
    # Errors
    "ConfigError",
    "ProclaunchError",
    "ProcessStartError",
    "RetryTimeoutError",
    # Models
    "PID_UNKNOWN",
    "LaunchConfig",
    "LaunchOutcome",
    "OutcomeKind",
    "ProcessQuery",
    "RetryConfig",
    "SpawnSpec",
    # Process Manager
    "ProcessHandle",
    "RetryDriver",
    "StartProcessAttempt",
    "StartupGrace",
    "detect_probe",
]
