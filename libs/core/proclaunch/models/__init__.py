"""Data models for proclaunch."""

from proclaunch.models.actions import ActionResult
from proclaunch.models.config import (
    LaunchConfig,
    LoggingConfig,
    ProclaunchConfig,
    RetryConfig,
)
from proclaunch.models.outcome import LaunchOutcome, OutcomeKind
from proclaunch.models.process import PID_UNKNOWN, ProcessQuery, SpawnSpec

__all__ = [
    "ActionResult",
    "LaunchConfig",
    "LaunchOutcome",
    "LoggingConfig",
    "OutcomeKind",
    "PID_UNKNOWN",
    "ProcessQuery",
    "ProclaunchConfig",
    "RetryConfig",
    "SpawnSpec",
]
