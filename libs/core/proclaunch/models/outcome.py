from dataclasses import dataclass
from enum import Enum
from typing import Any

from proclaunch.models.process import PID_UNKNOWN


class OutcomeKind(str, Enum):
    """How a single launch attempt ended."""

    SUCCESS = "success"
    TRANSIENT_FAILURE = "transient_failure"
    PERMANENT_FAILURE = "permanent_failure"


@dataclass(frozen=True)
class LaunchOutcome:
    """Result of one launch attempt.

    Callers branch on ``kind``; ``message`` is for humans only.

    Attributes:
        kind: Success, transient failure (retry) or permanent failure (abort)
        message: Human-readable reason
        process: Process handle, only set on success
        pid: Discovered process id, PID_UNKNOWN when not resolved
        exit_code: Exit code when the process died during the attempt
    """

    kind: OutcomeKind
    message: str = ""
    process: Any = None
    pid: int = PID_UNKNOWN
    exit_code: int | None = None

    @classmethod
    def success(cls, process: Any, pid: int = PID_UNKNOWN) -> "LaunchOutcome":
        if pid > PID_UNKNOWN:
            message = f"Process started with pid {pid}"
        else:
            message = "Process started, pid not resolved"
        return cls(OutcomeKind.SUCCESS, message, process=process, pid=pid)

    @classmethod
    def transient(cls, message: str, exit_code: int | None = None) -> "LaunchOutcome":
        return cls(OutcomeKind.TRANSIENT_FAILURE, message, exit_code=exit_code)

    @classmethod
    def permanent(cls, message: str, exit_code: int | None = None) -> "LaunchOutcome":
        return cls(OutcomeKind.PERMANENT_FAILURE, message, exit_code=exit_code)

    @property
    def succeeded(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @property
    def should_retry(self) -> bool:
        return self.kind is OutcomeKind.TRANSIENT_FAILURE

    @property
    def pid_known(self) -> bool:
        return self.pid > PID_UNKNOWN
