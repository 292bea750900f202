"""Exceptions raised at the edges of the launch machinery.

A single launch attempt never raises for a failed start; it returns a
``LaunchOutcome``. These exceptions are what the retry driver and the
config loader raise to their callers.
"""

from proclaunch.models.outcome import LaunchOutcome


class ProclaunchError(Exception):
    """Base class for proclaunch errors."""


class ProcessStartError(ProclaunchError):
    """The process failed to start and retrying will not help."""

    def __init__(self, outcome: LaunchOutcome):
        super().__init__(outcome.message)
        self.outcome = outcome

    @property
    def exit_code(self) -> int | None:
        return self.outcome.exit_code


class RetryTimeoutError(ProclaunchError):
    """Every attempt within the retry budget ended in a transient failure."""

    def __init__(self, outcome: LaunchOutcome, attempts: int):
        super().__init__(
            f"Process could not be started after {attempts} attempt(s): {outcome.message}"
        )
        self.outcome = outcome
        self.attempts = attempts


class ConfigError(ProclaunchError):
    """The configuration file could not be read or parsed."""
