"""Fixed-interval driver that repeats launch attempts."""

import time
from collections.abc import Callable

from proclaunch_logging import get_logger

from proclaunch.errors import ProcessStartError, RetryTimeoutError
from proclaunch.models.config import RetryConfig
from proclaunch.models.outcome import LaunchOutcome, OutcomeKind


class RetryDriver:
    """Runs an attempt until it succeeds, fails for good, or time runs out.

    The driver never runs two attempts at once and waits the same interval
    between every attempt.
    """

    def __init__(
        self,
        config: RetryConfig | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or RetryConfig()
        self.sleep = sleep
        self.clock = clock
        self.logger = get_logger('retry')
        self.attempts = 0

    def execute(self, attempt: Callable[[], LaunchOutcome]) -> LaunchOutcome:
        """Call ``attempt`` until it returns a success.

        Args:
            attempt: One launch attempt, e.g. StartProcessAttempt.attempt

        Returns:
            The successful outcome

        Raises:
            ProcessStartError: An attempt ended in a permanent failure
            RetryTimeoutError: The timeout was reached on transient failures
        """
        self.attempts = 0
        start = self.clock()

        if self.config.initial_delay > 0:
            self.sleep(self.config.initial_delay)

        while True:
            self.attempts += 1
            outcome = attempt()

            if outcome.kind is OutcomeKind.SUCCESS:
                self.logger.info(
                    "Process started", attempts=self.attempts, pid=outcome.pid
                )
                return outcome

            if outcome.kind is OutcomeKind.PERMANENT_FAILURE:
                self.logger.error(
                    "Process start failed", attempts=self.attempts, reason=outcome.message
                )
                raise ProcessStartError(outcome)

            elapsed = self.clock() - start
            if elapsed + self.config.interval >= self.config.timeout:
                raise RetryTimeoutError(outcome, self.attempts)

            self.logger.info(
                "Attempt failed, retrying",
                attempts=self.attempts,
                reason=outcome.message,
                interval=self.config.interval,
            )
            self.sleep(self.config.interval)
