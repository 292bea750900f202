"""One attempt at starting a process and confirming it is up."""

import time
from collections.abc import Callable

from proclaunch_logging import ProclaunchLogger, get_logger

from proclaunch.models.config import LaunchConfig
from proclaunch.models.outcome import LaunchOutcome
from proclaunch.models.process import PID_UNKNOWN, ProcessQuery, SpawnSpec
from proclaunch.process_manager.probes import ProcessIdProbe
from proclaunch.process_manager.process_handle import ProcessHandle
from proclaunch.process_manager.startup_grace import StartupGrace


class StartProcessAttempt:
    """Starts a process once and classifies how the start went.

    Each call to ``attempt()`` spawns a fresh process, then polls until the
    process has either died or become visible under its query. The result is
    a LaunchOutcome:

    - success: the process is running (its pid may stay unknown when the
      probe cannot look pids up on this platform)
    - transient failure: it died with the known transient exit code, or it
      stayed alive but never showed up, in which case it is destroyed
    - permanent failure: it died with any other exit code

    Attempts are meant to be run one after another by a RetryDriver; the
    instance state below belongs to the latest attempt only.

    Usage:
        starter = StartProcessAttempt(spec, query, detect_probe())
        outcome = RetryDriver().execute(starter.attempt)
    """

    def __init__(
        self,
        spec: SpawnSpec,
        query: ProcessQuery,
        probe: ProcessIdProbe,
        config: LaunchConfig | None = None,
        grace: StartupGrace | None = None,
        spawner: Callable[[SpawnSpec], ProcessHandle] = ProcessHandle.spawn,
        sleep: Callable[[float], None] = time.sleep,
        logger: ProclaunchLogger | None = None,
    ):
        """Initialize the attempt.

        Args:
            spec: How to spawn the process
            query: How to find the process among running processes
            probe: Pid lookup for the current platform
            config: Retry count, interval and exit code constants
            grace: Startup pause strategy, built from config if omitted
            spawner: Creates the process handle
            sleep: Blocking sleep, replaceable in tests
            logger: Logger to use instead of the shared attempt logger
        """
        self.spec = spec
        self.query = query
        self.probe = probe
        self.config = config or LaunchConfig()
        self.grace = grace or StartupGrace(self.config.startup_grace_delay)
        self.spawner = spawner
        self.sleep = sleep
        self.logger = logger or get_logger('attempt')

        self.process: ProcessHandle | None = None
        self.exit_code: int | None = None
        self.process_id: int = PID_UNKNOWN

    def attempt(self) -> LaunchOutcome:
        """Spawn the process and classify the start.

        Returns:
            The outcome of this attempt

        Raises:
            OSError: If the process could not be spawned at all
        """
        self.exit_code = None
        self.process_id = PID_UNKNOWN

        self.process = self.spawner(self.spec)
        self.logger.debug(
            "Process spawned", program=self.spec.program, os_pid=self.process.pid
        )

        self.grace.wait(self.probe, self.sleep)
        self._find_pid()

        if self.exit_code is not None:
            if self.exit_code == self.config.transient_exit_code:
                self.logger.warning(
                    "Process died with the transient exit code; restarting it",
                    exit_code=self.exit_code,
                )
                return LaunchOutcome.transient(
                    f"Process died with exit code {self.exit_code}",
                    exit_code=self.exit_code,
                )

            return LaunchOutcome.permanent(
                f"Process died with exit code: {self.exit_code}",
                exit_code=self.exit_code,
            )

        if self.probe.can_find_pid() and self.process_id <= PID_UNKNOWN:
            self._destroy_quietly()
            return LaunchOutcome.transient(
                f"A process with argument '{self.query.argument}' started "
                "but its pid could not be found; restarting it"
            )

        return LaunchOutcome.success(self.process, self.process_id)

    def _find_pid(self) -> None:
        """Poll until the process died, its pid is found, or tries run out."""
        tries = 0
        while True:
            tries += 1
            self.logger.debug("Trying to find pid", attempt_no=tries)

            exit_code = self.process.exit_code()
            if exit_code is not None:
                self.exit_code = exit_code
                return

            if not self.probe.can_find_pid():
                self.logger.debug(
                    "Probe cannot find pids on this platform",
                    probe=type(self.probe).__name__,
                )
                return

            self.process_id = self.probe.find_pid(self.query)

            if self.process_id > PID_UNKNOWN or tries >= self.config.find_pid_retries:
                return

            self.sleep(self.config.find_pid_interval)

    def _destroy_quietly(self) -> None:
        try:
            self.process.destroy()
        except Exception:
            self.logger.warning("Unable to destroy the process", exc_info=True)
