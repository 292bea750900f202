"""Launch actions used by the CLI."""

from proclaunch_logging import get_logger

from proclaunch.errors import ProcessStartError, RetryTimeoutError
from proclaunch.models.actions import ActionResult
from proclaunch.models.config import ProclaunchConfig
from proclaunch.models.process import ProcessQuery, SpawnSpec
from proclaunch.process_manager import (
    ProcessIdProbe,
    RetryDriver,
    StartProcessAttempt,
    detect_probe,
)


class LaunchActions:
    """Encapsulates process launching for the CLI.

    Builds the spawn spec and query from plain arguments, runs attempts
    through the retry driver and turns every result into an ActionResult.
    """

    def __init__(
        self,
        config: ProclaunchConfig | None = None,
        probe: ProcessIdProbe | None = None,
    ):
        """Initialize launch actions.

        Args:
            config: Launch, retry and logging settings
            probe: Pid lookup, detected from the platform if omitted
        """
        self.config = config or ProclaunchConfig()
        self.probe = probe or detect_probe()
        self.logger = get_logger('actions')

    def start(
        self,
        program: str,
        arguments: list[str] | None = None,
        query_argument: str | None = None,
        query_command: str | None = None,
        environment: dict[str, str] | None = None,
        working_directory: str | None = None,
        wait: bool = False,
    ) -> ActionResult:
        """Start a process and confirm it is running.

        Args:
            program: Executable to start
            arguments: Arguments for the program
            query_argument: Text identifying this process in its command line;
                defaults to the last argument
            query_command: Program name expected in the command line;
                defaults to the program
            environment: Extra environment variables
            working_directory: Working directory for the process
            wait: Whether to block until the started process exits

        Returns:
            ActionResult with pid, os_pid and attempts in ``data``
        """
        arguments = arguments or []
        if query_argument is None and not arguments:
            return ActionResult(
                success=False,
                message="A query argument is required when the program has no arguments",
            )

        spec = SpawnSpec(
            program=program,
            arguments=arguments,
            environment=environment or {},
            working_directory=working_directory,
        )
        query = ProcessQuery(
            command=query_command or program,
            argument=query_argument if query_argument is not None else arguments[-1],
        )
        starter = StartProcessAttempt(spec, query, self.probe, config=self.config.launch)
        driver = RetryDriver(self.config.retry)

        try:
            outcome = driver.execute(starter.attempt)
        except OSError as e:
            return ActionResult(
                success=False,
                message=f"Failed to start process: {e}",
                data={"attempts": driver.attempts},
            )
        except ProcessStartError as e:
            return ActionResult(
                success=False,
                message=str(e),
                data={"attempts": driver.attempts, "exit_code": e.exit_code},
            )
        except RetryTimeoutError as e:
            return ActionResult(
                success=False,
                message=str(e),
                data={"attempts": e.attempts},
            )

        data = {
            "pid": outcome.pid if outcome.pid_known else None,
            "os_pid": outcome.process.pid,
            "attempts": driver.attempts,
        }

        if not wait:
            return ActionResult(success=True, message=outcome.message, data=data)

        exit_code = outcome.process.wait()
        self.logger.info("Process exited", os_pid=data["os_pid"], exit_code=exit_code)
        data["exit_code"] = exit_code
        return ActionResult(
            success=exit_code == 0,
            message=f"Process exited with code {exit_code}",
            data=data,
        )

    def probe_info(self) -> ActionResult:
        """Describe the pid probe selected for this platform."""
        return ActionResult(
            success=True,
            message=type(self.probe).__name__,
            data={
                "probe": type(self.probe).__name__,
                "can_find_pid": self.probe.can_find_pid(),
                "needs_startup_grace": bool(getattr(self.probe, "needs_startup_grace", False)),
                "startup_grace_delay": self.config.launch.startup_grace_delay,
                "find_pid_retries": self.config.launch.find_pid_retries,
                "find_pid_interval": self.config.launch.find_pid_interval,
            },
        )
