from dataclasses import dataclass, field


@dataclass
class LaunchConfig:
    """Timing and exit-code constants of a single launch attempt.

    Attributes:
        find_pid_retries: Maximum number of pid lookups per attempt
        find_pid_interval: Seconds to sleep between two lookups
        startup_grace_delay: Seconds to wait before the first lookup on
            platforms whose probe asks for it
        transient_exit_code: Exit code of a known crash worth retrying
    """

    find_pid_retries: int = 10
    find_pid_interval: float = 0.25
    startup_grace_delay: float = 2.0
    transient_exit_code: int = 81

    def __post_init__(self):
        if self.find_pid_retries < 1:
            raise ValueError("find_pid_retries must be at least 1")
        if self.find_pid_interval < 0 or self.startup_grace_delay < 0:
            raise ValueError("delays cannot be negative")


@dataclass
class RetryConfig:
    """Fixed-interval retry budget for repeated launch attempts.

    Attributes:
        initial_delay: Seconds to wait before the first attempt
        interval: Seconds to wait between attempts
        timeout: Total seconds after which retrying stops
    """

    initial_delay: float = 0.0
    interval: float = 0.25
    timeout: float = 120.0


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_dir: str = "~/.proclaunch/logs"
    enable_file: bool = True
    enable_console: bool = True
    enable_syslog: bool = False

    def __post_init__(self):
        self.level = validate_log_level(self.level)


def validate_log_level(level: str) -> str:
    """Normalize a log level name, rejecting unknown ones."""
    normalized = str(level).upper()
    if normalized not in LOG_LEVELS:
        raise ValueError(
            f"Unknown log level {level!r}, expected one of {', '.join(LOG_LEVELS)}"
        )
    return normalized


@dataclass
class ProclaunchConfig:
    """Top-level configuration."""
    launch: LaunchConfig = field(default_factory=LaunchConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
