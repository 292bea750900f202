from dataclasses import dataclass, field

# Reserved process id meaning "not resolved yet". Anything above it is a real pid.
PID_UNKNOWN = -1


@dataclass(frozen=True)
class ProcessQuery:
    """Identifies a spawned process among the processes visible to the OS.

    A running process matches when its command line contains both the
    command and the argument.

    Attributes:
        command: Program name expected in the command line (e.g. "soffice")
        argument: Argument unique to this launch (e.g. an accept string)
    """

    command: str
    argument: str

    def matches(self, command_line: str) -> bool:
        """Check whether a process command line belongs to this query."""
        return self.command in command_line and self.argument in command_line


@dataclass
class SpawnSpec:
    """What to hand to the OS when starting the process.

    Attributes:
        program: Path or name of the executable
        arguments: Arguments passed after the program
        environment: Variables added to (or replacing) the environment
        working_directory: Working directory for the process
        inherit_environment: Whether to start from the current environment
    """

    program: str
    arguments: list[str] = field(default_factory=list)
    environment: dict[str, str] = field(default_factory=dict)
    working_directory: str | None = None
    inherit_environment: bool = True

    def command_line(self) -> list[str]:
        return [self.program, *self.arguments]
