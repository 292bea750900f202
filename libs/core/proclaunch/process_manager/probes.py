"""Platform-specific lookup of a process id from a process query."""

import os
import re
import subprocess
import sys
from typing import Protocol

from proclaunch_logging import get_logger

from proclaunch.models.process import PID_UNKNOWN, ProcessQuery

# "  1234     1 /usr/bin/soffice --accept=..." -> ("1234", "1", "/usr/bin/soffice --accept=...")
PROCESS_LINE = re.compile(r"^\s*(\d+)\s+(\d+)\s+(.*)$")


class ProcessIdProbe(Protocol):
    """Capability to look up the pid of a process by its command line.

    ``needs_startup_grace`` marks probes whose platform needs a pause
    between spawning and the first lookup.
    """

    needs_startup_grace: bool

    def can_find_pid(self) -> bool: ...
    def find_pid(self, query: ProcessQuery) -> int: ...


class NullProcessProbe:
    """Probe for platforms where pids cannot be looked up.

    Launch attempts treat it as "pid unknown" and still succeed.
    """

    needs_startup_grace = False

    def can_find_pid(self) -> bool:
        return False

    def find_pid(self, query: ProcessQuery) -> int:
        return PID_UNKNOWN


class CommandLineProbe:
    """Base for probes that list processes with an external command.

    Subclasses provide ``list_command``; each output line must look like
    ``<pid> <parent pid> <command line>``. The calling process and its
    ancestors are never reported: their command lines often carry the same
    program and argument as the process being looked for.
    """

    needs_startup_grace = False
    list_command: tuple[str, ...] = ()
    timeout: float = 10.0

    def __init__(self):
        self.logger = get_logger('probe')

    def can_find_pid(self) -> bool:
        return True

    def find_pid(self, query: ProcessQuery) -> int:
        """Find the pid of the first process matching the query.

        Args:
            query: Command and argument expected in the command line

        Returns:
            The pid, or PID_UNKNOWN if no process matched or listing failed
        """
        output = self._list_processes()
        if output is None:
            return PID_UNKNOWN

        processes = []
        for line in output.splitlines():
            match = PROCESS_LINE.match(line)
            if match:
                processes.append((int(match.group(1)), int(match.group(2)), match.group(3)))

        lineage = own_lineage({pid: ppid for pid, ppid, _ in processes})
        for pid, _, command_line in processes:
            if pid not in lineage and query.matches(command_line):
                return pid

        return PID_UNKNOWN

    def _list_processes(self) -> str | None:
        """Run the listing command.

        Returns:
            Command output, or None when the command could not be run
        """
        try:
            result = subprocess.run(
                list(self.list_command),
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            self.logger.warning(
                "Process listing command not found", command=self.list_command[0]
            )
            return None
        except subprocess.SubprocessError as e:
            self.logger.warning("Process listing failed", error_text=str(e))
            return None

        if result.returncode != 0:
            self.logger.warning(
                "Process listing exited with an error",
                exit_code=result.returncode,
                stderr=result.stderr.strip(),
            )
            return None

        return result.stdout


class UnixProcessProbe(CommandLineProbe):
    """Linux and other POSIX systems with a procps-style ``ps``."""

    list_command = ("ps", "-ww", "-e", "-o", "pid,ppid,args")


class MacProcessProbe(CommandLineProbe):
    """macOS ``ps``."""

    list_command = ("ps", "-ww", "-e", "-o", "pid,ppid,command")


class FreeBSDProcessProbe(CommandLineProbe):
    """FreeBSD ``ps``.

    The process started on FreeBSD is not reliably usable right after
    spawning, so this probe asks for the startup grace pause. Why FreeBSD
    needs it has never been established.
    """

    needs_startup_grace = True
    list_command = ("ps", "-ww", "-ax", "-o", "pid,ppid,command")


class WindowsProcessProbe(CommandLineProbe):
    """Windows, through PowerShell's CIM process listing."""

    list_command = (
        "powershell",
        "-NoProfile",
        "-NonInteractive",
        "-Command",
        "Get-CimInstance Win32_Process | "
        "ForEach-Object { \"$($_.ProcessId) $($_.ParentProcessId) $($_.CommandLine)\" }",
    )


def detect_probe(platform: str | None = None) -> ProcessIdProbe:
    """Pick the probe for the given (or current) platform.

    Args:
        platform: Value in the format of ``sys.platform``

    Returns:
        Probe instance; NullProcessProbe for unknown platforms
    """
    platform = platform or sys.platform

    if platform == "darwin":
        return MacProcessProbe()
    if platform.startswith("freebsd"):
        return FreeBSDProcessProbe()
    if platform in ("win32", "cygwin"):
        return WindowsProcessProbe()
    if platform.startswith(("linux", "openbsd", "netbsd", "sunos", "aix")):
        return UnixProcessProbe()
    return NullProcessProbe()


def own_lineage(parents: dict[int, int]) -> set[int]:
    """Pids of the current process and all of its ancestors.

    Args:
        parents: Map of pid to parent pid from a process listing

    Returns:
        The current pid, its parent and every further ancestor found
    """
    lineage = {os.getpid(), os.getppid()}
    pid = os.getppid()
    while pid in parents and parents[pid] not in lineage and parents[pid] > 0:
        pid = parents[pid]
        lineage.add(pid)
    return lineage
