"""Handle on a spawned OS process."""

import os
import subprocess
import threading
from collections import deque
from typing import IO

from proclaunch_logging import get_logger

from proclaunch.models.process import SpawnSpec

# Number of output lines kept per stream for diagnostics.
OUTPUT_TAIL_LINES = 50

# Seconds destroy() waits for a terminated process to be reaped.
DESTROY_WAIT = 1.0


class ProcessHandle:
    """Owns one spawned process and drains its output.

    stdout and stderr are piped and read by two daemon threads so the
    child never blocks on a full pipe. Every line is logged at debug level
    and the most recent lines are kept in ``stdout_tail``/``stderr_tail``.
    """

    def __init__(self, process: subprocess.Popen):
        """Wrap an already started process.

        Args:
            process: The started process, with piped output streams
        """
        self.process = process
        self.logger = get_logger('process')
        self.stdout_tail: deque[str] = deque(maxlen=OUTPUT_TAIL_LINES)
        self.stderr_tail: deque[str] = deque(maxlen=OUTPUT_TAIL_LINES)
        self._readers: list[threading.Thread] = []

        self._start_reader(process.stdout, "stdout", self.stdout_tail)
        self._start_reader(process.stderr, "stderr", self.stderr_tail)

    @classmethod
    def spawn(cls, spec: SpawnSpec) -> "ProcessHandle":
        """Start a process from a spawn spec.

        Raises:
            OSError: If the process cannot be created (e.g. missing executable)
        """
        env = os.environ.copy() if spec.inherit_environment else {}
        env.update(spec.environment)

        process = subprocess.Popen(
            spec.command_line(),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=spec.working_directory,
            env=env,
            text=True,
            errors="replace",
        )
        return cls(process)

    @property
    def pid(self) -> int:
        """OS pid of the direct child."""
        return self.process.pid

    def exit_code(self) -> int | None:
        """Exit code if the process has terminated, without waiting."""
        return self.process.poll()

    def is_alive(self) -> bool:
        return self.exit_code() is None

    def destroy(self) -> None:
        """Terminate the process if it is still running and reap it.

        A process that ignores the terminate request for longer than
        DESTROY_WAIT is left running; it is reaped by a later poll.
        """
        if not self.is_alive():
            return

        self.logger.debug("Terminating process", os_pid=self.pid)
        self.process.terminate()
        try:
            self.process.wait(timeout=DESTROY_WAIT)
        except subprocess.TimeoutExpired:
            self.logger.warning("Process still running after terminate", os_pid=self.pid)

    def wait(self, timeout: float | None = None) -> int:
        """Wait for the process to exit and return its exit code."""
        exit_code = self.process.wait(timeout=timeout)
        for reader in self._readers:
            reader.join(timeout=1)
        return exit_code

    def _start_reader(self, stream: IO[str] | None, name: str, tail: deque) -> None:
        if stream is None:
            return
        reader = threading.Thread(
            target=self._pump,
            args=(stream, name, tail),
            name=f"proclaunch-{name}-{self.pid}",
            daemon=True,
        )
        reader.start()
        self._readers.append(reader)

    def _pump(self, stream: IO[str], name: str, tail: deque) -> None:
        with stream:
            for line in stream:
                line = line.rstrip("\r\n")
                tail.append(line)
                self.logger.debug(line, stream=name, os_pid=self.pid)
