"""Unit tests for the platform pid probes."""

import os
import shutil
import subprocess
import sys
import uuid
from unittest.mock import MagicMock, patch

import pytest

from proclaunch.models.process import PID_UNKNOWN, ProcessQuery
from proclaunch.process_manager.probes import (
    FreeBSDProcessProbe,
    MacProcessProbe,
    NullProcessProbe,
    UnixProcessProbe,
    WindowsProcessProbe,
    detect_probe,
    own_lineage,
)

QUERY = ProcessQuery(command="soffice", argument="socket,host=127.0.0.1,port=2002")

PS_OUTPUT = """  PID  PPID COMMAND
    1     0 /sbin/init
  812     1 /usr/lib/libreoffice/program/soffice.bin --accept=socket,host=127.0.0.1,port=2003
  815     1 /usr/lib/libreoffice/program/soffice.bin --accept=socket,host=127.0.0.1,port=2002 --headless
  901     1 bash
"""


def completed(stdout="", returncode=0, stderr=""):
    return MagicMock(stdout=stdout, returncode=returncode, stderr=stderr)


class TestNullProcessProbe:
    """Tests for the probe used where pids cannot be looked up."""

    def test_cannot_find_pid(self):
        """Test the probe reports no capability and no pid."""
        probe = NullProcessProbe()

        assert probe.can_find_pid() is False
        assert probe.find_pid(QUERY) == PID_UNKNOWN
        assert probe.needs_startup_grace is False


class TestUnixProcessProbe:
    """Tests for the ps-based probe."""

    def test_finds_matching_process(self):
        """Test the pid of the line matching command and argument is returned."""
        probe = UnixProcessProbe()

        with patch("subprocess.run", return_value=completed(PS_OUTPUT)) as mock_run:
            pid = probe.find_pid(QUERY)

        assert pid == 815
        assert mock_run.call_args.args[0] == ["ps", "-ww", "-e", "-o", "pid,ppid,args"]

    def test_no_matching_process(self):
        """Test PID_UNKNOWN when no line matches."""
        probe = UnixProcessProbe()
        query = ProcessQuery(command="soffice", argument="port=9999")

        with patch("subprocess.run", return_value=completed(PS_OUTPUT)):
            assert probe.find_pid(query) == PID_UNKNOWN

    def test_command_must_match_too(self):
        """Test a line with the argument but another command does not match."""
        probe = UnixProcessProbe()
        output = " 77 1 python worker.py socket,host=127.0.0.1,port=2002\n"

        with patch("subprocess.run", return_value=completed(output)):
            assert probe.find_pid(QUERY) == PID_UNKNOWN

    def test_ps_not_found(self):
        """Test a missing ps command yields PID_UNKNOWN."""
        probe = UnixProcessProbe()

        with patch("subprocess.run", side_effect=FileNotFoundError):
            assert probe.find_pid(QUERY) == PID_UNKNOWN

    def test_ps_timeout(self):
        """Test a hanging ps command yields PID_UNKNOWN."""
        probe = UnixProcessProbe()

        with patch("subprocess.run", side_effect=subprocess.TimeoutExpired("ps", 10)):
            assert probe.find_pid(QUERY) == PID_UNKNOWN

    def test_ps_error_exit(self):
        """Test a failing ps command yields PID_UNKNOWN."""
        probe = UnixProcessProbe()

        with patch("subprocess.run", return_value=completed(returncode=1, stderr="bad option")):
            assert probe.find_pid(QUERY) == PID_UNKNOWN

    def test_capabilities(self):
        """Test the probe can find pids and needs no startup grace."""
        probe = UnixProcessProbe()

        assert probe.can_find_pid() is True
        assert probe.needs_startup_grace is False


class TestPlatformProbes:
    """Tests for the per-platform listing commands."""

    def test_mac_command(self):
        """Test macOS lists processes with their full command."""
        with patch("subprocess.run", return_value=completed(PS_OUTPUT)) as mock_run:
            assert MacProcessProbe().find_pid(QUERY) == 815

        assert mock_run.call_args.args[0] == ["ps", "-ww", "-e", "-o", "pid,ppid,command"]

    def test_freebsd_needs_startup_grace(self):
        """Test FreeBSD asks for the startup grace pause."""
        probe = FreeBSDProcessProbe()

        assert probe.needs_startup_grace is True
        assert probe.can_find_pid() is True
        assert probe.list_command[:3] == ("ps", "-ww", "-ax")

    def test_windows_output(self):
        """Test Windows output lines are parsed the same way."""
        output = (
            "4 0 System\r\n"
            "6120 4 \"C:\\Program Files\\LibreOffice\\program\\soffice.exe\" "
            "--accept=socket,host=127.0.0.1,port=2002\r\n"
        )

        with patch("subprocess.run", return_value=completed(output)) as mock_run:
            assert WindowsProcessProbe().find_pid(QUERY) == 6120

        assert mock_run.call_args.args[0][0] == "powershell"


class TestDetectProbe:
    """Tests for choosing a probe by platform."""

    @pytest.mark.parametrize(
        "platform, expected",
        [
            ("linux", UnixProcessProbe),
            ("darwin", MacProcessProbe),
            ("freebsd13", FreeBSDProcessProbe),
            ("win32", WindowsProcessProbe),
            ("emscripten", NullProcessProbe),
        ],
    )
    def test_detect(self, platform, expected):
        """Test each platform gets its probe."""
        assert type(detect_probe(platform)) is expected

    def test_detect_current_platform(self):
        """Test the current platform is used by default."""
        with patch("sys.platform", "darwin"):
            assert isinstance(detect_probe(), MacProcessProbe)


class TestOwnLineage:
    """Tests for skipping the calling process and its ancestors."""

    def test_own_process_skipped(self):
        """Test the caller's own command line never matches."""
        own_pid = os.getpid()
        output = (
            f"{own_pid} {os.getppid()} soffice --accept=socket,host=127.0.0.1,port=2002\n"
            f"{own_pid + 100000} {own_pid} soffice --accept=socket,host=127.0.0.1,port=2002\n"
        )

        with patch("subprocess.run", return_value=completed(output)):
            assert UnixProcessProbe().find_pid(QUERY) == own_pid + 100000

    def test_ancestors_skipped(self):
        """Test a wrapper several levels up with the same arguments is skipped."""
        parent = os.getppid()
        grandparent = parent + 200000
        child = os.getpid() + 300000
        output = (
            f"{grandparent} 1 soffice --accept=socket,host=127.0.0.1,port=2002\n"
            f"{parent} {grandparent} sh -c launcher\n"
            f"{os.getpid()} {parent} python\n"
            f"{child} {os.getpid()} soffice --accept=socket,host=127.0.0.1,port=2002\n"
        )

        with patch("subprocess.run", return_value=completed(output)):
            assert UnixProcessProbe().find_pid(QUERY) == child

    def test_only_own_lineage_matches(self):
        """Test PID_UNKNOWN when the only matching line is the caller."""
        output = f"{os.getpid()} {os.getppid()} soffice --accept=socket,host=127.0.0.1,port=2002\n"

        with patch("subprocess.run", return_value=completed(output)):
            assert UnixProcessProbe().find_pid(QUERY) == PID_UNKNOWN

    def test_lineage_walk(self):
        """Test the walk follows parent links and stops at cycles."""
        parent = os.getppid()
        first, second = parent + 1_000_000, parent + 2_000_000
        parents = {parent: first, first: second, second: first}

        lineage = own_lineage(parents)

        assert lineage == {os.getpid(), parent, first, second}


LAUNCHER_SCRIPT = """
import sys
from proclaunch_logging import configure
configure(enable_file=False, enable_console=False)
from proclaunch import ProcessQuery, SpawnSpec, StartProcessAttempt
from proclaunch.process_manager import UnixProcessProbe

marker = sys.argv[1]
spec = SpawnSpec(sys.executable, ["-c", "import time; time.sleep(30)", marker])
starter = StartProcessAttempt(spec, ProcessQuery(sys.executable, marker), UnixProcessProbe())
outcome = starter.attempt()
print(outcome.kind.value, outcome.pid, starter.process.pid)
starter.process.destroy()
"""


@pytest.mark.skipif(
    not sys.platform.startswith("linux") or shutil.which("ps") is None,
    reason="needs a Linux ps",
)
class TestRealProcessLookup:
    """Tests looking up a real child from a launcher sharing its arguments."""

    def test_child_pid_found_not_launcher(self):
        """Test the launcher's own matching command line is not reported."""
        marker = f"proclaunch-marker-{uuid.uuid4().hex}"
        env = {**os.environ, "PYTHONPATH": os.pathsep.join(p for p in sys.path if p)}

        result = subprocess.run(
            [sys.executable, "-c", LAUNCHER_SCRIPT, marker],
            capture_output=True,
            text=True,
            timeout=60,
            env=env,
            check=False,
        )

        assert result.returncode == 0, result.stderr
        kind, pid, spawned_pid = result.stdout.split()
        assert kind == "success"
        assert int(pid) == int(spawned_pid)
