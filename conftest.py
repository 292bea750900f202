import pytest

from proclaunch_logging import configure


@pytest.fixture(autouse=True)
def quiet_logging(tmp_path):
    """Keep test runs from writing log files to the home directory."""
    configure(log_dir=tmp_path / "logs", enable_file=False, enable_console=False, level="DEBUG")
    yield
