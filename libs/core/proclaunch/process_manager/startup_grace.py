"""Fixed pause between spawning a process and the first pid lookup.

Some platforms only behave once the freshly spawned process has had time
to settle: on FreeBSD, without this pause, connecting to the started
office process hangs for minutes before timing out. The cause is unknown,
so the pause is a standalone strategy that probes opt into through
``needs_startup_grace`` instead of a check buried in the attempt.
"""

import time
from collections.abc import Callable

from proclaunch_logging import get_logger

from proclaunch.process_manager.probes import ProcessIdProbe


class StartupGrace:
    """Sleeps once before pid discovery when the probe asks for it."""

    def __init__(self, delay: float = 2.0):
        """Initialize the strategy.

        Args:
            delay: Seconds to pause
        """
        self.delay = delay
        self.logger = get_logger('attempt')

    def applies_to(self, probe: ProcessIdProbe) -> bool:
        return bool(getattr(probe, "needs_startup_grace", False))

    def wait(
        self,
        probe: ProcessIdProbe,
        sleep: Callable[[float], None] = time.sleep,
    ) -> bool:
        """Pause if the probe needs it.

        Returns:
            True if a pause happened
        """
        if not self.applies_to(probe):
            return False

        # TODO: find out why FreeBSD needs this and drop the pause if it can be fixed upstream.
        self.logger.debug(
            "Waiting for process to settle before pid lookup",
            probe=type(probe).__name__,
            delay=self.delay,
        )
        sleep(self.delay)
        return True
