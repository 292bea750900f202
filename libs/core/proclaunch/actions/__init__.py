"""Actions module encapsulating business logic for CLI operations."""

from proclaunch.actions.launch_actions import LaunchActions

__all__ = [
    "LaunchActions",
]
