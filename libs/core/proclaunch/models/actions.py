from dataclasses import dataclass, field
from typing import Any


@dataclass
class ActionResult:
    """Result handed from an action to the CLI.

    Attributes:
        success: Whether the action succeeded
        message: Human-readable message about the result
        data: Extra values to display (pid, attempts, ...)
    """

    success: bool
    message: str
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def exit_status(self) -> int:
        """Shell exit status for this result."""
        return 0 if self.success else 1
