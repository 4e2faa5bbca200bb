"""Buffered discovery log written next to the generated collection."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class DiagnosticLog:
    """Collects one line per discovery event.

    The log is passed explicitly through the scan and flushed by the caller,
    so a scan never writes files on its own.
    """

    lines: list[str] = field(default_factory=list)

    def record(self, message: str) -> None:
        """Append a message and mirror it to the module logger.

        Args:
            message: Single-line diagnostic message
        """
        logger.debug(message)
        self.lines.append(message)

    def write(self, path: Path) -> Path:
        """Write all recorded lines to ``path``, replacing its contents.

        Args:
            path: Destination log file

        Returns:
            The path written
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("".join(f"{line}\n" for line in self.lines), encoding="utf-8")
        return path

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self):
        return iter(self.lines)
