"""Elapsed-time tracking for a single session."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["SessionTimer", "format_elapsed"]


@dataclass(slots=True)
class SessionTimer:
    """Pull-based stopwatch measured against an injected clock value."""

    started_at: float | None = None
    completed_at: float | None = None

    @property
    def running(self) -> bool:
        return self.started_at is not None and self.completed_at is None

    def start(self, now: float) -> None:
        self.started_at = now
        self.completed_at = None

    def stop(self, now: float) -> None:
        """Freeze the timer at ``now``; later calls keep the first stop time."""

        if self.started_at is None or self.completed_at is not None:
            return
        self.completed_at = now

    def elapsed(self, now: float) -> float:
        """Return seconds since start, frozen once the timer has stopped."""

        if self.started_at is None:
            return 0.0
        end = self.completed_at if self.completed_at is not None else now
        return max(0.0, end - self.started_at)


def format_elapsed(seconds: float) -> str:
    """Format ``seconds`` as ``MM:SS``, dropping fractional seconds."""

    whole = max(0, int(seconds))
    minutes, secs = divmod(whole, 60)
    return f"{minutes:02d}:{secs:02d}"
