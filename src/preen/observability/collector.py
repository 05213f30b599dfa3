"""Render collector — records pipeline and viewer events into the event log.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.

"""

from __future__ import annotations

from typing import Any

from preen.observability.events import (
    RenderCompleted,
    RenderFailed,
    ViewerConnected,
    ViewerDisconnected,
    now_ns,
)
from preen.observability.log import EventLog


class RenderCollector:
    """Records render attempts and viewer lifecycle events.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record_render(
        self,
        sequence: int,
        *,
        trigger_path: str = "",
        accepted: bool = True,
        clients_notified: int = 0,
        size_bytes: int = 0,
        duration_ms: float = 0.0,
    ) -> None:
        self._log.append(
            RenderCompleted(
                sequence=sequence,
                trigger_path=trigger_path,
                accepted=accepted,
                clients_notified=clients_notified,
                size_bytes=size_bytes,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_failure(
        self,
        sequence: int,
        exc: BaseException,
        *,
        trigger_path: str = "",
    ) -> None:
        self._log.append(
            RenderFailed(
                sequence=sequence,
                trigger_path=trigger_path,
                error_type=type(exc).__name__,
                message=str(exc),
                timestamp_ns=now_ns(),
            )
        )

    def record_connect(self, client_id: str) -> None:
        self._log.append(ViewerConnected(client_id=client_id, timestamp_ns=now_ns()))

    def record_disconnect(self, client_id: str) -> None:
        self._log.append(ViewerDisconnected(client_id=client_id, timestamp_ns=now_ns()))

    def summary(self) -> dict[str, Any]:
        """Aggregate render statistics for the stats endpoint."""
        completed = self._log.of_type(RenderCompleted, limit=self._log.max_events)
        failed = self._log.of_type(RenderFailed, limit=self._log.max_events)
        accepted = [e for e in completed if e.accepted]

        result: dict[str, Any] = {
            "renders": len(completed),
            "superseded": len(completed) - len(accepted),
            "failures": len(failed),
        }
        if accepted:
            durations = [e.duration_ms for e in accepted]
            result["avg_ms"] = round(sum(durations) / len(durations), 2)
            result["last_ms"] = round(accepted[0].duration_ms, 2)
        if failed:
            last = failed[0]
            result["last_error"] = {"type": last.error_type, "message": last.message}
        return result
