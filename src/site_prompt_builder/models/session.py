from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from ..errors import StreamStateError


class StreamStatus(str, Enum):
    idle = "IDLE"
    streaming = "STREAMING"
    completed = "COMPLETED"
    failed = "FAILED"
    cancelled = "CANCELLED"


TERMINAL_STATUSES = frozenset({StreamStatus.completed, StreamStatus.failed, StreamStatus.cancelled})


class StreamSession(BaseModel):
    """Accumulator for one streaming call.

    Idle -> Streaming -> {Completed, Failed, Cancelled}. Terminal states
    accept no further transitions.
    """

    status: StreamStatus = StreamStatus.idle
    accumulated: str = ""
    error: str | None = None
    fragments: int = 0

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def append(self, fragment: str) -> str:
        self._ensure_open("append")
        self.status = StreamStatus.streaming
        self.accumulated += fragment
        self.fragments += 1
        return self.accumulated

    def complete(self) -> str:
        self._ensure_open("complete")
        self.status = StreamStatus.completed
        return self.accumulated

    def fail(self, message: str) -> str:
        self._ensure_open("fail")
        self.status = StreamStatus.failed
        self.error = message
        if self.accumulated:
            self.accumulated += "\n\n"
        self.accumulated += message
        return self.accumulated

    def cancel(self) -> None:
        self._ensure_open("cancel")
        self.status = StreamStatus.cancelled

    def _ensure_open(self, action: str) -> None:
        if self.is_terminal:
            raise StreamStateError(f"Cannot {action} a stream session in state {self.status.value}")


__all__ = ["StreamSession", "StreamStatus", "TERMINAL_STATUSES"]
