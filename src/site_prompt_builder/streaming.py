"""Folding of streamed text fragments into growing snapshots."""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterable, AsyncIterator

from .dictionaries import STREAM_ERROR_TEMPLATE, STREAM_UNKNOWN_ERROR
from .models.session import StreamSession

logger = logging.getLogger(__name__)


class StreamAggregator:
    """Accumulates fragments from an async source.

    Every fragment produces one snapshot holding the whole document so far,
    so consumers can simply replace what they render. A failing source ends
    the stream with a diagnostic line instead of raising.
    """

    def __init__(
        self,
        *,
        error_template: str = STREAM_ERROR_TEMPLATE,
        unknown_error_message: str = STREAM_UNKNOWN_ERROR,
    ) -> None:
        self._error_template = error_template
        self._unknown_error_message = unknown_error_message

    async def stream(
        self,
        fragments: AsyncIterable[str],
        *,
        session: StreamSession | None = None,
    ) -> AsyncIterator[str]:
        """Yield the accumulated text after each fragment.

        Args:
            fragments: Async source of text fragments
            session: Optional session to record state into; a new one is used otherwise

        Yields:
            Full accumulated text after every fragment, then a diagnostic
            snapshot if the source fails
        """
        if session is None:
            session = StreamSession()
        iterator = fragments.__aiter__()
        try:
            while True:
                try:
                    fragment = await iterator.__anext__()
                except StopAsyncIteration:
                    break
                except Exception as exc:
                    message = self._diagnostic(exc)
                    logger.error(
                        "Prompt stream failed",
                        exc_info=True,
                        extra={"fragments": session.fragments, "error": str(exc)},
                    )
                    yield session.fail(message)
                    return
                yield session.append(fragment or "")
        except (GeneratorExit, asyncio.CancelledError):
            if not session.is_terminal:
                session.cancel()
                logger.info("Prompt stream cancelled", extra={"fragments": session.fragments})
            await _close(iterator)
            raise

        session.complete()
        logger.info(
            "Prompt stream completed",
            extra={"fragments": session.fragments, "output_length": len(session.accumulated)},
        )

    async def collect(self, fragments: AsyncIterable[str]) -> StreamSession:
        """Drain the source and return the terminal session."""
        session = StreamSession()
        async for _ in self.stream(fragments, session=session):
            pass
        return session

    def _diagnostic(self, exc: BaseException) -> str:
        message = str(exc).strip()
        if not message:
            return self._unknown_error_message
        return self._error_template.format(message=message)


async def _close(iterator: AsyncIterator[str]) -> None:
    aclose = getattr(iterator, "aclose", None)
    if aclose is not None:
        await aclose()


__all__ = ["StreamAggregator"]
