from __future__ import annotations


class SitePromptError(Exception):
    """Base error for the site prompt builder."""


class UpstreamUnavailableError(SitePromptError):
    """The AI service or a fetched site could not be reached or refused the call."""


class MalformedResponseError(SitePromptError):
    """An upstream response could not be parsed into the expected shape."""


class InvalidColorError(MalformedResponseError):
    def __init__(self, value: object) -> None:
        super().__init__(f"Cor inválida recebida da API: {value}")
        self.value = value


class StreamStateError(SitePromptError):
    """A stream session was asked to leave a terminal state."""


__all__ = [
    "SitePromptError",
    "UpstreamUnavailableError",
    "MalformedResponseError",
    "InvalidColorError",
    "StreamStateError",
]
