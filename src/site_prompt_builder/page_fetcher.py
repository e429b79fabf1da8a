from __future__ import annotations

import logging
from urllib.parse import quote

import httpx
from bs4 import BeautifulSoup

from .errors import MalformedResponseError, UpstreamUnavailableError

logger = logging.getLogger(__name__)


class PageFetcher:
    """Fetches a web page and extracts its visible text."""

    def __init__(
        self,
        *,
        proxy_template: str | None = None,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize page fetcher.

        Args:
            proxy_template: Optional URL template with a ``{url}`` placeholder,
                e.g. "https://api.allorigins.win/raw?url={url}"
            timeout: Request timeout in seconds
            client: Optional preconfigured httpx client
        """
        self._proxy_template = proxy_template
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def fetch_text(self, url: str) -> str:
        target = self._resolve(url)
        try:
            response = self._client.get(target)
        except httpx.HTTPError as exc:
            logger.error("Failed to fetch URL", exc_info=True, extra={"url": url})
            raise UpstreamUnavailableError(f"Não foi possível buscar a URL: {exc}") from exc

        if not response.is_success:
            raise UpstreamUnavailableError(
                f"Não foi possível buscar a URL. Status: {response.status_code}"
            )

        text = extract_text(response.text)
        if not text:
            raise MalformedResponseError("O site não retornou conteúdo de texto para análise.")

        logger.info("Fetched page text", extra={"url": url, "text_length": len(text)})
        return text

    def close(self) -> None:
        self._client.close()

    def _resolve(self, url: str) -> str:
        if not self._proxy_template:
            return url
        return self._proxy_template.format(url=quote(url, safe=""))


def extract_text(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript", "template"]):
        tag.decompose()
    root = soup.body or soup
    return root.get_text(separator="\n", strip=True)


__all__ = ["PageFetcher", "extract_text"]
