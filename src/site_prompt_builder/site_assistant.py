from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Mapping, Protocol

from pydantic import ValidationError

from .errors import MalformedResponseError, UpstreamUnavailableError
from .models.form import FormState
from .models.session import StreamSession
from .models.suggestions import (
    INSPIRATION_SCHEMA,
    KEYWORDS_SCHEMA,
    PALETTE_SCHEMA,
    SITE_ANALYSIS_SCHEMA,
    ColorPalette,
    SiteAnalysis,
)
from .page_fetcher import PageFetcher
from .prompt_engine import PromptTemplateEngine
from .streaming import StreamAggregator
from .validation import validate_palette

logger = logging.getLogger(__name__)

ANALYSIS_TEXT_LIMIT = 8000


class GenerativeBackend(Protocol):
    def generate_content(self, prompt: str, **kwargs: Any) -> str:
        ...

    def generate_json(self, prompt: str, *, response_schema: Mapping[str, Any] | None = None) -> Any:
        ...

    def stream_content(self, prompt: str) -> AsyncIterator[str]:
        ...

    def generate_image(self, prompt: str) -> str:
        ...


class SiteAssistant:
    """AI helpers that fill the form and stream the final prompt."""

    def __init__(
        self,
        *,
        backend: GenerativeBackend,
        page_fetcher: PageFetcher | None = None,
        engine: PromptTemplateEngine | None = None,
        aggregator: StreamAggregator | None = None,
    ) -> None:
        self._backend = backend
        self._page_fetcher = page_fetcher
        self._engine = engine or PromptTemplateEngine()
        self._aggregator = aggregator or StreamAggregator()

    def analyze_url(self, url: str) -> SiteAnalysis:
        if self._page_fetcher is None:
            raise UpstreamUnavailableError("Nenhum leitor de páginas configurado.")
        text = self._page_fetcher.fetch_text(url)
        return self.analyze_website_content(text)

    def analyze_website_content(self, text_content: str) -> SiteAnalysis:
        prompt = (
            "Analise o seguinte conteúdo de texto extraído de um site. Extraia as informações "
            "solicitadas no formato JSON. Seja conciso e direto. Se uma informação não for clara, "
            f'faça a sua melhor suposição. Conteúdo: "{text_content[:ANALYSIS_TEXT_LIMIT]}"'
        )
        data = self._request_json(
            prompt,
            SITE_ANALYSIS_SCHEMA,
            failure="A IA não conseguiu analisar o conteúdo do site.",
        )
        try:
            return SiteAnalysis.model_validate(data)
        except ValidationError as exc:
            raise MalformedResponseError("A IA não conseguiu analisar o conteúdo do site.") from exc

    def generate_color_palette(self, niche: str, style: str) -> ColorPalette:
        prompt = (
            f'Gere uma paleta de cores harmoniosa para um site com o nicho "{niche}" e estilo visual '
            f'"{style}". A paleta deve conter 4 cores: primária, secundária, de destaque (accent) e '
            "neutra. Forneça apenas os códigos hexadecimais."
        )
        data = self._request_json(
            prompt,
            PALETTE_SCHEMA,
            failure="Não foi possível gerar a paleta de cores.",
        )
        palette = validate_palette(data)
        logger.info("Generated color palette", extra={"niche": niche, "style": style})
        return palette

    def generate_inspiration(self, field_name: str, context: str) -> list[str]:
        prompt = (
            f'Com base neste contexto: "{context}", gere 3 sugestões criativas e concisas para o campo '
            f'de formulário "{field_name}". As sugestões devem ser curtas e diretas.'
        )
        data = self._request_json(
            prompt,
            INSPIRATION_SCHEMA,
            failure="Não foi possível gerar sugestões.",
        )
        return _string_list(data, "suggestions")

    def generate_seo_keywords(self, niche: str, target_audience: str) -> list[str]:
        prompt = (
            "Gere uma lista de 10 palavras-chave de SEO essenciais (incluindo cauda longa) para um "
            f'negócio no nicho de "{niche}" que visa o público "{target_audience}".'
        )
        data = self._request_json(
            prompt,
            KEYWORDS_SCHEMA,
            failure="Não foi possível gerar palavras-chave de SEO.",
        )
        return _string_list(data, "keywords")

    def generate_page_content(self, page_name: str, context: str) -> str:
        prompt = (
            f"{context}. Elabore um rascunho de texto com cerca de 150-200 palavras para esta página. "
            "O texto deve ser bem estruturado com títulos e parágrafos."
        )
        try:
            return self._backend.generate_content(prompt).strip()
        except UpstreamUnavailableError as exc:
            logger.error(
                "Failed to generate page content",
                exc_info=True,
                extra={"page": page_name},
            )
            raise UpstreamUnavailableError(f"Não foi possível gerar conteúdo para {page_name}.") from exc

    def generate_logo_suggestion(self, prompt: str) -> str:
        try:
            return self._backend.generate_image(prompt)
        except UpstreamUnavailableError as exc:
            logger.error("Failed to generate logo suggestion", exc_info=True)
            raise UpstreamUnavailableError("Não foi possível gerar a sugestão de logo.") from exc

    def assemble_prompt(self, form: FormState) -> str:
        return self._engine.assemble(form)

    def stream_website_prompt(
        self,
        form: FormState,
        *,
        session: StreamSession | None = None,
    ) -> AsyncIterator[str]:
        prompt = self._engine.assemble(form)
        logger.info(
            "Streaming website prompt",
            extra={"pages": len(form.selected_pages), "prompt_length": len(prompt)},
        )
        return self._aggregator.stream(self._backend.stream_content(prompt), session=session)

    def _request_json(self, prompt: str, schema: Mapping[str, Any], *, failure: str) -> Any:
        try:
            return self._backend.generate_json(prompt, response_schema=schema)
        except UpstreamUnavailableError as exc:
            logger.error("AI request failed", exc_info=True, extra={"error": failure})
            raise UpstreamUnavailableError(failure) from exc


def _string_list(data: Any, key: str) -> list[str]:
    values = data.get(key) if isinstance(data, Mapping) else None
    if not isinstance(values, list) or not all(isinstance(value, str) for value in values):
        raise MalformedResponseError(f"Resposta sem a lista '{key}' esperada.")
    return values


__all__ = ["SiteAssistant", "GenerativeBackend", "ANALYSIS_TEXT_LIMIT"]
