import asyncio

import httpx
import pytest

from site_prompt_builder.errors import (
    InvalidColorError,
    MalformedResponseError,
    UpstreamUnavailableError,
)
from site_prompt_builder.models.form import FormState
from site_prompt_builder.models.session import StreamSession, StreamStatus
from site_prompt_builder.models.suggestions import KEYWORDS_SCHEMA, PALETTE_SCHEMA
from site_prompt_builder.page_fetcher import PageFetcher
from site_prompt_builder.site_assistant import SiteAssistant
from site_prompt_builder.validation import is_hex_color, validate_palette


class FakeBackend:
    def __init__(self, *, json_reply=None, text_reply="", fragments=(), error=None, image="aW1n"):
        self.json_reply = json_reply
        self.text_reply = text_reply
        self.fragments = list(fragments)
        self.error = error
        self.image = image
        self.prompts = []
        self.schemas = []

    def generate_content(self, prompt, **kwargs):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.text_reply

    def generate_json(self, prompt, *, response_schema=None):
        self.prompts.append(prompt)
        self.schemas.append(response_schema)
        if self.error:
            raise self.error
        return self.json_reply

    async def stream_content(self, prompt):
        self.prompts.append(prompt)
        for fragment in self.fragments:
            yield fragment
        if self.error:
            raise self.error

    def generate_image(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.image


def test_palette_is_validated():
    backend = FakeBackend(
        json_reply={"primary": "#112233", "secondary": "#aabbcc", "accent": "#445566", "neutral": "#F0F0F0"}
    )
    palette = SiteAssistant(backend=backend).generate_color_palette("Padaria", "Rústico e Orgânico")

    assert palette.primary == "#112233"
    assert palette.secondary == "#aabbcc"
    assert backend.schemas == [PALETTE_SCHEMA]
    assert '"Padaria"' in backend.prompts[0]


def test_palette_with_named_color_is_rejected():
    backend = FakeBackend(
        json_reply={"primary": "blue", "secondary": "#aabbcc", "accent": "#445566", "neutral": "#F0F0F0"}
    )

    with pytest.raises(InvalidColorError) as excinfo:
        SiteAssistant(backend=backend).generate_color_palette("Padaria", "Moderno")

    assert excinfo.value.value == "blue"
    assert "blue" in str(excinfo.value)
    assert isinstance(excinfo.value, MalformedResponseError)


def test_validate_palette_reports_first_invalid_value():
    with pytest.raises(InvalidColorError) as excinfo:
        validate_palette({"primary": "#12345", "accent": "red"})
    assert excinfo.value.value == "#12345"

    with pytest.raises(MalformedResponseError):
        validate_palette(["#112233"])
    with pytest.raises(MalformedResponseError):
        validate_palette({"primary": "#112233"})


def test_hex_pattern_is_case_insensitive():
    assert is_hex_color("#A1b2C3")
    assert not is_hex_color("#A1B2C")
    assert not is_hex_color("A1B2C3")
    assert not is_hex_color(None)


def test_upstream_failure_gets_operation_message():
    backend = FakeBackend(error=UpstreamUnavailableError("503 Service Unavailable"))

    with pytest.raises(UpstreamUnavailableError, match="Não foi possível gerar a paleta de cores."):
        SiteAssistant(backend=backend).generate_color_palette("Padaria", "Moderno")
    with pytest.raises(UpstreamUnavailableError, match="Não foi possível gerar conteúdo para Blog."):
        SiteAssistant(backend=backend).generate_page_content("Blog", "contexto")
    with pytest.raises(UpstreamUnavailableError, match="Não foi possível gerar a sugestão de logo."):
        SiteAssistant(backend=backend).generate_logo_suggestion("logo")


def test_keywords_and_inspiration_lists():
    backend = FakeBackend(json_reply={"keywords": ["pão artesanal", "padaria perto de mim"]})
    keywords = SiteAssistant(backend=backend).generate_seo_keywords("Padaria", "Famílias")

    assert keywords == ["pão artesanal", "padaria perto de mim"]
    assert backend.schemas == [KEYWORDS_SCHEMA]

    backend = FakeBackend(json_reply={"suggestions": ["Aurora", "Trigo & Cia", "Forno Vivo"]})
    suggestions = SiteAssistant(backend=backend).generate_inspiration("projectName", "Nicho: Padaria")
    assert suggestions[0] == "Aurora"
    assert '"projectName"' in backend.prompts[0]


def test_missing_list_is_malformed():
    backend = FakeBackend(json_reply={"words": []})

    with pytest.raises(MalformedResponseError):
        SiteAssistant(backend=backend).generate_seo_keywords("Padaria", "Famílias")


def test_page_content_is_stripped():
    backend = FakeBackend(text_reply="\n  ## Sobre\nTexto.  \n")
    content = SiteAssistant(backend=backend).generate_page_content("Sobre Nós", "Gere conteúdo")

    assert content == "## Sobre\nTexto."
    assert "150-200 palavras" in backend.prompts[0]


def test_analysis_truncates_content_and_parses_result():
    backend = FakeBackend(
        json_reply={
            "projectName": "Aurora",
            "niche": "Padaria",
            "targetAudience": "Famílias",
            "mainGoal": "Encomendar",
            "tone": "Amigável",
            "selectedPages": ["Início", "Contato"],
            "colors": {"primary": "#8B5A2B", "accent": "#F2C14E"},
        }
    )
    analysis = SiteAssistant(backend=backend).analyze_website_content("x" * 9000)

    assert analysis.project_name == "Aurora"
    assert list(analysis.selected_pages) == ["Início", "Contato"]
    assert "x" * 8000 in backend.prompts[0]
    assert "x" * 8001 not in backend.prompts[0]


def test_analysis_with_wrong_shape_is_malformed():
    backend = FakeBackend(json_reply={"projectName": "Aurora"})

    with pytest.raises(MalformedResponseError):
        SiteAssistant(backend=backend).analyze_website_content("conteúdo")


def test_analyze_url_fetches_then_analyzes():
    def handler(request):
        return httpx.Response(200, text="<html><body><h1>Padaria Aurora</h1></body></html>")

    fetcher = PageFetcher(client=httpx.Client(transport=httpx.MockTransport(handler)))
    backend = FakeBackend(
        json_reply={
            "projectName": "Aurora",
            "niche": "Padaria",
            "targetAudience": "Famílias",
            "mainGoal": "Encomendar",
            "tone": "Amigável",
            "selectedPages": [],
        }
    )
    analysis = SiteAssistant(backend=backend, page_fetcher=fetcher).analyze_url("https://aurora.example")

    assert analysis.niche == "Padaria"
    assert "Padaria Aurora" in backend.prompts[0]


def test_stream_website_prompt_sends_assembled_prompt():
    backend = FakeBackend(fragments=["# Prompt", "\nConteúdo"])
    assistant = SiteAssistant(backend=backend)
    form = FormState(project_name="Aurora")
    session = StreamSession()

    async def run():
        return [snapshot async for snapshot in assistant.stream_website_prompt(form, session=session)]

    snapshots = asyncio.run(run())

    assert snapshots == ["# Prompt", "# Prompt\nConteúdo"]
    assert backend.prompts == [assistant.assemble_prompt(form)]
    assert session.status is StreamStatus.completed


def test_stream_website_prompt_degrades_on_upstream_error():
    backend = FakeBackend(fragments=["Parte1"], error=UpstreamUnavailableError("timeout"))
    assistant = SiteAssistant(backend=backend)

    session = asyncio.run(_collect(assistant, FormState()))

    assert session.status is StreamStatus.failed
    assert session.accumulated.endswith("Ocorreu um erro na comunicação com a API: timeout")


async def _collect(assistant, form):
    session = StreamSession()
    async for _ in assistant.stream_website_prompt(form, session=session):
        pass
    return session
