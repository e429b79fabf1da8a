from __future__ import annotations

import asyncio
import json
import os
import uuid
from functools import lru_cache
from typing import AsyncIterator

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel, Field

from site_prompt_builder.errors import MalformedResponseError, UpstreamUnavailableError
from site_prompt_builder.form_actions import (
    apply_inspiration,
    apply_keywords,
    apply_logo_suggestion,
    apply_palette,
    resolve_inspiration_field,
    set_page_content,
)
from site_prompt_builder.logging_config import set_trace_id, setup_logging
from site_prompt_builder.models.form import FormState
from site_prompt_builder.models.session import StreamSession
from site_prompt_builder.models.suggestions import ColorPalette, SiteAnalysis
from site_prompt_builder.page_fetcher import PageFetcher
from site_prompt_builder.prompt_engine import (
    assemble_prompt,
    inspiration_context,
    logo_prompt,
    page_content_context,
)
from site_prompt_builder.site_assistant import SiteAssistant
from site_prompt_builder.vertex_ai_adapter import VertexAIAdapter


class AssembleResponse(BaseModel):
    prompt: str


class AnalyzeUrlRequest(BaseModel):
    url: str


class PaletteRequest(BaseModel):
    niche: str
    style: str


class InspirationRequest(BaseModel):
    field_name: str = Field(description="Form field to fill, e.g. projectName")
    form: FormState = Field(default_factory=FormState)


class InspirationResponse(BaseModel):
    suggestions: list[str]
    form: FormState


class KeywordsRequest(BaseModel):
    form: FormState


class KeywordsResponse(BaseModel):
    keywords: list[str]
    form: FormState


class PageContentRequest(BaseModel):
    page_name: str
    form: FormState


class PageContentResponse(BaseModel):
    content: str
    form: FormState


class LogoRequest(BaseModel):
    form: FormState


class LogoResponse(BaseModel):
    image_base64: str
    form: FormState


class PaletteResponse(BaseModel):
    palette: ColorPalette


# Environment configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
PROJECT_ID = os.getenv("PROJECT_ID")
VERTEX_LOCATION = os.getenv("VERTEX_LOCATION", "us-central1")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_IMAGE_MODEL = os.getenv("GEMINI_IMAGE_MODEL", "gemini-2.5-flash-image")
URL_PROXY_TEMPLATE = os.getenv("URL_PROXY_TEMPLATE") or None

# Setup logging
setup_logging(environment=ENVIRONMENT, project_id=PROJECT_ID)

app = FastAPI(title="Site Prompt Builder API", version="0.1.0")


@lru_cache(maxsize=1)
def get_assistant() -> SiteAssistant:
    if not PROJECT_ID:
        raise UpstreamUnavailableError("PROJECT_ID is not configured")
    backend = VertexAIAdapter(
        project_id=PROJECT_ID,
        location=VERTEX_LOCATION,
        model_name=GEMINI_MODEL,
        image_model_name=GEMINI_IMAGE_MODEL,
    )
    return SiteAssistant(backend=backend, page_fetcher=PageFetcher(proxy_template=URL_PROXY_TEMPLATE))


@app.middleware("http")
async def assign_trace_id(request: Request, call_next):
    set_trace_id(request.headers.get("x-cloud-trace-context") or str(uuid.uuid4()))
    return await call_next(request)


@app.exception_handler(UpstreamUnavailableError)
async def upstream_unavailable(_: Request, exc: UpstreamUnavailableError) -> JSONResponse:
    return JSONResponse({"detail": str(exc)}, status_code=503)


@app.exception_handler(MalformedResponseError)
async def malformed_response(_: Request, exc: MalformedResponseError) -> JSONResponse:
    return JSONResponse({"detail": str(exc)}, status_code=502)


@app.post("/v1/prompts:assemble", response_model=AssembleResponse)
async def assemble(form: FormState) -> AssembleResponse:
    return AssembleResponse(prompt=assemble_prompt(form))


@app.post("/v1/prompts:stream")
async def stream_prompt(form: FormState, assistant: SiteAssistant = Depends(get_assistant)) -> StreamingResponse:
    session = StreamSession()
    snapshots = assistant.stream_website_prompt(form, session=session)
    return StreamingResponse(_ndjson(snapshots, session), media_type="application/x-ndjson")


@app.post("/v1/analysis:url", response_model=SiteAnalysis)
async def analyze_url(
    request: AnalyzeUrlRequest,
    assistant: SiteAssistant = Depends(get_assistant),
) -> SiteAnalysis:
    return await asyncio.to_thread(assistant.analyze_url, request.url)


@app.post("/v1/palettes:generate", response_model=PaletteResponse)
async def generate_palette(
    request: PaletteRequest,
    assistant: SiteAssistant = Depends(get_assistant),
) -> PaletteResponse:
    palette = await asyncio.to_thread(assistant.generate_color_palette, request.niche, request.style)
    return PaletteResponse(palette=palette)


@app.post("/v1/palettes:apply", response_model=FormState)
async def generate_and_apply_palette(
    form: FormState,
    assistant: SiteAssistant = Depends(get_assistant),
) -> FormState:
    palette = await asyncio.to_thread(assistant.generate_color_palette, form.niche, form.style)
    return apply_palette(form, palette)


@app.post("/v1/inspiration:generate", response_model=InspirationResponse)
async def generate_inspiration(
    request: InspirationRequest,
    assistant: SiteAssistant = Depends(get_assistant),
) -> InspirationResponse:
    try:
        field = resolve_inspiration_field(request.field_name)
    except KeyError as exc:
        raise HTTPException(status_code=422, detail=str(exc.args[0])) from exc
    suggestions = await asyncio.to_thread(
        assistant.generate_inspiration, request.field_name, inspiration_context(request.form)
    )
    return InspirationResponse(
        suggestions=suggestions,
        form=apply_inspiration(request.form, field, suggestions),
    )


@app.post("/v1/keywords:generate", response_model=KeywordsResponse)
async def generate_keywords(
    request: KeywordsRequest,
    assistant: SiteAssistant = Depends(get_assistant),
) -> KeywordsResponse:
    keywords = await asyncio.to_thread(
        assistant.generate_seo_keywords, request.form.niche, request.form.target_audience
    )
    return KeywordsResponse(keywords=keywords, form=apply_keywords(request.form, keywords))


@app.post("/v1/pages:content", response_model=PageContentResponse)
async def generate_page_content(
    request: PageContentRequest,
    assistant: SiteAssistant = Depends(get_assistant),
) -> PageContentResponse:
    content = await asyncio.to_thread(
        assistant.generate_page_content,
        request.page_name,
        page_content_context(request.form, request.page_name),
    )
    return PageContentResponse(
        content=content,
        form=set_page_content(request.form, request.page_name, content),
    )


@app.post("/v1/logos:generate", response_model=LogoResponse)
async def generate_logo(
    request: LogoRequest,
    assistant: SiteAssistant = Depends(get_assistant),
) -> LogoResponse:
    image = await asyncio.to_thread(assistant.generate_logo_suggestion, logo_prompt(request.form))
    return LogoResponse(image_base64=image, form=apply_logo_suggestion(request.form, image))


@app.get("/health")
async def healthcheck() -> JSONResponse:
    return JSONResponse({"status": "ok"})


async def _ndjson(snapshots: AsyncIterator[str], session: StreamSession) -> AsyncIterator[str]:
    async for snapshot in snapshots:
        yield json.dumps({"text": snapshot}, ensure_ascii=False) + "\n"
    yield json.dumps(
        {"status": session.status.value, "text": session.accumulated, "error": session.error},
        ensure_ascii=False,
    ) + "\n"
