from __future__ import annotations

from typing import Any, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ColorPalette(BaseModel):
    primary: str
    accent: str
    secondary: str | None = None
    neutral: str | None = None


class AnalyzedColors(BaseModel):
    primary: str | None = None
    accent: str | None = None


class SiteAnalysis(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    project_name: str
    niche: str
    target_audience: str
    main_goal: str
    tone: str
    selected_pages: Sequence[str] = Field(default_factory=list)
    colors: AnalyzedColors | None = None


_STRING_LIST: Mapping[str, Any] = {"type": "array", "items": {"type": "string"}}


SITE_ANALYSIS_SCHEMA: Mapping[str, Any] = {
    "type": "object",
    "properties": {
        "projectName": {"type": "string", "description": "O nome do negócio ou projeto."},
        "niche": {"type": "string", "description": "O nicho de mercado do site."},
        "targetAudience": {"type": "string", "description": "O público-alvo provável do site."},
        "mainGoal": {
            "type": "string",
            "description": "A principal chamada para ação (CTA) ou objetivo do site.",
        },
        "tone": {"type": "string", "description": "O tom de voz (ex: Profissional, Amigável)."},
        "selectedPages": {
            **_STRING_LIST,
            "description": "Uma lista de páginas que o site provavelmente tem (ex: Início, Sobre, Contato).",
        },
        "colors": {
            "type": "object",
            "properties": {
                "primary": {"type": "string", "description": "A cor primária principal (hex)."},
                "accent": {"type": "string", "description": "A cor de destaque/acento (hex)."},
            },
        },
    },
    "required": [
        "projectName",
        "niche",
        "targetAudience",
        "mainGoal",
        "tone",
        "selectedPages",
        "colors",
    ],
}

PALETTE_SCHEMA: Mapping[str, Any] = {
    "type": "object",
    "properties": {
        "primary": {"type": "string", "description": "A cor principal do site."},
        "secondary": {"type": "string", "description": "A cor secundária, para suporte."},
        "accent": {"type": "string", "description": "A cor de destaque para CTAs e links."},
        "neutral": {"type": "string", "description": "A cor neutra para fundos e textos."},
    },
    "required": ["primary", "secondary", "accent", "neutral"],
}

INSPIRATION_SCHEMA: Mapping[str, Any] = {
    "type": "object",
    "properties": {"suggestions": _STRING_LIST},
    "required": ["suggestions"],
}

KEYWORDS_SCHEMA: Mapping[str, Any] = {
    "type": "object",
    "properties": {
        "keywords": {**_STRING_LIST, "description": "Uma lista de 10 palavras-chave de SEO."},
    },
    "required": ["keywords"],
}


__all__ = [
    "ColorPalette",
    "AnalyzedColors",
    "SiteAnalysis",
    "SITE_ANALYSIS_SCHEMA",
    "PALETTE_SCHEMA",
    "INSPIRATION_SCHEMA",
    "KEYWORDS_SCHEMA",
]
