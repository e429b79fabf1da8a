from __future__ import annotations

from typing import Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .suggestions import ColorPalette


class FormState(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        alias_generator=to_camel,
        json_schema_extra={
            "example": {
                "projectName": "Padaria Aurora",
                "niche": "Padaria artesanal",
                "targetAudience": "Famílias do bairro",
                "mainGoal": "Fazer uma encomenda",
                "tone": "Amigável",
                "style": "Rústico e Orgânico",
                "selectedPages": ["Início", "Sobre Nós", "Contato"],
                "cornerStyle": "Arredondados",
                "siteComplexity": "Simples e Direto",
                "hasLogo": False,
                "colors": {"primary": "#8B5A2B", "accent": "#F2C14E"},
                "seoKeywords": ["pão artesanal", "padaria de fermentação natural"],
                "pageContent": {"Início": "Pães frescos todos os dias desde 1998."},
            }
        },
    )

    project_name: str = ""
    niche: str = ""
    target_audience: str = ""
    main_goal: str = ""
    tone: str = "Amigável"
    style: str = "Moderno e Minimalista"
    selected_pages: Sequence[str] = Field(
        default_factory=lambda: ["Início", "Sobre Nós", "Contato"]
    )
    corner_style: str = "Arredondados"
    site_complexity: str = "Simples e Direto"
    has_logo: bool = False
    logo_suggestion: str | None = Field(default=None, description="Base64 encoded logo image")
    colors: ColorPalette | None = None
    seo_keywords: Sequence[str] = Field(default_factory=list)
    page_content: Mapping[str, str] = Field(default_factory=dict)

    @field_validator("selected_pages")
    @classmethod
    def _drop_duplicate_pages(cls, pages: Sequence[str]) -> list[str]:
        return list(dict.fromkeys(pages))


__all__ = ["FormState"]
