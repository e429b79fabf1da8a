"""Pure state transitions applied to a FormState.

Each function returns a new, re-validated form and leaves its input untouched.
"""

from __future__ import annotations

from typing import Any, Sequence

from .models.form import FormState
from .models.suggestions import ColorPalette, SiteAnalysis
from .validation import is_hex_color

INSPIRATION_FIELDS = frozenset({"project_name", "niche", "target_audience", "main_goal"})


def resolve_field(field: str) -> str:
    """Map a field name or its camelCase alias to the attribute name."""
    if field in FormState.model_fields:
        return field
    for name, info in FormState.model_fields.items():
        if info.alias == field:
            return name
    raise KeyError(f"Unknown form field: {field}")


def resolve_inspiration_field(field: str) -> str:
    """Like resolve_field, limited to the free-text fields that accept suggestions."""
    name = resolve_field(field)
    if name not in INSPIRATION_FIELDS:
        raise KeyError(f"Field does not accept suggestions: {field}")
    return name


def _rebuild(form: FormState, update: dict[str, Any]) -> FormState:
    return FormState.model_validate({**form.model_dump(), **update})


def update_field(form: FormState, field: str, value: Any) -> FormState:
    return _rebuild(form, {resolve_field(field): value})


def toggle_page(form: FormState, page: str) -> FormState:
    pages = list(form.selected_pages)
    if page in pages:
        pages.remove(page)
    else:
        pages.append(page)
    return _rebuild(form, {"selected_pages": pages})


def set_page_content(form: FormState, page: str, content: str) -> FormState:
    return _rebuild(form, {"page_content": {**form.page_content, page: content}})


def apply_analysis(form: FormState, analysis: SiteAnalysis) -> FormState:
    update: dict[str, Any] = {
        "project_name": analysis.project_name,
        "niche": analysis.niche,
        "target_audience": analysis.target_audience,
        "main_goal": analysis.main_goal,
        "tone": analysis.tone,
    }
    if analysis.selected_pages:
        update["selected_pages"] = list(analysis.selected_pages)
    colors = analysis.colors
    # Analysed colors are only attached when both are valid hex values.
    if colors is not None and is_hex_color(colors.primary) and is_hex_color(colors.accent):
        update["colors"] = ColorPalette(primary=colors.primary, accent=colors.accent)
    return _rebuild(form, update)


def apply_palette(form: FormState, palette: ColorPalette) -> FormState:
    return _rebuild(form, {"colors": palette})


def apply_keywords(form: FormState, keywords: Sequence[str]) -> FormState:
    return _rebuild(form, {"seo_keywords": list(keywords)})


def apply_inspiration(form: FormState, field: str, suggestions: Sequence[str]) -> FormState:
    name = resolve_inspiration_field(field)
    if not suggestions:
        return form
    return _rebuild(form, {name: suggestions[0]})


def apply_logo_suggestion(form: FormState, image_base64: str) -> FormState:
    return _rebuild(form, {"logo_suggestion": image_base64, "has_logo": True})


__all__ = [
    "INSPIRATION_FIELDS",
    "resolve_field",
    "resolve_inspiration_field",
    "update_field",
    "toggle_page",
    "set_page_content",
    "apply_analysis",
    "apply_palette",
    "apply_keywords",
    "apply_inspiration",
    "apply_logo_suggestion",
]
