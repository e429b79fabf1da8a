from __future__ import annotations

from typing import Mapping

from .dictionaries import (
    ACCESSIBILITY_DIRECTIVES,
    DEFAULT_PAGE_INSTRUCTIONS,
    GENERIC_PAGE_INSTRUCTION,
    HEADER_INSTRUCTION,
    INTERACTIVE_COMPLEXITY,
    INTERACTIVE_INSTRUCTION,
    KEYWORDS_FALLBACK_INSTRUCTION,
    LOGO_SUPPLIED_INSTRUCTION,
    MINIMAL_INSTRUCTION,
    PALETTE_FALLBACK_INSTRUCTION,
    TEXT_LOGO_INSTRUCTION,
)
from .models.form import FormState


class PromptTemplateEngine:
    """Turns a FormState into the website-builder prompt document.

    The output depends only on the form, so the same form always yields
    the same text.
    """

    def __init__(
        self,
        *,
        page_instructions: Mapping[str, str] = DEFAULT_PAGE_INSTRUCTIONS,
        generic_page_instruction: str = GENERIC_PAGE_INSTRUCTION,
        interactive_complexity: str = INTERACTIVE_COMPLEXITY,
    ) -> None:
        self._page_instructions = dict(page_instructions)
        self._generic_page_instruction = generic_page_instruction
        self._interactive_complexity = interactive_complexity

    def assemble(self, form: FormState) -> str:
        blocks = [
            "",
            HEADER_INSTRUCTION,
            "",
            "---",
            "",
            "**PROMPT PARA IA CONSTRUTORA DE SITES**",
            "",
            self._identity_block(form),
            "",
            self._structure_block(form),
            "",
            self._design_block(form),
            "",
            self._accessibility_block(form),
            "",
        ]
        return "\n".join(blocks)

    def _identity_block(self, form: FormState) -> str:
        lines = [
            "**1. Identidade Principal:**",
            f"   - **Nome do Negócio:** {form.project_name}",
            f"   - **Logo:** {self._logo_instructions(form)}",
            f"   - **Nicho de Mercado:** {form.niche}",
            f"   - **Público-Alvo:** {form.target_audience}",
            "   - **Proposta Única de Valor (USP):** "
            "[Elabore uma USP concisa e impactante baseada no nicho e público]",
            f"   - **Tom de Voz:** {form.tone}",
        ]
        return "\n".join(lines)

    def _structure_block(self, form: FormState) -> str:
        lines = [
            "**2. Estrutura e Conteúdo:**",
            f"   - **Páginas Necessárias:** {', '.join(form.selected_pages)}",
            "   - **Principal Chamada para Ação (CTA):** "
            f'O objetivo principal do site é levar o usuário a "{form.main_goal}". '
            "Crie botões e links proeminentes com este objetivo em mente.",
            "   - **Conteúdo Detalhado das Páginas:**",
        ]
        # Only selected pages are rendered; page_content keys outside them are ignored.
        lines.extend(self._page_block(form, page) for page in form.selected_pages)
        return "\n".join(lines)

    def _page_block(self, form: FormState, page: str) -> str:
        user_content = form.page_content.get(page)
        if user_content:
            return "\n".join(
                [
                    f"     - **{page}:**",
                    "       - **Conteúdo Fornecido pelo Usuário:**",
                    "       ```",
                    f"       {user_content}",
                    "       ```",
                    "       - **Instrução:** Use o conteúdo acima como base principal para esta página. "
                    "Expanda-o, melhore-o e formate-o conforme necessário, "
                    f'mantendo o tom de voz "{form.tone}".',
                ]
            )
        instruction = self._page_instructions.get(page)
        if instruction is None:
            instruction = self._generic_page_instruction.format(page=page)
        return f"     - **{page}:** [{instruction}]"

    def _design_block(self, form: FormState) -> str:
        corner = form.corner_style.lower()
        if form.site_complexity == self._interactive_complexity:
            complexity_instruction = INTERACTIVE_INSTRUCTION
        else:
            complexity_instruction = MINIMAL_INSTRUCTION
        lines = [
            "**3. Design e Estética:**",
            f"   - **Estilo Visual Geral:** {form.style}. Pense em layouts limpos, tipografia marcante "
            "e uso estratégico de espaços em branco.",
            f"   - **Paleta de Cores:** {self._color_instructions(form)}",
            "   - **Tipografia:** [Sugira um par de fontes (uma para títulos, uma para corpo de texto) "
            "que complementem o estilo visual. Ex: \"Use 'Poppins' para títulos e 'Lato' para texto.\"]",
            "   - **Estilo dos Elementos:**",
            "     - **Botões:** [Descreva a aparência dos botões, ex: "
            f'"grandes, com a cor de destaque e cantos {corner}"]',
            f"     - **Cards e Seções:** Devem ter cantos {corner} para uma aparência coesa.",
            f"   - **Complexidade e Interatividade:** O design deve ser **{form.site_complexity}**.",
            f"     - {complexity_instruction}",
            "   - **Imagens:** [Descreva o tipo de imagens a serem usadas. Ex: \"Use fotos de alta "
            'qualidade, autênticas e que mostrem pessoas reais interagindo com o produto."]',
        ]
        return "\n".join(lines)

    def _accessibility_block(self, form: FormState) -> str:
        lines = ["**4. Acessibilidade e SEO:**", "   - **Acessibilidade:**"]
        lines.extend(f"     - {directive}" for directive in ACCESSIBILITY_DIRECTIVES)
        lines.append("   - **SEO e Palavras-chave:**")
        lines.append(f"     - {self._seo_instructions(form)}")
        return "\n".join(lines)

    def _logo_instructions(self, form: FormState) -> str:
        return LOGO_SUPPLIED_INSTRUCTION if form.has_logo else TEXT_LOGO_INSTRUCTION

    def _color_instructions(self, form: FormState) -> str:
        colors = form.colors
        if colors is None:
            return PALETTE_FALLBACK_INSTRUCTION
        lines = [
            "A paleta de cores JÁ FOI DEFINIDA. Use EXATAMENTE estas cores:",
            f"     - Cor Primária: {colors.primary}",
            f"     - Cor de Destaque (Accent): {colors.accent}",
        ]
        if colors.secondary:
            lines.append(f"     - Cor Secundária: {colors.secondary}")
        if colors.neutral:
            lines.append(f"     - Cor Neutra: {colors.neutral}")
        lines.append("     Não invente nenhuma outra cor.")
        return "\n".join(lines)

    def _seo_instructions(self, form: FormState) -> str:
        if not form.seo_keywords:
            return KEYWORDS_FALLBACK_INSTRUCTION
        return (
            "Incorpore naturalmente as seguintes palavras-chave no conteúdo do site, especialmente em "
            f"títulos (H1, H2) e parágrafos iniciais: {', '.join(form.seo_keywords)}."
        )


_default_engine = PromptTemplateEngine()


def assemble_prompt(form: FormState) -> str:
    return _default_engine.assemble(form)


def inspiration_context(form: FormState) -> str:
    return f"Nicho: {form.niche}, Público-alvo: {form.target_audience}"


def page_content_context(form: FormState, page: str) -> str:
    return (
        f"Gere conteúdo para a página '{page}' de um site sobre '{form.niche}' para "
        f"'{form.target_audience}' com um tom '{form.tone}'. "
        f"O objetivo principal do site é '{form.main_goal}'"
    )


def logo_prompt(form: FormState) -> str:
    primary = form.colors.primary if form.colors else "preto"
    accent = form.colors.accent if form.colors else "azul"
    return (
        f'Crie um logo moderno e minimalista para uma empresa chamada "{form.project_name}" '
        f'no nicho de "{form.niche}". Estilo: {form.style}. Cores principais: {primary} e {accent}. '
        "O logo deve ser simples, icônico e em fundo branco."
    )


__all__ = [
    "PromptTemplateEngine",
    "assemble_prompt",
    "inspiration_context",
    "page_content_context",
    "logo_prompt",
]
