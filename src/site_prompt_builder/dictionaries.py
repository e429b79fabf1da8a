from __future__ import annotations

from typing import Mapping, Sequence


TONES: Sequence[str] = ("Profissional", "Amigável", "Humorístico", "Inspirador", "Informativo")

STYLES: Sequence[str] = (
    "Moderno e Minimalista",
    "Elegante e Sofisticado",
    "Vibrante e Energético",
    "Rústico e Orgânico",
    "Retrô e Divertido",
)

PAGES: Sequence[str] = ("Início", "Sobre Nós", "Serviços", "Blog", "Contato", "Galeria", "Preços")

CORNER_STYLES: Sequence[str] = ("Arredondados", "Afiados")

SIMPLE_COMPLEXITY = "Simples e Direto"
INTERACTIVE_COMPLEXITY = "Interativo e Detalhado"
COMPLEXITY_LEVELS: Sequence[str] = (SIMPLE_COMPLEXITY, INTERACTIVE_COMPLEXITY)


DEFAULT_PAGE_INSTRUCTIONS: Mapping[str, str] = {
    "Início": (
        "Descreva uma seção de herói cativante com um título forte, um subtítulo e um CTA claro. "
        "Siga com uma breve introdução dos serviços/produtos, um bloco de prova social "
        "(depoimentos ou logotipos de clientes) e um CTA final."
    ),
    "Sobre Nós": (
        "Crie uma narrativa envolvente sobre a história, missão e valores da marca. "
        "Apresente a equipe, se aplicável, e construa uma conexão emocional com o leitor."
    ),
    "Serviços": (
        "Liste e descreva detalhadamente os serviços ou produtos oferecidos. "
        "Use títulos claros, parágrafos curtos e talvez ícones para cada item. "
        "Termine com um CTA para solicitar um orçamento ou comprar."
    ),
    "Blog": (
        "Estruture uma página de listagem de artigos de blog com espaço para uma imagem destacada, "
        "título, resumo e data para cada post. Inclua uma barra lateral com categorias ou posts populares."
    ),
    "Contato": (
        "Inclua um formulário de contato simples (Nome, Email, Mensagem). "
        "Adicione outras informações como endereço (com um mapa incorporado, se possível), "
        "telefone e horário de funcionamento."
    ),
    "Galeria": (
        "Projete uma grade de imagens visualmente atraente. "
        "Considere funcionalidades de filtro por categoria e um lightbox para visualização em tela cheia."
    ),
    "Preços": (
        "Crie uma tabela de preços clara e comparativa. Destaque o plano mais popular. "
        "Para cada plano, liste os recursos principais e inclua um botão de CTA claro."
    ),
}

GENERIC_PAGE_INSTRUCTION = "Forneça uma estrutura de conteúdo básica e relevante para uma página de '{page}'."


HEADER_INSTRUCTION = (
    "**NÃO adicione nenhum texto introdutório ou final. Gere APENAS o prompt em markdown abaixo, "
    "preenchendo as seções com criatividade e detalhes.**"
)

LOGO_SUPPLIED_INSTRUCTION = (
    "O usuário FORNECEU um arquivo de logo (ou gerou uma sugestão). Use este logo de forma proeminente "
    "no cabeçalho (geralmente no canto superior esquerdo) e novamente de forma mais sutil no rodapé. "
    "Garanta que haja espaço em branco adequado ao redor do logo."
)

TEXT_LOGO_INSTRUCTION = (
    "CRIE um logo de texto simples e elegante para o negócio. Use o nome da marca e a fonte de título "
    "principal para o logo. Ele deve ser limpo e profissional."
)

PALETTE_FALLBACK_INSTRUCTION = (
    "Sugira uma paleta de cores profissional e acessível que se alinhe com o nicho e o estilo visual. "
    "Certifique-se de que haja contraste suficiente para a legibilidade."
)

INTERACTIVE_INSTRUCTION = (
    "[Incorpore micro-interações sutis em botões e links (como um leve zoom no hover) e transições "
    "suaves de scroll para animar a aparição de seções.]"
)

MINIMAL_INSTRUCTION = "[Foque em um design limpo, rápido e fácil de navegar, sem animações desnecessárias.]"

KEYWORDS_FALLBACK_INSTRUCTION = (
    "[Sugira 5-10 palavras-chave de cauda longa relevantes para o nicho para otimização de SEO]."
)

ACCESSIBILITY_DIRECTIVES: Sequence[str] = (
    "Garanta que todas as combinações de cores de texto e fundo tenham uma taxa de contraste que atenda aos padrões WCAG AA.",
    "Inclua texto alternativo (alt text) descritivo para todas as imagens.",
    "Use uma estrutura de cabeçalho (H1, H2, H3) lógica e semântica.",
)


STREAM_ERROR_TEMPLATE = "Ocorreu um erro na comunicação com a API: {message}"
STREAM_UNKNOWN_ERROR = "Ocorreu um erro desconhecido ao gerar o prompt."


__all__ = [
    "TONES",
    "STYLES",
    "PAGES",
    "CORNER_STYLES",
    "COMPLEXITY_LEVELS",
    "SIMPLE_COMPLEXITY",
    "INTERACTIVE_COMPLEXITY",
    "DEFAULT_PAGE_INSTRUCTIONS",
    "GENERIC_PAGE_INSTRUCTION",
    "HEADER_INSTRUCTION",
    "LOGO_SUPPLIED_INSTRUCTION",
    "TEXT_LOGO_INSTRUCTION",
    "PALETTE_FALLBACK_INSTRUCTION",
    "INTERACTIVE_INSTRUCTION",
    "MINIMAL_INSTRUCTION",
    "KEYWORDS_FALLBACK_INSTRUCTION",
    "ACCESSIBILITY_DIRECTIVES",
    "STREAM_ERROR_TEMPLATE",
    "STREAM_UNKNOWN_ERROR",
]
