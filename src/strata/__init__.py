# src/strata/__init__.py
"""
Strata — agregador hierárquico de configuração.

O Strata combina configuração estruturada vinda de múltiplas fontes
(arquivos JSON/YAML, mapeamentos em memória e variáveis de ambiente) em
uma única árvore chave/valor aninhada e expõe acessores tipados,
endereçados por caminho, sobre essa árvore.

Arquitetura em alto nível:
    - core.merge    → Merge Engine (deep-merge determinístico, freeze)
    - core.section  → Section Tree (navegação, coerção, defaults)
    - core.coercion → segmentação de caminhos e política de coerção
    - sources       → decoders de arquivos e fonte de ambiente
    - builder       → orquestração: fontes → merge → árvore congelada

Princípios centrais:
    - A ordem de registro das fontes é a única regra de precedência
    - A árvore construída é imutável e segura para leitura concorrente
    - Ausência é um estado explícito, nunca uma falha inesperada
"""

from .builder import ConfigBuilder, Configuration
from .core.errors import (
    AbsentError,
    ConfigError,
    InvalidConfigRootTypeError,
    InvalidTypeError,
    SourceDecodeError,
    SourceNotFoundError,
    UnsupportedConfigFormatError,
)
from .core.merge import deep_merge, merge_all
from .core.section import AbsentSection, NodeSection, Section, build_root

__all__ = [
    "AbsentError",
    "AbsentSection",
    "ConfigBuilder",
    "ConfigError",
    "Configuration",
    "InvalidConfigRootTypeError",
    "InvalidTypeError",
    "NodeSection",
    "Section",
    "SourceDecodeError",
    "SourceNotFoundError",
    "UnsupportedConfigFormatError",
    "build_root",
    "deep_merge",
    "merge_all",
]
