# src/strata/sources/__init__.py
"""
Fontes de configuração.

Cada fonte produz o único artefato consumido pelo core: um mapeamento de
chaves string para escalares ou mapeamentos aninhados.

    - files       → arquivos JSON e YAML
    - environment → variáveis de ambiente com prefixo e separador
"""

from .environment import DEFAULT_ENV_SEPARATOR, load_environment
from .files import detect_format, load_file, normalize_keys

__all__ = [
    "DEFAULT_ENV_SEPARATOR",
    "detect_format",
    "load_environment",
    "load_file",
    "normalize_keys",
]
