# src/strata/sources/environment.py
"""
Fonte de configuração baseada em variáveis de ambiente.

Variáveis cujo nome começa com o prefixo configurado são convertidas em
um mapeamento aninhado: o prefixo é removido e o restante do nome é
dividido pelo separador em segmentos de caminho.

Exemplo (prefixo "APP_", separador "__"):
    APP_DATABASE__HOST=db  →  {"DATABASE": {"HOST": "db"}}

Decisões arquiteturais:
    - Valores são sempre capturados como string; a coerção ocorre apenas
      no acesso tipado
    - Variáveis são processadas em ordem alfabética de nome
    - Conflitos de formato (ex.: APP_A e APP_A__B) são resolvidos pelo
      Merge Engine: o nome processado por último vence
    - Nomes com segmentos vazios são ignorados

Limites explícitos:
    - Não altera caixa das chaves
    - Não interpreta tipos
"""

from __future__ import annotations

import os
from typing import Any, Dict, List, Mapping, Optional

from ..core.merge import merge_all

DEFAULT_ENV_SEPARATOR = "__"


def _nest(segments: List[str], value: str) -> Dict[str, Any]:
    node: Dict[str, Any] = {segments[-1]: value}
    for segment in reversed(segments[:-1]):
        node = {segment: node}
    return node


def load_environment(
    prefix: str,
    *,
    separator: str = DEFAULT_ENV_SEPARATOR,
    strip_prefix: bool = True,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """
    Constrói um mapeamento aninhado a partir das variáveis de ambiente.

    Args:
        prefix (str): Prefixo que seleciona as variáveis (pode ser vazio).
        separator (str): Separador de segmentos no nome da variável.
        strip_prefix (bool): Se True, o prefixo não faz parte das chaves.
        environ (Optional[Mapping[str, str]]): Ambiente a ser lido;
            `os.environ` se omitido.

    Returns:
        Dict[str, Any]: Mapeamento aninhado com valores string.

    Raises:
        ValueError: Se o separador for vazio.
    """
    if not separator:
        raise ValueError("Separador de variáveis de ambiente não pode ser vazio")

    env = os.environ if environ is None else environ

    entries = []
    for name in sorted(env):
        if not name.startswith(prefix):
            continue
        key = name[len(prefix):] if strip_prefix else name
        segments = key.split(separator)
        if not all(segments):
            continue
        entries.append(_nest(segments, env[name]))

    return merge_all(entries)
