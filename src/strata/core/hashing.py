# src/strata/core/hashing.py
"""
Hashing canônico da configuração consolidada.

O hash gerado representa a **identidade estrutural** da árvore final e é
utilizado para:
    - identificar se dois builds produziram a mesma configuração
    - registrar a configuração efetiva no relatório de build

Política de hashing (v1):
    - Serialização JSON canônica (ver `coercion.canonical_json`)
    - Ordenação estável de chaves
    - Codificação UTF-8
    - Algoritmo SHA-256

Invariantes:
    - Configurações estruturalmente equivalentes produzem o mesmo hash
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres
    - Árvores congeladas e dicts equivalentes produzem o mesmo hash

Limites explícitos:
    - Não carrega nem mescla configuração
    - Não persiste o hash
"""

import hashlib
from collections.abc import Mapping
from typing import Any

from .coercion import canonical_json


def compute_config_hash(config: Mapping[str, Any]) -> str:
    """
    Gera um hash determinístico da configuração consolidada.

    Args:
        config (Mapping[str, Any]): Configuração consolidada (dict ou árvore congelada).

    Returns:
        str: Hash SHA-256 hexadecimal da configuração.

    Raises:
        TypeError: Se o objeto fornecido não for um mapeamento.
    """

    if not isinstance(config, Mapping):
        raise TypeError(
            f"Config para hashing deve ser um mapeamento, recebido: {type(config).__name__}"
        )

    return hashlib.sha256(canonical_json(dict(config)).encode("utf-8")).hexdigest()
