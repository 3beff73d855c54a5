# src/strata/core/merge.py
"""
Merge Engine canônico do Strata.

Este módulo implementa a política oficial de deep-merge utilizada para
combinar os mapeamentos produzidos por cada fonte de configuração, na
ordem de registro, em um único mapeamento final.

Política de merge (v1):
    - mapa + mapa → merge recursivo por chave (união de chaves)
    - demais casos → o valor da fonte posterior substitui o anterior
      (escalar/escalar, mapa/escalar, escalar/mapa, listas)

Princípios fundamentais:
    - O merge é determinístico e puramente funcional
    - Nenhum input é mutado durante o processo
    - A ordem das fontes é a única regra de precedência

Invariantes:
    - A mesma entrada sempre produz a mesma saída
    - Chaves não sobrescritas são preservadas
    - merge(x, x) == x
    - O resultado nunca compartilha objetos mutáveis com os inputs

Limites explícitos:
    - Não carrega arquivos ou variáveis de ambiente
    - Não realiza coerção de tipos
    - Não reordena fontes nem chaves
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterable


def _clone(value: Any) -> Any:
    # deepcopy não suporta MappingProxyType; árvores congeladas também são aceitas
    if isinstance(value, Mapping):
        return {key: _clone(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_clone(item) for item in value]
    return value


def _replace(destination_value: Any, source_value: Any) -> Any:
    """
    Resolve um conflito que não é mapa + mapa: a fonte posterior vence.

    Não há reconciliação de tipos nem aviso: se um lado é seção e o outro
    escalar, o formato da fonte posterior substitui o anterior por inteiro.
    """
    return _clone(source_value)


def deep_merge(destination: Mapping, source: Mapping) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre dois mapeamentos de configuração.

    Esta função combina o mapeamento acumulado (`destination`) com o
    mapeamento de uma fonte posterior (`source`), produzindo uma nova
    estrutura sem mutar nenhum dos inputs.

    Política de merge (v1):
        - chave só em `source`    → inserida (clonada)
        - mapa + mapa             → merge recursivo
        - qualquer outro conflito → valor de `source` substitui o destino

    Invariantes:
        - A estrutura retornada é sempre um novo dicionário
        - Chaves ausentes em `source` são preservadas de `destination`
        - Mutações posteriores em `source` nunca afetam o resultado

    Args:
        destination (Mapping): Configuração acumulada (fontes anteriores).
        source (Mapping): Configuração da fonte posterior.

    Returns:
        Dict[str, Any]: Nova configuração resultante do deep-merge.

    Raises:
        TypeError: Se algum dos argumentos não for um mapeamento.
    """

    if not isinstance(destination, Mapping) or not isinstance(source, Mapping):
        raise TypeError(
            f"Deep-merge requer mapeamentos no nível raiz, recebido: "
            f"{type(destination).__name__} vs {type(source).__name__}"
        )

    result: Dict[str, Any] = _clone(destination)

    for key, source_value in source.items():
        if key not in result:
            result[key] = _clone(source_value)
            continue

        destination_value = result[key]

        # mapa -> merge recursivo
        if isinstance(destination_value, Mapping) and isinstance(source_value, Mapping):
            result[key] = deep_merge(destination_value, source_value)
            continue

        result[key] = _replace(destination_value, source_value)

    return result


def merge_all(mappings: Iterable[Mapping]) -> Dict[str, Any]:
    """
    Combina N mapeamentos, da esquerda para a direita, em um único mapeamento.

    A ordem recebida define a precedência: uma fonte posterior sobrescreve
    as anteriores no mesmo caminho. Nenhuma reordenação é aplicada.
    """
    result: Dict[str, Any] = {}
    for mapping in mappings:
        result = deep_merge(result, mapping)
    return result


def freeze(mapping: Mapping) -> Mapping:
    """
    Congela recursivamente um mapeamento para uso somente-leitura.

    Mapas viram `MappingProxyType` sobre cópias privadas e listas viram
    tuplas; o resultado pode ser compartilhado entre threads sem locks.
    """
    frozen = {key: _freeze_value(value) for key, value in mapping.items()}
    return MappingProxyType(frozen)


def _freeze_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return freeze(value)
    if isinstance(value, (list, tuple)):
        return tuple(_freeze_value(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Inverso de `freeze`: devolve cópias mutáveis (`dict` / `list`)."""
    return _clone(value)
