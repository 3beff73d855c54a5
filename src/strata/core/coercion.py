# src/strata/core/coercion.py
"""
Utilitários canônicos de caminho e coerção de valores.

Este módulo concentra as duas operações sutis da árvore de configuração:
a segmentação de caminhos e a política "renderizar para string canônica,
depois reinterpretar" usada pelos getters tipados.

Política de renderização (v1):
    - str            → inalterada
    - bool           → "true" / "false"
    - int            → decimal
    - float integral → dígitos sem ".0" (|x| < 1e21), demais → repr
    - None           → ""
    - mapa / lista   → JSON canônico (chaves ordenadas, separadores compactos)
    - outros         → str()

Política de parsing (v1):
    - int   → base 10, sinal opcional, faixa de 64 bits com sinal
    - bool  → vocabulário fixo (1/t/T/TRUE/true/True e 0/f/F/FALSE/false/False)
    - float → decimal ou científica ASCII, inf/nan; sem espaços, "_" nem estouro

Invariantes:
    - A mesma entrada sempre produz a mesma saída
    - A renderização independe de locale
    - Falhas de parsing levantam `ValueError`; a tradução para
      `InvalidTypeError` é responsabilidade da Section

Limites explícitos:
    - Não navega na árvore
    - Não conhece caminhos completos nem defaults
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping
from typing import Any, List

DEFAULT_DELIMITER = ":"

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1

_TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_FLOAT_SPECIAL_PATTERN = re.compile(r"[+-]?(?i:inf|infinity|nan)")
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|(?i:inf|infinity|nan))"
)


def split_path(path: str, delimiter: str = DEFAULT_DELIMITER) -> List[str]:
    """
    Divide um caminho em segmentos pelo delimitador configurado.

    Segmentos vazios são preservados (`"a::b"` → `["a", "", "b"]`) e um
    caminho vazio produz um único segmento vazio.

    Raises:
        ValueError: Se o delimitador for vazio.
    """
    if not delimiter:
        raise ValueError("Delimitador de caminho não pode ser vazio")
    return path.split(delimiter)


def _json_default(obj: Any) -> Any:
    if isinstance(obj, Mapping):
        return dict(obj)
    return render_value(obj)


def canonical_json(value: Any) -> str:
    """
    Serializa um valor em JSON canônico.

    Mapas congelados são convertidos em dicts e tipos não serializáveis
    (ex.: datas vindas de YAML) passam pelo renderizador canônico.
    """
    return json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=_json_default,
    )


def _render_float(value: float) -> str:
    if math.isfinite(value) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def render_value(value: Any) -> str:
    """
    Renderiza um valor armazenado em sua forma textual canônica.

    Este é o único ponto de conversão valor → texto do Strata. Ele é
    usado por `get_string`, como etapa intermediária dos getters tipados,
    pela normalização de chaves dos decoders e pelo JSON canônico.

    Args:
        value (Any): Valor bruto armazenado na árvore.

    Returns:
        str: Representação canônica do valor.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _render_float(value)
    if value is None:
        return ""
    if isinstance(value, (Mapping, list, tuple)):
        return canonical_json(value)
    return str(value)


def parse_int(text: str) -> int:
    """Interpreta `text` como inteiro base 10 de 64 bits com sinal."""
    if not _INT_PATTERN.fullmatch(text):
        raise ValueError(f"inteiro inválido: {text!r}")
    number = int(text, 10)
    if number < _INT64_MIN or number > _INT64_MAX:
        raise ValueError(f"inteiro fora da faixa de 64 bits: {text!r}")
    return number


def parse_bool(text: str) -> bool:
    if text in _TRUE_LITERALS:
        return True
    if text in _FALSE_LITERALS:
        return False
    raise ValueError(f"booleano inválido: {text!r}")


def parse_float(text: str) -> float:
    """
    Interpreta `text` como float (decimal, científica, inf ou nan).

    Apenas dígitos ASCII são aceitos; literais finitos que estouram a
    faixa de float64 (ex.: "1e400") são rejeitados em vez de virar inf.
    """
    if not _FLOAT_PATTERN.fullmatch(text):
        raise ValueError(f"float inválido: {text!r}")
    number = float(text)
    if math.isinf(number) and not _FLOAT_SPECIAL_PATTERN.fullmatch(text):
        raise ValueError(f"float fora da faixa: {text!r}")
    return number
