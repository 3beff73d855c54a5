# src/strata/sources/files.py
"""
Decoders de arquivos de configuração (JSON e YAML).

Este módulo lê um arquivo do disco e o transforma no único artefato que
o core conhece: um mapeamento de chaves string para valores escalares ou
mapeamentos aninhados.

Formatos suportados (v1):
    - YAML (.yaml, .yml) via PyYAML (`SafeLoader` com chaves normalizadas)
    - JSON (.json)

Decisões arquiteturais:
    - Fonte opcional ausente → mapeamento vazio (nunca erro)
    - Fonte obrigatória ausente → `SourceNotFoundError`
    - Conteúdo inválido ou ilegível → `SourceDecodeError`, mesmo para
      fontes opcionais
    - Arquivo vazio → mapeamento vazio
    - Chaves não-string (ex.: `1:` ou `true:` em YAML) são normalizadas
      pelo renderizador canônico já na construção do mapa; chaves
      distintas que colidem após a normalização são um erro

Invariantes:
    - O retorno é sempre um `dict` com chaves `str`
    - Nenhum mapeamento parcial é retornado em caso de erro

Limites explícitos:
    - Não realiza merge
    - Não valida schema
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml  # PyYAML
from yaml.constructor import ConstructorError
from yaml.resolver import BaseResolver

from ..core.coercion import render_value
from ..core.errors import (
    InvalidConfigRootTypeError,
    SourceDecodeError,
    SourceNotFoundError,
    UnsupportedConfigFormatError,
)

JSON = "json"
YAML = "yaml"

_SUFFIX_FORMATS = {
    ".json": JSON,
    ".yaml": YAML,
    ".yml": YAML,
}


def detect_format(path: Union[str, Path]) -> str:
    """
    Determina o formato de um arquivo pela extensão.

    Raises:
        UnsupportedConfigFormatError: Se a extensão não for suportada.
    """
    suffix = Path(path).suffix.lower()
    fmt = _SUFFIX_FORMATS.get(suffix)
    if fmt is None:
        raise UnsupportedConfigFormatError(str(path), suffix)
    return fmt


def _same_key(a: Any, b: Any) -> bool:
    # True == 1 em Python; chaves só coincidem com mesmo tipo e valor
    return type(a) is type(b) and a == b


def normalize_keys(value: Any, source: str = "<memory>") -> Any:
    """
    Converte recursivamente todas as chaves de mapeamentos em `str`.

    Raises:
        SourceDecodeError: Se duas chaves distintas colidirem após a
            renderização (ex.: `1` e `"1"`).
    """
    if isinstance(value, Mapping):
        result: Dict[str, Any] = {}
        originals: Dict[str, Any] = {}
        for key, item in value.items():
            rendered = render_value(key)
            if rendered in originals and not _same_key(originals[rendered], key):
                raise SourceDecodeError(
                    source,
                    f"chaves {originals[rendered]!r} e {key!r} colidem como {rendered!r}",
                )
            originals[rendered] = key
            result[rendered] = normalize_keys(item, source)
        return result
    if isinstance(value, list):
        return [normalize_keys(item, source) for item in value]
    return value


class _StrKeyLoader(yaml.SafeLoader):
    """SafeLoader que renderiza as chaves de cada mapa durante a construção."""


def _construct_str_key_mapping(loader: _StrKeyLoader, node: yaml.MappingNode) -> Dict[str, Any]:
    loader.flatten_mapping(node)
    mapping: Dict[str, Any] = {}
    originals: Dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=True)
        rendered = render_value(key)
        # a mesma chave repetida (ex.: override após merge `<<`) continua válida
        if rendered in originals and not _same_key(originals[rendered], key):
            raise ConstructorError(
                "while constructing a mapping",
                node.start_mark,
                f"chaves {originals[rendered]!r} e {key!r} colidem como {rendered!r}",
                key_node.start_mark,
            )
        originals[rendered] = key
        mapping[rendered] = loader.construct_object(value_node, deep=True)
    return mapping


_StrKeyLoader.add_constructor(
    BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_str_key_mapping,
)


def _decode(text: str, fmt: str, path: Path) -> Any:
    if fmt == YAML:
        try:
            return yaml.load(text, Loader=_StrKeyLoader)
        except yaml.YAMLError as e:
            raise SourceDecodeError(str(path), str(e)) from e

    if fmt == JSON:
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise SourceDecodeError(str(path), str(e)) from e

    raise UnsupportedConfigFormatError(str(path), fmt)  # pragma: no cover


def load_file(
    path: Union[str, Path],
    *,
    optional: bool = True,
    fmt: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Carrega um arquivo de configuração e valida sua estrutura básica.

    Args:
        path (Union[str, Path]): Caminho para o arquivo de configuração.
        optional (bool): Se True, a ausência do arquivo produz `{}`.
        fmt (Optional[str]): "json" ou "yaml"; inferido pela extensão se omitido.

    Returns:
        Dict[str, Any]: Conteúdo do arquivo como dicionário com chaves `str`.

    Raises:
        SourceNotFoundError: Se o arquivo obrigatório não existir.
        UnsupportedConfigFormatError: Se o formato não for suportado.
        SourceDecodeError: Se o arquivo não puder ser lido ou decodificado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um mapeamento.
    """
    path = Path(path)
    fmt = fmt.lower() if fmt is not None else detect_format(path)
    if fmt not in (JSON, YAML):
        raise UnsupportedConfigFormatError(str(path), fmt)

    if not path.is_file():
        if optional:
            return {}
        raise SourceNotFoundError(str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceDecodeError(str(path), str(e)) from e

    data = _decode(text, fmt, path)

    if data is None:
        data = {}

    if not isinstance(data, Mapping):
        raise InvalidConfigRootTypeError(str(path), type(data).__name__)

    return normalize_keys(data, str(path))
