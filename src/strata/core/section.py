# src/strata/core/section.py
"""
Section Tree — navegação e acesso tipado à configuração consolidada.

Este módulo define a `Section`, a visão somente-leitura sobre um nó da
árvore de configuração produzida pelo Merge Engine.

Uma Section assume exatamente uma de duas formas:
    - NodeSection   → envolve um mapeamento congelado
    - AbsentSection → estado explícito "caminho não encontrado"

Caminhos:
    Uma chave pode apontar diretamente para um valor ou seção
    ("webserver") ou atravessar seções ("general:webserver"). O segmento
    após o último delimitador seleciona a seção ou o valor final.

Princípios fundamentais:
    - Toda operação é segura sobre uma AbsentSection: a ausência é
      propagada, nunca transformada em falha inesperada
    - Navegação não levanta exceções; apenas getters de valor levantam
      `AbsentError` / `InvalidTypeError`
    - Getters `*_or_default` absorvem ambas as exceções

Invariantes:
    - O mapeamento envolvido nunca é mutado (árvore congelada no build)
    - O mesmo caminho sobre a mesma árvore produz sempre o mesmo resultado
    - Ausência ≠ valor de tipo incompatível ≠ valor presente e nulo

Limites explícitos:
    - Não carrega nem mescla fontes
    - Não valida schema
    - Não recarrega configuração
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Tuple

from .coercion import (
    DEFAULT_DELIMITER,
    parse_bool,
    parse_float,
    parse_int,
    render_value,
    split_path,
)
from .errors import AbsentError, ConfigError, InvalidTypeError
from .merge import freeze, thaw


class Section(ABC):
    """
    Contrato comum das seções da árvore de configuração.

    Subclasses implementam apenas a navegação de um nível (`_child`) e a
    consulta de folha (`_leaf`); caminhos completos, coerção e defaults
    são resolvidos aqui, de forma idêntica para ambas as variantes.
    """

    delimiter: str
    path: Tuple[str, ...]

    @abstractmethod
    def _child(self, key: str) -> "Section":
        ...

    @abstractmethod
    def _leaf(self, key: str) -> Any:
        ...

    @abstractmethod
    def is_absent(self) -> bool:
        """Retorna True se esta seção é o estado ausente."""

    @abstractmethod
    def keys(self) -> Tuple[str, ...]:
        """Chaves diretas deste nó (vazio para a seção ausente)."""

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Cópia mutável e independente deste nó (vazio para a seção ausente)."""

    def _join(self, *segments: str) -> str:
        return self.delimiter.join(self.path + segments)

    def full_path(self) -> str:
        """Caminho desta seção a partir da raiz, unido pelo delimitador."""
        return self._join()

    # -----------------------------
    # Navegação
    # -----------------------------
    def get_section(self, path: str) -> "Section":
        """
        Retorna a seção apontada por `path`.

        Cada segmento deve resolver para um mapeamento aninhado. Ao primeiro
        segmento ausente (ou escalar), o resultado passa a ser uma
        AbsentSection, e permanece ausente para os segmentos seguintes.
        Nunca levanta exceção.
        """
        section: Section = self
        for segment in split_path(path, self.delimiter):
            section = section._child(segment)
        return section

    def get_value(self, path: str) -> Any:
        """
        Retorna o valor bruto armazenado em `path`.

        Todos os segmentos exceto o último devem resolver para seções; o
        último é consultado como chave folha. O valor retornado pode ser
        um escalar, `None` ou um mapeamento congelado.

        Raises:
            AbsentError: Se alguma seção intermediária ou a chave final
                não existir.
        """
        segments = split_path(path, self.delimiter)
        parent: Section = self
        for segment in segments[:-1]:
            parent = parent._child(segment)
        return parent._leaf(segments[-1])

    # -----------------------------
    # Getters tipados
    # -----------------------------
    def _coerce(
        self,
        path: str,
        expected: str,
        is_native: Callable[[Any], bool],
        parse: Callable[[str], Any],
    ) -> Any:
        value = self.get_value(path)
        if is_native(value):
            return value
        try:
            return parse(render_value(value))
        except ValueError:
            full_path = self._join(*split_path(path, self.delimiter))
            raise InvalidTypeError(full_path, expected, value) from None

    def get_string(self, path: str) -> str:
        """
        Retorna o valor em `path` como string.

        Valores não-string são renderizados pela forma canônica; uma vez
        encontrado o valor, esta operação nunca falha.
        """
        return render_value(self.get_value(path))

    def get_int(self, path: str) -> int:
        """
        Retorna o valor em `path` como int.

        Um `int` armazenado é retornado diretamente (`bool` nunca conta
        como int); qualquer outro valor é renderizado e interpretado em
        base 10.

        Raises:
            AbsentError: Se o caminho não existir.
            InvalidTypeError: Se o texto não for um inteiro de 64 bits.
        """
        return self._coerce(
            path,
            "int",
            lambda v: isinstance(v, int) and not isinstance(v, bool),
            parse_int,
        )

    def get_bool(self, path: str) -> bool:
        """
        Retorna o valor em `path` como bool.

        Aceita um `bool` armazenado ou os literais 1/t/T/TRUE/true/True e
        0/f/F/FALSE/false/False; demais valores levantam InvalidTypeError.
        """
        return self._coerce(path, "bool", lambda v: isinstance(v, bool), parse_bool)

    def get_float(self, path: str) -> float:
        """Retorna o valor em `path` como float (nativo ou renderizado e reinterpretado)."""
        return self._coerce(path, "float", lambda v: isinstance(v, float), parse_float)

    # -----------------------------
    # Getters com default
    # -----------------------------
    # Cada variante absorve AbsentError e InvalidTypeError e devolve
    # `default` inalterado; nenhuma exceção de consulta chega ao chamador.
    def get_value_or_default(self, path: str, default: Any = None) -> Any:
        """Valor bruto em `path`, ou `default` se o caminho não existir."""
        try:
            return self.get_value(path)
        except ConfigError:
            return default

    def get_string_or_default(self, path: str, default: str) -> str:
        try:
            return self.get_string(path)
        except ConfigError:
            return default

    def get_int_or_default(self, path: str, default: int) -> int:
        """`get_int`, ou `default` se o caminho não existir ou não for inteiro."""
        try:
            return self.get_int(path)
        except ConfigError:
            return default

    def get_bool_or_default(self, path: str, default: bool) -> bool:
        """`get_bool`, ou `default` se o caminho não existir ou não for booleano."""
        try:
            return self.get_bool(path)
        except ConfigError:
            return default

    def get_float_or_default(self, path: str, default: float) -> float:
        """`get_float`, ou `default` se o caminho não existir ou não for float."""
        try:
            return self.get_float(path)
        except ConfigError:
            return default


def _check_delimiter(delimiter: str) -> None:
    if not isinstance(delimiter, str) or not delimiter:
        raise ValueError(f"Delimitador inválido: {delimiter!r}")


@dataclass(frozen=True)
class NodeSection(Section):
    """
    Seção concreta sobre um mapeamento congelado.

    Duas NodeSections sobre o mesmo nó e posição são intercambiáveis
    (igualdade estrutural). O hash usa apenas delimitador e posição, pois
    o mapeamento congelado não é hashable.
    """

    node: Mapping[str, Any] = field(hash=False)
    delimiter: str = DEFAULT_DELIMITER
    path: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _check_delimiter(self.delimiter)

    def _child(self, key: str) -> Section:
        value = self.node.get(key)
        if isinstance(value, Mapping):
            return NodeSection(node=value, delimiter=self.delimiter, path=self.path + (key,))
        return AbsentSection(delimiter=self.delimiter, path=self.path + (key,))

    def _leaf(self, key: str) -> Any:
        if key not in self.node:
            raise AbsentError(self._join(key))
        return self.node[key]

    def is_absent(self) -> bool:
        return False

    def keys(self) -> Tuple[str, ...]:
        return tuple(self.node.keys())

    def to_dict(self) -> Dict[str, Any]:
        return thaw(self.node)


@dataclass(frozen=True)
class AbsentSection(Section):
    """
    Seção ausente ("nil section").

    Navegar a partir dela produz outra AbsentSection; consultar valores
    levanta `AbsentError` com o caminho completo solicitado.
    """

    delimiter: str = DEFAULT_DELIMITER
    path: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _check_delimiter(self.delimiter)

    def _child(self, key: str) -> Section:
        return AbsentSection(delimiter=self.delimiter, path=self.path + (key,))

    def _leaf(self, key: str) -> Any:
        raise AbsentError(self._join(key))

    def is_absent(self) -> bool:
        return True

    def keys(self) -> Tuple[str, ...]:
        return ()

    def to_dict(self) -> Dict[str, Any]:
        return {}


def build_root(mapping: Mapping[str, Any], delimiter: str = DEFAULT_DELIMITER) -> NodeSection:
    """
    Congela o mapeamento consolidado e o envolve como seção raiz.

    O mapeamento recebido é copiado; mutações posteriores nele não
    afetam a árvore retornada.
    """
    return NodeSection(node=freeze(mapping), delimiter=delimiter)
