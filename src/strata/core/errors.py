# src/strata/core/errors.py
"""
Exceções canônicas do Strata.

Este módulo define a hierarquia oficial de exceções utilizadas durante a
navegação da árvore de configuração, a coerção de valores tipados e o
carregamento das fontes de configuração.

Taxonomia:
    - Consulta (sempre recuperáveis localmente):
        - AbsentError       → o caminho solicitado não existe na árvore
        - InvalidTypeError  → o valor existe, mas não pode ser convertido
    - Fontes (abortam o build):
        - SourceNotFoundError
        - UnsupportedConfigFormatError
        - InvalidConfigRootTypeError
        - SourceDecodeError

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Toda exceção carrega dados estruturados em `details`
    - Mensagens são curtas e direcionadas ao usuário

Invariantes:
    - Todas as exceções herdam de `ConfigError`
    - `to_dict()` sempre produz um payload serializável

Limites explícitos:
    - Não realiza fallback ou recovery (isso é papel dos getters `*_or_default`)
    - Não depende de builder, loaders ou UI
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do Strata.

    Todas as exceções levantadas durante consulta, coerção e carregamento
    de fontes devem herdar desta classe, permitindo captura genérica.

    Campos:
    - message: mensagem curta e humana
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida (onde corrigir), quando aplicável
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})
        self.hint = hint

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return {
            "type": type(self).__name__,
            "message": self.message,
            "details": dict(self.details),
            "hint": self.hint,
        }


# ---------------------------------------------------------------------------
# Consulta / coerção
# ---------------------------------------------------------------------------

class AbsentError(ConfigError):
    """
    Exceção levantada quando o caminho solicitado não existe na árvore.

    Cobre tanto seções intermediárias ausentes (ou escalares no lugar de
    seções) quanto a chave final ausente.

    Invariantes:
        - `path` contém o caminho completo, a partir da raiz
        - Nunca é levantada para valores presentes com conteúdo nulo
    """

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Caminho de configuração não encontrado: '{path}'",
            details={"path": path},
            hint="Declare a chave em alguma fonte ou utilize o getter *_or_default.",
        )
        self.path = path


class InvalidTypeError(ConfigError):
    """
    Exceção levantada quando o valor existe, mas não pode ser convertido
    para o tipo escalar solicitado.

    Exemplo:
        - valor armazenado: "abc"
        - getter: get_int

    Invariantes:
        - `path`, `expected` e `value` estão sempre disponíveis
        - O valor original nunca é alterado
    """

    def __init__(self, path: str, expected: str, value: Any) -> None:
        super().__init__(
            f"Valor em '{path}' não pode ser convertido para {expected}: {value!r}",
            details={
                "path": path,
                "expected": expected,
                "actual_type": type(value).__name__,
            },
            hint=f"Ajuste o valor na fonte de configuração para um {expected} válido.",
        )
        self.path = path
        self.expected = expected
        self.value = value


# ---------------------------------------------------------------------------
# Fontes
# ---------------------------------------------------------------------------

class SourceNotFoundError(ConfigError):
    """
    Exceção levantada quando uma fonte obrigatória não é encontrada.

    Fontes opcionais ausentes nunca levantam esta exceção; elas produzem
    um mapeamento vazio.
    """

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Fonte de configuração obrigatória não encontrada: {path}",
            details={"path": path},
            hint="Crie o arquivo ou registre a fonte como opcional.",
        )
        self.path = path


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo não é suportado.

    Formatos suportados:
        - YAML (.yaml, .yml)
        - JSON (.json)
    """

    def __init__(self, path: str, fmt: str) -> None:
        super().__init__(
            f"Formato não suportado: {fmt or '<sem extensão>'} ({path})",
            details={"path": path, "format": fmt},
            hint="Utilize .json, .yaml ou .yml, ou informe o formato explicitamente.",
        )
        self.path = path
        self.format = fmt


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz de uma fonte não é um mapa
    chave-valor (ex.: lista ou escalar no topo do arquivo).
    """

    def __init__(self, path: str, actual_type: str) -> None:
        super().__init__(
            f"Config root deve ser um mapeamento, recebido: {actual_type} ({path})",
            details={"path": path, "actual_type": actual_type},
        )
        self.path = path
        self.actual_type = actual_type


class SourceDecodeError(ConfigError):
    """Exceção levantada quando o conteúdo de uma fonte não pode ser decodificado."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"Falha ao decodificar fonte de configuração {path}: {reason}",
            details={"path": path, "reason": reason},
            hint="Corrija a sintaxe do arquivo antes de reconstruir a configuração.",
        )
        self.path = path
        self.reason = reason
