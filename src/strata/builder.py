# src/strata/builder.py
"""
Builder da configuração — orquestração de fontes, merge e árvore final.

O `ConfigBuilder` registra fontes em ordem explícita e, no `build()`,
executa o ciclo completo:

    fontes (ordem de registro) → decoders → Merge Engine → freeze → Section raiz

Exemplo:
    config = (
        ConfigBuilder()
        .set_base_path("./config")
        .add_json_file("defaults.json", optional=False)
        .add_yaml_file("local.yaml")
        .add_environment_variables("APP_")
        .build()
    )
    config.get_section("server").get_int_or_default("port", 8080)

Decisões arquiteturais:
    - A ordem de registro é a única regra de precedência
    - Arquivos opcionais ausentes são ignorados (evento `source_skipped`)
    - Qualquer erro de fonte aborta o build; nenhuma configuração parcial
      é retornada
    - Cada `build()` repete todo o carregamento e produz uma árvore nova

Limites explícitos:
    - Não observa arquivos nem recarrega automaticamente
    - Não grava configuração
    - Não valida schema
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .core.coercion import DEFAULT_DELIMITER
from .core.errors import ConfigError
from .core.hashing import compute_config_hash
from .core.merge import merge_all
from .core.report import BuildReport, add_event
from .core.section import NodeSection, build_root
from .sources.environment import DEFAULT_ENV_SEPARATOR, load_environment
from .sources.files import JSON, YAML, detect_format, load_file, normalize_keys


@dataclass(frozen=True)
class Configuration(NodeSection):
    """
    Seção raiz de uma configuração construída.

    Campos adicionais:
    - fingerprint: hash SHA-256 canônico da árvore consolidada
    - report: Event Log do build que produziu esta árvore
    """

    fingerprint: str = ""
    report: BuildReport = field(default_factory=BuildReport, compare=False, repr=False)


class _FileSource:
    kind = "file"

    def __init__(self, path: Path, fmt: str, optional: bool) -> None:
        self.path = path
        self.fmt = fmt
        self.optional = optional
        self.name = str(path)

    def load(self) -> Optional[Dict[str, Any]]:
        if self.optional and not self.path.is_file():
            return None
        return load_file(self.path, optional=self.optional, fmt=self.fmt)


class _EnvironmentSource:
    kind = "environment"

    def __init__(
        self,
        prefix: str,
        separator: str,
        strip_prefix: bool,
        environ: Optional[Mapping],
    ) -> None:
        self.prefix = prefix
        self.separator = separator
        self.strip_prefix = strip_prefix
        self.environ = environ
        self.name = f"env:{prefix}"

    def load(self) -> Optional[Dict[str, Any]]:
        return load_environment(
            self.prefix,
            separator=self.separator,
            strip_prefix=self.strip_prefix,
            environ=self.environ,
        )


class _MappingSource:
    kind = "memory"

    def __init__(self, name: str, mapping: Mapping) -> None:
        self.name = name
        self.mapping = normalize_keys(mapping, name)

    def load(self) -> Optional[Dict[str, Any]]:
        return self.mapping


class ConfigBuilder:
    """
    Registro ordenado de fontes de configuração.

    Todos os métodos `add_*` e `set_base_path` retornam o próprio builder
    para encadeamento.
    """

    def __init__(self, delimiter: str = DEFAULT_DELIMITER) -> None:
        if not isinstance(delimiter, str) or not delimiter:
            raise ValueError(f"Delimitador inválido: {delimiter!r}")
        self.delimiter = delimiter
        self.base_path = Path(".")
        self._sources: List[Any] = []
        self.last_report: Optional[BuildReport] = None

    @property
    def sources(self) -> List[str]:
        """Nomes das fontes registradas, em ordem de precedência crescente."""
        return [source.name for source in self._sources]

    def set_base_path(self, path: Union[str, Path]) -> "ConfigBuilder":
        """Define o diretório base dos arquivos registrados a seguir."""
        self.base_path = Path(path)
        return self

    def _add_file(self, name: Union[str, Path], fmt: str, optional: bool) -> "ConfigBuilder":
        self._sources.append(_FileSource(self.base_path / name, fmt, optional))
        return self

    def add_file(self, name: Union[str, Path], optional: bool = True) -> "ConfigBuilder":
        """Registra um arquivo cujo formato é inferido pela extensão."""
        return self._add_file(name, detect_format(name), optional)

    def add_json_file(self, name: Union[str, Path], optional: bool = True) -> "ConfigBuilder":
        return self._add_file(name, JSON, optional)

    def add_yaml_file(self, name: Union[str, Path], optional: bool = True) -> "ConfigBuilder":
        return self._add_file(name, YAML, optional)

    def add_mapping(self, mapping: Mapping, name: str = "memory") -> "ConfigBuilder":
        """Registra um mapeamento em memória (ex.: defaults embutidos)."""
        if not isinstance(mapping, Mapping):
            raise TypeError(
                f"Fonte em memória deve ser um mapeamento, recebido: {type(mapping).__name__}"
            )
        self._sources.append(_MappingSource(name, mapping))
        return self

    def add_environment_variables(
        self,
        prefix: str = "",
        *,
        separator: str = DEFAULT_ENV_SEPARATOR,
        strip_prefix: bool = True,
        environ: Optional[Mapping] = None,
    ) -> "ConfigBuilder":
        """
        Registra as variáveis de ambiente com o prefixo informado.

        O ambiente é lido no momento do `build()`, não no registro.
        """
        if not separator:
            raise ValueError("Separador de variáveis de ambiente não pode ser vazio")
        self._sources.append(_EnvironmentSource(prefix, separator, strip_prefix, environ))
        return self

    def build(self) -> Configuration:
        """
        Carrega todas as fontes, mescla na ordem de registro e congela a árvore.

        Returns:
            Configuration: Seção raiz da nova árvore de configuração.

        Raises:
            ConfigError: Se alguma fonte falhar (obrigatória ausente,
                formato inválido, conteúdo indecodificável).
        """
        report = BuildReport()
        self.last_report = report
        add_event(report, event_type="build_started", payload={"sources": self.sources})

        mappings: List[Dict[str, Any]] = []
        for source in self._sources:
            try:
                mapping = source.load()
            except ConfigError as e:
                add_event(report, event_type="source_failed", source=source.name, payload=e.to_dict())
                raise

            if mapping is None:
                add_event(
                    report,
                    event_type="source_skipped",
                    source=source.name,
                    payload={"reason": "optional_missing"},
                )
                continue

            mappings.append(mapping)
            add_event(
                report,
                event_type="source_loaded",
                source=source.name,
                payload={"kind": source.kind, "keys": len(mapping)},
            )

        merged = merge_all(mappings)
        fingerprint = compute_config_hash(merged)
        root = build_root(merged, self.delimiter)

        add_event(
            report,
            event_type="build_finished",
            payload={"fingerprint": fingerprint, "keys": len(merged), "merged_sources": len(mappings)},
        )

        return Configuration(
            node=root.node,
            delimiter=self.delimiter,
            fingerprint=fingerprint,
            report=report,
        )
