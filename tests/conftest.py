# tests/conftest.py
"""
Fixtures compartilhados para testes do Strata.

Este módulo define fixtures reutilizáveis que fornecem:
- conteúdos de arquivos de configuração (JSON e YAML) como string
- ambientes de processo simulados (dicts), sem tocar em `os.environ`
- uma árvore de configuração já consolidada para testes de navegação

Decisões arquiteturais:
    - Conteúdos são fornecidos como string; cada teste decide se grava
      em `tmp_path`
    - Ambientes são injetados via argumento `environ`, nunca via
      monkeypatch do processo
    - Imports do core são realizados de forma lazy para melhorar a
      clareza de erros durante falhas

Invariantes:
    - Dados retornados são determinísticos e isolados
    - Nenhuma fixture contém lógica condicional

Limites explícitos:
    - Não substitui testes de integração do builder
"""

import pytest


# =====================================================
# Arquivos de configuração
# =====================================================

@pytest.fixture
def defaults_json() -> str:
    """
    Fixture que fornece um JSON de configuração base (defaults).

    Representa o conteúdo típico de um `appsettings.json` sobre o qual
    arquivos locais e variáveis de ambiente são aplicados.

    Returns:
        str: Conteúdo JSON representando a configuração base.
    """
    return """\
{
  "server": {"host": "0.0.0.0", "port": 8080, "debug": false},
  "database": {"url": "sqlite:///app.db", "pool": {"size": 5, "timeout": 2.5}},
  "features": ["search", "export"]
}
"""


@pytest.fixture
def local_yaml() -> str:
    """
    Fixture que fornece um YAML de overrides locais.

    Foco em comportamento de override: altera valores escalares, adiciona
    chaves novas em seções existentes e mantém o restante intacto.

    Returns:
        str: Conteúdo YAML de overrides locais.
    """
    return """\
server:
  port: 9090
  debug: "true"
database:
  pool:
    size: 10
logging:
  level: DEBUG
"""


@pytest.fixture
def app_environ() -> dict:
    """
    Fixture que fornece um ambiente de processo simulado.

    Inclui variáveis com e sem o prefixo `APP_` para validar a filtragem.
    """
    return {
        "APP_server__port": "7070",
        "APP_database__pool__timeout": "10",
        "APP_new__flag": "t",
        "HOME": "/root",
        "PATH": "/usr/bin",
    }


# =====================================================
# Árvore consolidada
# =====================================================

@pytest.fixture
def sample_tree() -> dict:
    """
    Fixture que fornece um mapeamento consolidado com todos os tipos de valor.

    Usado pelos testes de navegação e coerção da Section.
    """
    return {
        "g": {"e": {"f": "true"}},
        "server": {
            "host": "localhost",
            "port": 8080,
            "port_text": "8081",
            "ratio": 0.75,
            "ratio_text": "1.5e2",
            "debug": True,
            "debug_text": "F",
            "name": "abc",
            "empty": None,
        },
        "scalar": "x",
    }


@pytest.fixture
def sample_root(sample_tree):
    from strata.core.section import build_root

    return build_root(sample_tree)
