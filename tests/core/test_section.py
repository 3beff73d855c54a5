# tests/core/test_section.py
"""
Testes da Section Tree: navegação, acesso tipado e defaults.

Os testes asseguram que:
- `get_section` propaga ausência sem levantar exceções
- `get_value` distingue ausência de valor nulo e de valor mapeado
- getters tipados retornam o tipo nativo ou coagem via string canônica
- `InvalidTypeError` carrega caminho completo e tipo solicitado
- getters `*_or_default` absorvem ambos os erros
- a árvore é imutável e segura para leitura concorrente

Decisões arquiteturais:
    - A seção ausente é uma variante explícita, não None
    - Toda operação sobre a seção ausente é segura

Limites explícitos:
    - Não valida merge nem carregamento de fontes
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

try:
    from strata.core.errors import AbsentError, InvalidTypeError
    from strata.core.section import AbsentSection, NodeSection, build_root
except Exception as e:  # noqa: BLE001
    AbsentError = None
    InvalidTypeError = None
    AbsentSection = None
    NodeSection = None
    build_root = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing section tree modules. Implement:\n"
            "- src/strata/core/section.py (Section, NodeSection, AbsentSection, build_root)\n"
            "- src/strata/core/errors.py (AbsentError, InvalidTypeError)\n"
            f"Import error: {_IMPORT_ERR}"
        )


# -----------------------------
# Navegação
# -----------------------------

def test_get_section_resolves_nested_path(sample_root):
    _require_imports()
    section = sample_root.get_section("g:e")
    assert not section.is_absent()
    assert isinstance(section, NodeSection)
    assert section.keys() == ("f",)
    assert section.full_path() == "g:e"


def test_get_section_missing_is_absent(sample_root):
    _require_imports()
    assert sample_root.get_section("missing").is_absent()
    assert sample_root.get_section("g:missing:deeper").is_absent()


def test_get_section_on_scalar_is_absent(sample_root):
    """
    Verifica que um segmento que aponta para um escalar produz ausência.

    A ausência persiste para todos os segmentos seguintes.
    """
    _require_imports()
    assert sample_root.get_section("scalar").is_absent()
    assert sample_root.get_section("g:e:f").is_absent()
    assert sample_root.get_section("scalar:x").is_absent()


def test_chained_navigation_on_absent_is_safe(sample_root):
    """
    Verifica navegação encadeada a partir de uma seção inexistente.

    `get_section("x").get_section("y").get_string("z")` em uma árvore sem
    `x` deve falhar com AbsentError, nunca com outro tipo de exceção.
    """
    _require_imports()
    section = sample_root.get_section("x").get_section("y")
    assert isinstance(section, AbsentSection)
    with pytest.raises(AbsentError) as exc:
        section.get_string("z")
    assert exc.value.path == "x:y:z"


def test_absent_section_operations_are_no_ops():
    _require_imports()
    absent = AbsentSection()
    assert absent.is_absent()
    assert absent.get_section("a:b").is_absent()
    assert absent.keys() == ()
    assert absent.to_dict() == {}
    assert absent.get_int_or_default("a", 7) == 7
    assert absent.get_value_or_default("a") is None
    for getter in (absent.get_value, absent.get_string, absent.get_int, absent.get_bool, absent.get_float):
        with pytest.raises(AbsentError):
            getter("a")


def test_sections_over_same_node_are_interchangeable(sample_root):
    _require_imports()
    assert sample_root.get_section("g:e") == sample_root.get_section("g").get_section("e")
    assert sample_root.get_section("x") == sample_root.get_section("x")


def test_navigation_is_deterministic(sample_root):
    _require_imports()
    first = sample_root.get_value("server:port")
    assert all(sample_root.get_value("server:port") == first for _ in range(10))


# -----------------------------
# get_value
# -----------------------------

def test_get_value_returns_raw_values(sample_root):
    _require_imports()
    assert sample_root.get_value("server:port") == 8080
    assert sample_root.get_value("g:e:f") == "true"
    assert sample_root.get_value("g:e") == {"f": "true"}


def test_get_value_missing_leaf_raises_absent(sample_root):
    _require_imports()
    with pytest.raises(AbsentError) as exc:
        sample_root.get_value("server:missing")
    assert exc.value.path == "server:missing"


def test_get_value_through_scalar_raises_absent(sample_root):
    _require_imports()
    with pytest.raises(AbsentError):
        sample_root.get_value("scalar:x")


def test_absent_distinct_from_null_value(sample_root):
    """
    Verifica que um valor presente e nulo não é tratado como ausência.
    """
    _require_imports()
    assert sample_root.get_value("server:empty") is None
    assert sample_root.get_string("server:empty") == ""
    assert sample_root.get_value_or_default("server:empty", "fallback") is None
    assert sample_root.get_value_or_default("server:nope", "fallback") == "fallback"


# -----------------------------
# Getters tipados
# -----------------------------

def test_get_int_native_and_coerced(sample_root):
    _require_imports()
    assert sample_root.get_int("server:port") == 8080
    assert sample_root.get_int("server:port_text") == 8081


def test_get_int_invalid_string_raises_invalid_type(sample_root):
    _require_imports()
    with pytest.raises(InvalidTypeError) as exc:
        sample_root.get_int("server:name")
    assert exc.value.path == "server:name"
    assert exc.value.expected == "int"
    assert exc.value.value == "abc"


def test_get_int_on_mapping_raises_invalid_type(sample_root):
    _require_imports()
    with pytest.raises(InvalidTypeError):
        sample_root.get_int("g:e")


def test_get_int_never_accepts_bool(sample_root):
    _require_imports()
    with pytest.raises(InvalidTypeError):
        sample_root.get_int("server:debug")


def test_get_bool_native_and_coerced(sample_root):
    _require_imports()
    assert sample_root.get_bool("g:e:f") is True
    assert sample_root.get_bool("server:debug") is True
    assert sample_root.get_bool("server:debug_text") is False
    with pytest.raises(InvalidTypeError):
        sample_root.get_bool("server:name")


def test_get_float_native_and_coerced(sample_root):
    _require_imports()
    assert sample_root.get_float("server:ratio") == 0.75
    assert sample_root.get_float("server:ratio_text") == 150.0
    assert sample_root.get_float("server:port") == 8080.0
    with pytest.raises(InvalidTypeError):
        sample_root.get_float("server:debug")


def test_get_string_renders_non_strings(sample_root):
    _require_imports()
    assert sample_root.get_string("server:host") == "localhost"
    assert sample_root.get_string("server:port") == "8080"
    assert sample_root.get_string("server:debug") == "true"
    assert sample_root.get_string("server:ratio") == "0.75"
    assert sample_root.get_string("g:e") == '{"f":"true"}'


def test_typed_getters_relative_to_subsection(sample_root):
    _require_imports()
    server = sample_root.get_section("server")
    assert server.get_int("port") == 8080
    with pytest.raises(InvalidTypeError) as exc:
        server.get_int("name")
    assert exc.value.path == "server:name"


# -----------------------------
# Defaults
# -----------------------------

def test_or_default_on_absent_path(sample_root):
    _require_imports()
    assert sample_root.get_int_or_default("missing:path", 7) == 7
    assert sample_root.get_string_or_default("missing", "d") == "d"
    assert sample_root.get_bool_or_default("missing", True) is True
    assert sample_root.get_float_or_default("missing", 1.5) == 1.5


def test_or_default_on_invalid_type(sample_root):
    _require_imports()
    assert sample_root.get_int_or_default("server:name", 7) == 7
    assert sample_root.get_bool_or_default("server:name", False) is False
    assert sample_root.get_float_or_default("server:name", 0.5) == 0.5


def test_or_default_returns_found_value(sample_root):
    _require_imports()
    assert sample_root.get_int_or_default("server:port", 7) == 8080
    assert sample_root.get_string_or_default("server:host", "d") == "localhost"


# -----------------------------
# Delimitador e imutabilidade
# -----------------------------

def test_custom_delimiter():
    _require_imports()
    root = build_root({"a": {"b": {"c": "1"}}}, delimiter=".")
    assert root.get_int("a.b.c") == 1
    assert root.get_section("a:b").is_absent()
    assert root.get_section("a.b").get_section("c").delimiter == "."


def test_empty_delimiter_is_rejected():
    _require_imports()
    with pytest.raises(ValueError):
        build_root({}, delimiter="")


def test_tree_is_copied_and_read_only(sample_tree):
    _require_imports()
    root = build_root(sample_tree)
    sample_tree["server"]["port"] = 1
    assert root.get_int("server:port") == 8080

    with pytest.raises(TypeError):
        root.get_value("server")["port"] = 2

    copy = root.get_section("server").to_dict()
    copy["port"] = 3
    assert root.get_int("server:port") == 8080


def test_concurrent_reads_are_consistent(sample_root):
    _require_imports()

    def read(_):
        return (
            sample_root.get_int("server:port"),
            sample_root.get_bool("g:e:f"),
            sample_root.get_section("x").is_absent(),
        )

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(read, range(200)))

    assert set(results) == {(8080, True, True)}


def test_bool_scenario_later_source_wins():
    """
    Cenário: {g:{e:{f:true}}} seguido de {g:{e:{f:false}}} resulta em false.
    """
    _require_imports()
    from strata.core.merge import merge_all

    root = build_root(merge_all([{"g": {"e": {"f": True}}}, {"g": {"e": {"f": False}}}]))
    assert root.get_bool("g:e:f") is False


def test_get_float_rejects_overflow_and_non_ascii_digits():
    _require_imports()
    root = build_root({"big": "1e400", "arabic": "١٢", "neg_inf": "-inf"})
    with pytest.raises(InvalidTypeError):
        root.get_float("big")
    assert root.get_float_or_default("big", 1.0) == 1.0
    assert root.get_float_or_default("arabic", 2.0) == 2.0
    assert root.get_float("neg_inf") == float("-inf")


def test_sections_are_hashable(sample_root):
    _require_imports()
    first = sample_root.get_section("g:e")
    second = sample_root.get_section("g").get_section("e")
    assert hash(first) == hash(second)
    assert {first, second, sample_root.get_section("x")} == {first, AbsentSection(path=("x",))}
    assert hash(sample_root) == hash(build_root({"any": 1}))
