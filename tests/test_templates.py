"""
Tests for template loading and token substitution
"""

import pytest

from chainspec.core.config import ERC20_TOKENS, VAULT_TOKENS, family_for_template
from chainspec.core.errors import ChainSpecError, TemplateNotFound
from chainspec.generators.templates import TemplateStore, find_tokens, substitute


def test_substitute_replaces_known_tokens():
    """Test a plain token replacement"""
    assert substitute("contract {{CONTRACT_NAME}} {}", {"CONTRACT_NAME": "Token"}) == "contract Token {}"


def test_substitute_leaves_unknown_tokens():
    """Test unrecognized tokens survive verbatim"""
    text = "a {{KNOWN}} b {{UNKNOWN}} c // {{ALSO_UNKNOWN}}"
    assert substitute(text, {"KNOWN": "x"}) == "a x b {{UNKNOWN}} c // {{ALSO_UNKNOWN}}"


def test_substitute_consumes_comment_marker():
    """Test the // marker is replaced together with its token"""
    template = "    // {{EVENTS}}\n    //{{OVERRIDES}}\n"
    result = substitute(template, {"EVENTS": "event A();", "OVERRIDES": ""})
    assert result == "    event A();\n    \n"
    assert "//" not in result


def test_substitute_is_single_pass():
    """Test substituted content is not scanned for further tokens"""
    result = substitute("{{A}} {{B}}", {"A": "{{B}}", "B": "b"})
    assert result == "{{B}} b"


def test_substitute_repeated_tokens():
    """Test every occurrence of a token is replaced"""
    assert substitute("{{N}}-{{N}}", {"N": "x"}) == "x-x"


def test_find_tokens():
    assert find_tokens("// {{A}} and {{B}} and {{A}}") == ["A", "B", "A"]


def test_store_loads_packaged_templates():
    """Test both shipped template families are available"""
    store = TemplateStore()
    assert {"ERC20_Template", "DAOVault_Template"} <= set(store.names())

    erc20 = store.load("ERC20_Template")
    assert set(find_tokens(erc20)) == set(ERC20_TOKENS)

    vault = store.load("DAOVault_Template")
    assert set(find_tokens(vault)) <= set(VAULT_TOKENS)
    assert {"ROLES_DEFINITION", "DEPOSIT_HOOKS", "TIMELOCK_CHECK"} <= set(find_tokens(vault))


def test_store_missing_template(tmp_path):
    """Test a missing template is a hard error naming the template"""
    store = TemplateStore(tmp_path)

    with pytest.raises(TemplateNotFound) as excinfo:
        store.load("Nope_Template")

    assert excinfo.value.template_name == "Nope_Template"
    assert "Nope_Template" in str(excinfo.value)
    assert isinstance(excinfo.value, ChainSpecError)


def test_store_rejects_path_names(tmp_path):
    """Test template names cannot escape the template directory"""
    (tmp_path / "inner").mkdir()
    (tmp_path / "Outside.sol").write_text("x", encoding="utf-8")
    store = TemplateStore(tmp_path / "inner")

    with pytest.raises(TemplateNotFound):
        store.load("../Outside")


def test_store_custom_directory(tmp_path):
    """Test templates are read from a configured directory"""
    (tmp_path / "Mini.sol").write_text("contract {{CONTRACT_NAME}} {}", encoding="utf-8")
    store = TemplateStore(tmp_path)

    assert store.names() == ["Mini"]
    assert store.load("Mini") == "contract {{CONTRACT_NAME}} {}"


def test_store_honors_environment(tmp_path, monkeypatch):
    """Test CHAINSPEC_TEMPLATES_DIR selects the default directory"""
    monkeypatch.setenv("CHAINSPEC_TEMPLATES_DIR", str(tmp_path))
    assert TemplateStore().templates_dir == tmp_path


def test_family_for_template():
    assert family_for_template("DAOVault_Template").name == "vault"
    assert family_for_template("my_vault").name == "vault"
    assert family_for_template("ERC20_Template").name == "erc20"
    assert family_for_template("Anything").name == "erc20"
