"""
Tests for section splitting and field extraction
"""

import re

import pytest

from chainspec import parse
from chainspec.core.models import EventSpec, FunctionParameter, StateVariable
from chainspec.parser.extractors import (
    extract_bullet_list,
    extract_contract_name,
    extract_events,
    extract_field,
    extract_functions,
    extract_list_field,
    extract_section,
    extract_state_variables,
    parse_parameters,
    sanitize_contract_name,
)
from chainspec.parser.sections import split_sections


TOKEN_SPEC = """# Token specification

Some introduction text.

## Contract Name
My Token

## Security Requirements
- Only the owner can mint
- No reentrancy in transfers
Not a bullet line

## Function: mint(address to, uint256 amount)
- **Description**: Mint new tokens
- **Precondition**: Caller must be owner
- **Postcondition**: balance increases, totalSupply increases
- **Security**: onlyOwner
- **Events**: Transfer

## Function: `transfer`(`address to, uint256 amount`)
- **Description:** Move tokens
- **Returns**: bool

## State Variables
- `mapping(address => uint256) balances` - Token balances
- `mapping(address => mapping(address => uint256)) allowances` - Allowances
- `uint256 cap` - Maximum supply
- `orphan` - Missing a type

## Events
- `Transfer(address indexed from, address indexed to, uint256 value)` - Emitted on transfer
- `CapChanged(uint256 newCap)` - Emitted when the cap changes
- Not an event

## State Invariants
- `totalSupply <= cap`
- sum of `balances` equals `totalSupply`
"""


def test_split_sections_keeps_order_and_preamble():
    """Test that level-2 headings split the document in order"""
    sections = split_sections(TOKEN_SPEC)
    headings = [s.heading for s in sections]

    assert headings[0] == ""
    assert headings[1:] == [
        "Contract Name",
        "Security Requirements",
        "Function: mint(address to, uint256 amount)",
        "Function: `transfer`(`address to, uint256 amount`)",
        "State Variables",
        "Events",
        "State Invariants",
    ]


def test_split_sections_ignores_deeper_headings():
    """Test that ### headings stay inside their section"""
    text = "## Events\n### Details\n- `A()` - a\n## Other\nx"
    sections = split_sections(text)

    assert [s.heading for s in sections] == ["Events", "Other"]
    assert "### Details" in sections[0].body


def test_split_sections_heading_at_end_of_file():
    """Test a trailing heading with no body"""
    sections = split_sections("## Contract Name\nToken\n## Events")
    assert sections[-1].heading == "Events"
    assert sections[-1].body == ""


def test_split_sections_byte_order_mark():
    """Test a leading byte order mark does not hide the first heading"""
    text = "\ufeff## Contract Name\nMy Token\n\n## Security Requirements\n- a\n"

    assert [s.heading for s in split_sections(text)] == ["Contract Name", "Security Requirements"]
    assert extract_contract_name(text) == "My_Token"
    assert parse(text).contract_name == "My_Token"


def test_split_sections_indented_headings():
    """Test headings indented by up to three spaces"""
    text = "   ## Events\n- `Paused()` - paused\n    ## Not a heading\n"
    sections = split_sections(text)

    assert [s.heading for s in sections] == ["Events"]
    assert "    ## Not a heading" in sections[0].body
    assert extract_events(text) == [EventSpec(name="Paused", parameters="", description="paused")]


def test_extract_contract_name_scenario():
    """Test whitespace is joined with underscores"""
    assert extract_contract_name("## Contract Name\nMy Token\n") == "My_Token"


def test_extract_contract_name_skips_blank_lines():
    """Test the name is the next non-blank line"""
    assert extract_contract_name("## contract name\n\n\n  Vault-X 2 \n") == "VaultX_2"


def test_extract_contract_name_defaults():
    """Test the fallback name for missing or empty names"""
    assert extract_contract_name("") == "UnnamedContract"
    assert extract_contract_name("## Events\n- x") == "UnnamedContract"
    assert extract_contract_name("## Contract Name\n!!!\n") == "UnnamedContract"
    assert extract_contract_name("## Contract Name\n") == "UnnamedContract"


@pytest.mark.parametrize("raw", ["", "   ", "My Token", "$$$", "a\tb\nc", "名前", "1 2 3", "__"])
def test_sanitize_contract_name_is_total(raw):
    """Test the sanitizer always returns a non-empty identifier-ish name"""
    assert re.fullmatch(r"[A-Za-z0-9_]+", sanitize_contract_name(raw))


def test_extract_section():
    """Test section bodies are trimmed and matched case-insensitively"""
    body = extract_section(TOKEN_SPEC, "security requirements")
    assert body.startswith("- Only the owner can mint")
    assert body.endswith("Not a bullet line")

    assert extract_section(TOKEN_SPEC, "Missing Section") == ""


def test_extract_section_requires_exact_heading():
    """Test that a heading with extra words does not match"""
    assert extract_section("## Events Emitted\n- x\n", "Events") == ""


def test_extract_bullet_list():
    """Test only hyphen bullets are kept, markers stripped"""
    assert extract_bullet_list(TOKEN_SPEC, "Security Requirements") == [
        "Only the owner can mint",
        "No reentrancy in transfers",
    ]


def test_extract_bullet_list_strips_backticks():
    """Test invariant-style extraction"""
    assert extract_bullet_list(TOKEN_SPEC, "State Invariants", strip_backticks=True) == [
        "totalSupply <= cap",
        "sum of balances equals totalSupply",
    ]


def test_extract_functions_scenario():
    """Test the mint function is extracted with its fields"""
    text = (
        "## Function: mint(address to, uint256 amount)\n"
        "- **Precondition**: Caller must be owner\n"
        "- **Postcondition**: balance increases\n"
    )
    functions = extract_functions(text)

    assert len(functions) == 1
    fn = functions[0]
    assert fn.name == "mint"
    assert fn.parameters == (
        FunctionParameter(type="address", name="to"),
        FunctionParameter(type="uint256", name="amount"),
    )
    assert fn.preconditions == ("Caller must be owner",)
    assert fn.postconditions == ("balance increases",)
    assert fn.description == ""
    assert fn.security == ""
    assert fn.events == ()
    assert fn.returns == ""


def test_extract_functions_fields_and_order():
    """Test all sub-fields and document order"""
    functions = extract_functions(TOKEN_SPEC)

    assert [fn.name for fn in functions] == ["mint", "transfer"]

    mint = functions[0]
    assert mint.description == "Mint new tokens"
    assert mint.postconditions == ("balance increases", "totalSupply increases")
    assert mint.security == "onlyOwner"
    assert mint.events == ("Transfer",)

    transfer = functions[1]
    assert transfer.description == "Move tokens"
    assert transfer.returns == "bool"
    assert [p.name for p in transfer.parameters] == ["to", "amount"]


def test_extract_functions_keeps_duplicates():
    """Test duplicate function names pass through"""
    text = "## Function: f()\n## Function: f(uint256 x)\n"
    functions = extract_functions(text)
    assert [fn.name for fn in functions] == ["f", "f"]
    assert functions[0].parameters == ()


def test_extract_functions_skips_headings_without_parens():
    """Test a Function heading without a parameter list is ignored"""
    assert extract_functions("## Function: broken\n- **Description**: x\n") == []


def test_list_field_uses_first_line():
    """Test only the first bolded item of a list field is used"""
    body = (
        "- **Precondition**: to != 0x0, balance >= amount\n"
        "- **Preconditions**: amount > 0\n"
    )
    assert extract_list_field(body, "Preconditions?") == ["to != 0x0", "balance >= amount"]


def test_list_field_keeps_empty_items():
    assert extract_list_field("- **Events**: Transfer,\n", "Events?") == ["Transfer", ""]
    assert extract_list_field("- **Events**: Transfer\n", "Events?") == ["Transfer"]
    assert extract_list_field("- **Description**: x\n", "Events?") == []


def test_extract_functions_repeated_precondition_lines():
    functions = extract_functions(
        "## Function: mint(address to, uint256 amount)\n"
        "- **Precondition**: Caller must be owner\n"
        "- **Precondition**: amount > 0\n"
    )
    assert functions[0].preconditions == ("Caller must be owner",)


def test_single_field_takes_first_occurrence():
    """Test single-valued fields use the first match"""
    body = "- **Security**: first\n- **Security**: second\n"
    assert extract_field(body, "Security") == "first"
    assert extract_field(body, "Description") == ""


def test_parse_parameters_malformed_tokens():
    """Test malformed parameter parts degrade to empty strings"""
    assert parse_parameters("") == []
    assert parse_parameters("uint256") == [FunctionParameter(type="uint256", name="")]
    assert parse_parameters("address to,") == [
        FunctionParameter(type="address", name="to"),
        FunctionParameter(type="", name=""),
    ]


def test_parse_parameters_data_location():
    """Test multi-token types keep the last token as the name"""
    assert parse_parameters("string memory name_, string memory symbol_") == [
        FunctionParameter(type="string memory", name="name_"),
        FunctionParameter(type="string memory", name="symbol_"),
    ]


def test_extract_state_variables():
    """Test the last declaration token is the variable name"""
    assert extract_state_variables(TOKEN_SPEC) == [
        StateVariable(name="balances", type="mapping(address => uint256)", description="Token balances"),
        StateVariable(
            name="allowances",
            type="mapping(address => mapping(address => uint256))",
            description="Allowances"
        ),
        StateVariable(name="cap", type="uint256", description="Maximum supply"),
    ]


def test_extract_events():
    """Test event name, raw parameters and description"""
    assert extract_events(TOKEN_SPEC) == [
        EventSpec(
            name="Transfer",
            parameters="address indexed from, address indexed to, uint256 value",
            description="Emitted on transfer"
        ),
        EventSpec(name="CapChanged", parameters="uint256 newCap", description="Emitted when the cap changes"),
    ]


@pytest.mark.parametrize("text", ["", "no headings at all", "## \n##\n- **x", "## Function: (\n"])
def test_extractors_never_raise(text):
    """Test garbage input yields empty results"""
    assert extract_functions(text) == []
    assert extract_state_variables(text) == []
    assert extract_events(text) == []
    assert extract_bullet_list(text, "Security Requirements") == []
