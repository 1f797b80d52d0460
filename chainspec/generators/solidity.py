"""
Solidity contract generation from ContractSpec records
"""

import logging
import re
from typing import Dict, List, Optional, Sequence

from ..core.config import (
    DEFAULT_IDENTIFIER,
    DEFAULT_TOKEN_NAME,
    DEFAULT_TOKEN_SYMBOL,
    OWNABLE_BASE,
    OWNABLE_CONSTRUCTOR,
    OWNABLE_IMPORT,
    OWNER_MODIFIER,
    TemplateFamily,
    family_for_template,
)
from ..core.models import ContractSpec, EventSpec, FunctionSpec, StateVariable
from .rules import (
    GUARD_RULES,
    OPERATION_HINTS,
    RETURN_RULES,
    derive_roles,
    first_match,
    needs_access_control,
    requires_owner,
    role_constant,
)
from .templates import TemplateStore, substitute

logger = logging.getLogger(__name__)

MEMBER_INDENT = "    "
BODY_INDENT = "        "


def to_contract_identifier(name: str) -> str:
    """
    Convert a contract name into a Solidity identifier.

    "my token" -> "MyToken", "1st token" -> "_1stToken", "" -> GeneratedContract
    """
    identifier = name.strip()
    identifier = re.sub(r"\s+(.)", lambda m: m.group(1).upper(), identifier)
    identifier = identifier[:1].upper() + identifier[1:]
    identifier = re.sub(r"[^A-Za-z0-9_]", "", identifier)

    if re.match(r"[0-9]", identifier):
        identifier = "_" + identifier

    return identifier or DEFAULT_IDENTIFIER


def _trailing_comment(text: str) -> str:
    return f" // {text}" if text else ""


def find_function(functions: Sequence[FunctionSpec], name: str) -> Optional[FunctionSpec]:
    """First function named `name`, ignoring case"""
    for fn in functions:
        if fn.name.lower() == name.lower():
            return fn
    return None


# ============================================================================
# Contract header
# ============================================================================

def generate_imports(spec: ContractSpec, family: TemplateFamily) -> str:
    imports = list(family.imports)
    if needs_access_control(spec):
        imports.append(OWNABLE_IMPORT)
    return "\n".join(imports)


def generate_inheritance(spec: ContractSpec, family: TemplateFamily) -> str:
    inheritance = list(family.inheritance)
    if needs_access_control(spec):
        inheritance.append(OWNABLE_BASE)
    return ", ".join(inheritance)


# ============================================================================
# Declarations
# ============================================================================

def generate_state_variables(variables: Sequence[StateVariable], family: TemplateFamily) -> str:
    if not variables:
        return "// No custom state variables"

    custom = [v for v in variables if v.name not in family.inherited_variables]
    if not custom:
        return f"// No custom state variables (standard {family.label} variables inherited)"

    lines = []
    for var in custom:
        type_decl = var.type
        # Mapping declarations get their visibility from us
        if "mapping" in type_decl or "=>" in type_decl:
            type_decl = re.sub(r"\s+", " ", type_decl.replace("public", "")).strip()
        lines.append(f"{type_decl} public {var.name};" + _trailing_comment(var.description))
    return f"\n{MEMBER_INDENT}".join(lines)


def generate_events(events: Sequence[EventSpec], family: TemplateFamily) -> str:
    if not events:
        return "// No custom events"

    custom = [e for e in events if e.name not in family.inherited_events]
    if not custom:
        return f"// No custom events (standard {family.label} events inherited)"

    return f"\n{MEMBER_INDENT}".join(
        f"event {e.name}({e.parameters});" + _trailing_comment(e.description) for e in custom
    )


# ============================================================================
# Constructor
# ============================================================================

def generate_constructor_args(spec: ContractSpec) -> str:
    constructor = find_function(spec.functions, "constructor")
    if constructor is None:
        return ""
    return ", ".join(f"{p.type} {p.name}".strip() for p in constructor.parameters)


def generate_constructor_inheritance(spec: ContractSpec, family: TemplateFamily) -> str:
    """
    Base constructor calls, e.g. ERC20(name_, symbol_) Ownable(msg.sender).

    The ERC20 base takes the constructor parameters whose names contain
    "name" and "symbol", or literal defaults when either is missing.
    """
    calls = []

    if family.base_constructor:
        name_arg, symbol_arg = DEFAULT_TOKEN_NAME, DEFAULT_TOKEN_SYMBOL
        constructor = find_function(spec.functions, "constructor")
        if constructor is not None:
            name_param = next((p for p in constructor.parameters if "name" in p.name.lower()), None)
            symbol_param = next((p for p in constructor.parameters if "symbol" in p.name.lower()), None)
            if name_param and symbol_param:
                name_arg, symbol_arg = name_param.name, symbol_param.name
        calls.append(f"{family.base_constructor}({name_arg}, {symbol_arg})")

    if needs_access_control(spec):
        calls.append(OWNABLE_CONSTRUCTOR)

    return " ".join(calls)


def generate_constructor_logic(spec: ContractSpec) -> str:
    """Constructor postconditions as comments; never executable code"""
    constructor = find_function(spec.functions, "constructor")
    if constructor is None:
        return "// No constructor logic"
    return f"\n{BODY_INDENT}".join(f"// {post}" for post in constructor.postconditions)


# ============================================================================
# Functions
# ============================================================================

def generate_functions(functions: Sequence[FunctionSpec], family: TemplateFamily) -> str:
    if not functions:
        return "// No custom functions"

    skipped = family.inherited_functions | {"constructor"}
    custom = [fn for fn in functions if fn.name.lower() not in skipped]
    if not custom:
        return "// Custom functions already implemented in template"

    return f"\n\n{MEMBER_INDENT}".join(generate_function(fn) for fn in custom)


def generate_function(fn: FunctionSpec) -> str:
    params = ", ".join(f"{p.type} {p.name}".strip() for p in fn.parameters)

    # Visibility is always the most permissive default
    header = [f"function {fn.name}({params})", "public"]
    if requires_owner(fn):
        header.append(OWNER_MODIFIER)
    if fn.returns:
        header.append(f"returns ({fn.returns})")

    return "\n".join([
        generate_function_docs(fn),
        f"{MEMBER_INDENT}{' '.join(header)} {{",
        generate_function_body(fn),
        f"{MEMBER_INDENT}}}"
    ])


def generate_function_docs(fn: FunctionSpec) -> str:
    lines = ["/**"]
    lines.append(f" * @notice {fn.description.strip() or 'Function implementation'}")

    for p in fn.parameters:
        lines.append(f" * @param {p.name} {p.type}")

    if fn.returns:
        lines.append(f" * @return {fn.returns}")

    if fn.security:
        lines.append(f" * @dev Security: {fn.security}")

    lines.append(" */")
    return f"\n{MEMBER_INDENT}".join(lines)


def generate_function_body(fn: FunctionSpec) -> str:
    """
    Scaffold body: restated preconditions with guard hints, an
    unimplemented-logic marker, operation hints, event emissions and a
    boolean return when declared.
    """
    body: List[str] = []

    if fn.preconditions:
        body.append("// Preconditions:")
        for pre in fn.preconditions:
            body.append(f"// {pre}")
            body.extend(first_match(GUARD_RULES, pre))
        body.append("")

    body.append("// TODO: Implement function logic")
    body.extend(first_match(OPERATION_HINTS, fn.name))

    if fn.events:
        body.append("")
        body.extend(f"// emit {event}" for event in fn.events)

    if fn.returns:
        returns = first_match(RETURN_RULES, fn.returns)
        if returns:
            body.append("")
            body.extend(returns)

    return "\n".join(f"{BODY_INDENT}{line}" if line else "" for line in body)


# ============================================================================
# Vault family
# ============================================================================

def generate_roles(spec: ContractSpec) -> str:
    return f"\n{MEMBER_INDENT}".join(role_constant(role) for role in derive_roles(spec))


# ============================================================================
# Rendering
# ============================================================================

def build_placeholders(spec: ContractSpec, template_name: str) -> Dict[str, str]:
    """Content for every token the template's family recognizes"""
    family = family_for_template(template_name)

    values = {
        "CONTRACT_NAME": to_contract_identifier(spec.contract_name),
        "IMPORTS": generate_imports(spec, family),
        "INHERITANCE": generate_inheritance(spec, family),
        "STATE_VARIABLES": generate_state_variables(spec.state_variables, family),
        "EVENTS": generate_events(spec.events, family),
        "CONSTRUCTOR_ARGS": generate_constructor_args(spec),
        "CONSTRUCTOR_INHERITANCE": generate_constructor_inheritance(spec, family),
        "CONSTRUCTOR_LOGIC": generate_constructor_logic(spec),
        "FUNCTIONS": generate_functions(spec.functions, family),
        "OVERRIDES": "",
    }

    if "ROLES_DEFINITION" in family.tokens:
        values.update({
            "ROLES_DEFINITION": generate_roles(spec),
            "DEPOSIT_HOOKS": "// Custom deposit hooks",
            "TIMELOCK_CHECK": "// Custom timelock check",
        })

    return {token: values[token] for token in family.tokens}


def render(spec: ContractSpec, template_name: str, store: Optional[TemplateStore] = None) -> str:
    """
    Render a contract specification into a Solidity template.

    Args:
        spec: Parsed contract specification
        template_name: Template to use (e.g. 'ERC20_Template', 'DAOVault_Template')
        store: Template store (default: configured templates directory)

    Returns:
        Generated Solidity source

    Raises:
        TemplateNotFound: If the template does not exist
    """
    store = store or TemplateStore()
    template = store.load(template_name)

    logger.debug("Rendering %s with %s", spec.contract_name, template_name)
    return substitute(template, build_placeholders(spec, template_name))
