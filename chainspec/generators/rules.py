"""
Heuristic rules that derive Solidity fragments from free-text specs.

A rule pairs a predicate over lowercased text with an emitter producing
output lines. Rule sets are ordered and the first matching rule wins, so
new phrasings can be supported by adding a rule without touching the
generator.
"""

import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, Sequence

from ..core.config import DEFAULT_ROLE
from ..core.models import ContractSpec, FunctionSpec


@dataclass(frozen=True)
class Rule:
    """Predicate over lowercased text plus the lines it emits"""
    name: str
    predicate: Callable[[str], bool]
    emit: Callable[[str], List[str]]

    def matches(self, text: str) -> bool:
        return self.predicate(text.lower())


def constant(*lines: str) -> Callable[[str], List[str]]:
    """Emitter that ignores its input"""
    return lambda _text: list(lines)


def first_match(rules: Sequence[Rule], text: str) -> List[str]:
    """Lines from the first rule matching `text`, or []"""
    for rule in rules:
        if rule.matches(text):
            return rule.emit(text)
    return []


# ---------------------------------------------------------------------------
# Access control
# ---------------------------------------------------------------------------

def mentions_owner(text: str) -> bool:
    return "owner" in text.lower()


def requires_owner(fn: FunctionSpec) -> bool:
    """Security note or any precondition mentions the owner"""
    return mentions_owner(fn.security) or any(mentions_owner(pre) for pre in fn.preconditions)


def needs_access_control(spec: ContractSpec) -> bool:
    return any(requires_owner(fn) for fn in spec.functions)


# ---------------------------------------------------------------------------
# Precondition guards (emitted commented out)
# ---------------------------------------------------------------------------

def _is_zero_address_check(text: str) -> bool:
    return "address" in text and any(
        marker in text for marker in ("!= 0x0", "!= address(0)", "!= zero")
    )


GUARD_RULES = (
    Rule(
        name="caller-is-owner",
        predicate=lambda t: "caller must be" in t and "owner" in t,
        emit=constant('// require(msg.sender == owner(), "Not owner");')
    ),
    Rule(
        name="sufficient-balance",
        predicate=lambda t: "balance" in t and ">=" in t,
        emit=constant('// require(balanceOf(msg.sender) >= amount, "Insufficient balance");')
    ),
    Rule(
        name="non-zero-address",
        predicate=_is_zero_address_check,
        emit=constant('// require(to != address(0), "Invalid address");')
    ),
)


# ---------------------------------------------------------------------------
# Implementation hints keyed on the function name
# ---------------------------------------------------------------------------

OPERATION_HINTS = (
    Rule("mint", lambda t: t == "mint", constant("// _mint(to, amount);")),
    Rule("transfer", lambda t: t == "transfer", constant("// _transfer(msg.sender, to, amount);")),
    Rule("approve", lambda t: t == "approve", constant("// _approve(msg.sender, spender, amount);")),
    Rule(
        "transferfrom",
        lambda t: t == "transferfrom",
        constant("// _spendAllowance(from, msg.sender, amount);", "// _transfer(from, to, amount);")
    ),
)


# ---------------------------------------------------------------------------
# Return statements
# ---------------------------------------------------------------------------

RETURN_RULES = (
    Rule("bool-return", lambda t: "bool" in t, constant("return true;")),
)


# ---------------------------------------------------------------------------
# Roles (vault family)
# ---------------------------------------------------------------------------

ROLE_PHRASE_RE = re.compile(r"\b([A-Za-z]+)[ _]role\b", re.IGNORECASE)
ROLE_STOPWORDS = frozenset({"a", "an", "any", "the", "this", "that", "its", "their", "same"})


def derive_roles(spec: ContractSpec) -> List[str]:
    """
    Role constant names from "<word> role" phrases, in first-seen order.

    Falls back to the strategist role when nothing is mentioned.
    """
    roles: List[str] = []
    for text in _role_texts(spec):
        for match in ROLE_PHRASE_RE.finditer(text):
            if match.group(1).lower() in ROLE_STOPWORDS:
                continue
            role = f"{match.group(1).upper()}_ROLE"
            if role not in roles:
                roles.append(role)
    return roles or [DEFAULT_ROLE]


def _role_texts(spec: ContractSpec) -> Iterable[str]:
    yield from spec.security_requirements
    for fn in spec.functions:
        yield fn.security
        yield from fn.preconditions


def role_constant(role: str) -> str:
    return f'bytes32 public constant {role} = keccak256("{role}");'
