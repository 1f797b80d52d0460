"""
Field extractors for markdown contract specifications.

Every extractor is best-effort: malformed or missing input produces empty
values, never an exception. Public functions take the full document text;
the `*_from_sections` variants work on an already split document so the
assembler only scans the text once.
"""

import re
from typing import List

from ..core.config import (
    CONTRACT_NAME_HEADING,
    DEFAULT_CONTRACT_NAME,
    EVENTS_HEADING,
    STATE_VARIABLES_HEADING,
)
from ..core.models import EventSpec, FunctionParameter, FunctionSpec, StateVariable
from .sections import Section, find_section, split_sections

FUNCTION_HEADING_RE = re.compile(r"^Function:\s*([^(]+)\(([^)]*)\)")
STATE_VARIABLE_RE = re.compile(r"^-\s*`([^`]+)`\s*-\s*(.+)$")
EVENT_RE = re.compile(r"^-\s*`([^(`]+)\(([^)]*)\)`\s*-\s*(.+)$")
BULLET_MARKER_RE = re.compile(r"^-\s*")

# Field labels inside a function section, as regex fragments
DESCRIPTION_LABEL = "Description"
SECURITY_LABEL = "Security"
RETURNS_LABEL = "Returns?"
PRECONDITION_LABEL = "Preconditions?"
POSTCONDITION_LABEL = "Postconditions?"
EVENTS_LABEL = "Events?"


def sanitize_contract_name(raw: str) -> str:
    """Join words with underscores and drop anything outside [A-Za-z0-9_]"""
    name = re.sub(r"\s+", "_", raw.strip())
    name = re.sub(r"[^A-Za-z0-9_]", "", name)
    return name or DEFAULT_CONTRACT_NAME


def bullet_lines(body: str) -> List[str]:
    """Trimmed lines that start with a hyphen bullet"""
    return [line.strip() for line in body.splitlines() if line.strip().startswith("-")]


def strip_bullet(line: str) -> str:
    return BULLET_MARKER_RE.sub("", line.strip()).strip()


# ---------------------------------------------------------------------------
# Section-level extractors
# ---------------------------------------------------------------------------

def contract_name_from_sections(sections: List[Section]) -> str:
    section = find_section(sections, CONTRACT_NAME_HEADING)
    if section is None:
        return DEFAULT_CONTRACT_NAME

    for line in section.body.splitlines():
        if line.strip():
            return sanitize_contract_name(line)
    return DEFAULT_CONTRACT_NAME


def section_text(sections: List[Section], heading: str) -> str:
    section = find_section(sections, heading)
    return section.body.strip() if section else ""


def bullet_list_from_sections(sections: List[Section],
                              heading: str,
                              strip_backticks: bool = False) -> List[str]:
    items = []
    for line in bullet_lines(section_text(sections, heading)):
        item = strip_bullet(line)
        if strip_backticks:
            item = item.replace("`", "").strip()
        items.append(item)
    return items


def functions_from_sections(sections: List[Section]) -> List[FunctionSpec]:
    functions = []
    for section in sections:
        match = FUNCTION_HEADING_RE.match(section.heading.replace("`", ""))
        if not match:
            continue

        body = section.body
        functions.append(FunctionSpec(
            name=match.group(1).strip(),
            description=extract_field(body, DESCRIPTION_LABEL),
            parameters=tuple(parse_parameters(match.group(2))),
            preconditions=tuple(extract_list_field(body, PRECONDITION_LABEL)),
            postconditions=tuple(extract_list_field(body, POSTCONDITION_LABEL)),
            security=extract_field(body, SECURITY_LABEL),
            events=tuple(extract_list_field(body, EVENTS_LABEL)),
            returns=extract_field(body, RETURNS_LABEL)
        ))
    return functions


def state_variables_from_sections(sections: List[Section]) -> List[StateVariable]:
    variables = []
    for line in bullet_lines(section_text(sections, STATE_VARIABLES_HEADING)):
        match = STATE_VARIABLE_RE.match(line)
        if not match:
            continue

        # The name is the last token: "mapping(address => uint256) balances"
        parts = match.group(1).split()
        if len(parts) < 2:
            continue

        variables.append(StateVariable(
            name=parts[-1],
            type=" ".join(parts[:-1]),
            description=match.group(2).strip()
        ))
    return variables


def events_from_sections(sections: List[Section]) -> List[EventSpec]:
    events = []
    for line in bullet_lines(section_text(sections, EVENTS_HEADING)):
        match = EVENT_RE.match(line)
        if match:
            events.append(EventSpec(
                name=match.group(1).strip(),
                parameters=match.group(2).strip(),
                description=match.group(3).strip()
            ))
    return events


# ---------------------------------------------------------------------------
# Function body helpers
# ---------------------------------------------------------------------------

def parse_parameters(params: str) -> List[FunctionParameter]:
    """
    Parse "address to, uint256 amount" into parameters.

    The last token of each part is the name and the rest the type, so
    "string memory name_" keeps its data location instead of naming the
    parameter "memory". A single token is a type with no name; an empty
    part gives an empty type and name.
    """
    params = params.strip()
    if not params:
        return []

    parameters = []
    for part in params.split(","):
        tokens = part.split()
        if len(tokens) >= 2:
            parameters.append(FunctionParameter(type=" ".join(tokens[:-1]), name=tokens[-1]))
        else:
            parameters.append(FunctionParameter(type=tokens[0] if tokens else "", name=""))
    return parameters


def _field_pattern(label: str) -> "re.Pattern[str]":
    # "- **Label**: value" or "- **Label:** value"
    return re.compile(
        rf"^[ \t]*-[ \t]*\*\*{label}(?:\*\*[ \t]*:|:\*\*)[ \t]*(.+?)[ \t]*$",
        re.IGNORECASE | re.MULTILINE
    )


def extract_field(body: str, label: str) -> str:
    """First value of a bolded `- **Label**: value` item, or ''"""
    match = _field_pattern(label).search(body)
    return match.group(1).strip() if match else ""


def extract_list_field(body: str, label: str) -> List[str]:
    """
    Value of the first bolded list item, split on commas.

    Later items with the same label are ignored. Splitting keeps empty
    items, so "a, b," gives ["a", "b", ""].
    """
    value = extract_field(body, label)
    if not value:
        return []
    if "," in value:
        return [item.strip() for item in value.split(",")]
    return [value]


# ---------------------------------------------------------------------------
# Document-level extractors
# ---------------------------------------------------------------------------

def extract_contract_name(text: str) -> str:
    """Sanitized name under "## Contract Name", or UnnamedContract"""
    return contract_name_from_sections(split_sections(text))


def extract_section(text: str, heading: str) -> str:
    """Trimmed body of the first level-2 heading matching `heading`"""
    return section_text(split_sections(text), heading)


def extract_bullet_list(text: str, heading: str, strip_backticks: bool = False) -> List[str]:
    """Hyphen bullets of a section, marker removed"""
    return bullet_list_from_sections(split_sections(text), heading, strip_backticks)


def extract_functions(text: str) -> List[FunctionSpec]:
    """All "## Function: name(params)" sections in document order"""
    return functions_from_sections(split_sections(text))


def extract_state_variables(text: str) -> List[StateVariable]:
    return state_variables_from_sections(split_sections(text))


def extract_events(text: str) -> List[EventSpec]:
    return events_from_sections(split_sections(text))

