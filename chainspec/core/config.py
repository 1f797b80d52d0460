"""
Template families, inherited-name tables and configuration constants
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Optional, Tuple

DEFAULT_CONTRACT_NAME = "UnnamedContract"
DEFAULT_IDENTIFIER = "GeneratedContract"

DEFAULT_TEMPLATE = "ERC20_Template"
VAULT_TEMPLATE = "DAOVault_Template"
TEMPLATE_SUFFIX = ".sol"

PACKAGE_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

# Environment overrides
TEMPLATES_DIR_ENV = "CHAINSPEC_TEMPLATES_DIR"
OUTPUT_DIR_ENV = "CHAINSPEC_OUTPUT_DIR"
DEFAULT_OUTPUT_DIR = "./generated"

# Section headings recognized by the parser
CONTRACT_NAME_HEADING = "Contract Name"
SECURITY_HEADING = "Security Requirements"
STATE_VARIABLES_HEADING = "State Variables"
EVENTS_HEADING = "Events"
INVARIANTS_HEADING = "State Invariants"

# Access control capability added when the owner heuristic matches
OWNABLE_IMPORT = 'import "@openzeppelin/contracts/access/Ownable.sol";'
OWNABLE_BASE = "Ownable"
OWNABLE_CONSTRUCTOR = "Ownable(msg.sender)"
OWNER_MODIFIER = "onlyOwner"

ERC20_TOKENS = (
    "CONTRACT_NAME",
    "IMPORTS",
    "INHERITANCE",
    "STATE_VARIABLES",
    "EVENTS",
    "CONSTRUCTOR_ARGS",
    "CONSTRUCTOR_INHERITANCE",
    "CONSTRUCTOR_LOGIC",
    "FUNCTIONS",
    "OVERRIDES",
)

VAULT_TOKENS = ERC20_TOKENS + (
    "ROLES_DEFINITION",
    "DEPOSIT_HOOKS",
    "TIMELOCK_CHECK",
)


@dataclass(frozen=True)
class TemplateFamily:
    """Fixed facts about a family of templates"""
    name: str
    label: str  # used in "inherited" placeholder comments
    tokens: Tuple[str, ...]
    imports: Tuple[str, ...]
    inheritance: Tuple[str, ...]
    inherited_variables: FrozenSet[str]
    inherited_events: FrozenSet[str]
    inherited_functions: FrozenSet[str]  # lowercased
    base_constructor: Optional[str] = None  # e.g. "ERC20"


ERC20_FAMILY = TemplateFamily(
    name="erc20",
    label="ERC20",
    tokens=ERC20_TOKENS,
    imports=('import "@openzeppelin/contracts/token/ERC20/ERC20.sol";',),
    inheritance=("ERC20",),
    inherited_variables=frozenset({"balances", "allowances", "totalSupply", "name", "symbol"}),
    inherited_events=frozenset({"Transfer", "Approval"}),
    inherited_functions=frozenset({"transfer", "approve", "transferfrom", "balanceof", "allowance"}),
    base_constructor="ERC20",
)

VAULT_FAMILY = TemplateFamily(
    name="vault",
    label="vault",
    tokens=VAULT_TOKENS,
    imports=(
        'import "@openzeppelin/contracts/access/AccessControl.sol";',
        'import "@openzeppelin/contracts/utils/Pausable.sol";',
        'import "@openzeppelin/contracts/utils/ReentrancyGuard.sol";',
    ),
    inheritance=("AccessControl", "Pausable", "ReentrancyGuard"),
    inherited_variables=frozenset({"asset", "balances", "totalDeposits", "withdrawalDelay", "lastDepositTime"}),
    inherited_events=frozenset({"Deposited", "Withdrawn"}),
    inherited_functions=frozenset({"deposit", "withdraw", "pause", "unpause"}),
)

DEFAULT_ROLE = "STRATEGIST_ROLE"
DEFAULT_TOKEN_NAME = '"DefaultToken"'
DEFAULT_TOKEN_SYMBOL = '"DFT"'


def family_for_template(template_name: str) -> TemplateFamily:
    """Vault templates are recognized by name; everything else is ERC20"""
    if "vault" in template_name.lower():
        return VAULT_FAMILY
    return ERC20_FAMILY


def templates_dir() -> Path:
    """Template directory, honoring CHAINSPEC_TEMPLATES_DIR"""
    override = os.getenv(TEMPLATES_DIR_ENV)
    return Path(override) if override else PACKAGE_TEMPLATES_DIR


def output_dir() -> Path:
    """Default output directory, honoring CHAINSPEC_OUTPUT_DIR"""
    return Path(os.getenv(OUTPUT_DIR_ENV) or DEFAULT_OUTPUT_DIR)
