"""
ChainSpec: markdown contract specifications to Solidity scaffolds
"""

from .core.errors import ChainSpecError, TemplateNotFound
from .core.models import ContractSpec, EventSpec, FunctionParameter, FunctionSpec, StateVariable
from .core.pipeline import generate, generate_from_spec, select_template
from .generators import TemplateStore, render, to_contract_identifier
from .output import read_record, write_record, write_rendered
from .parser import SpecParser, parse, parse_directory, parse_file

__version__ = "0.1.0"
__all__ = [
    "parse",
    "parse_file",
    "parse_directory",
    "SpecParser",
    "render",
    "to_contract_identifier",
    "TemplateStore",
    "generate",
    "generate_from_spec",
    "select_template",
    "write_rendered",
    "write_record",
    "read_record",
    "ContractSpec",
    "FunctionSpec",
    "FunctionParameter",
    "StateVariable",
    "EventSpec",
    "ChainSpecError",
    "TemplateNotFound",
]
