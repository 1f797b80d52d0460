"""Solidity code generation from parsed specifications"""
from .solidity import build_placeholders, render, to_contract_identifier
from .templates import TemplateStore, find_tokens, substitute

__all__ = [
    'render',
    'build_placeholders',
    'to_contract_identifier',
    'TemplateStore',
    'substitute',
    'find_tokens',
]
