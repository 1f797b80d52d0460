"""Markdown specification parser"""
from .assembler import SpecParser, parse, parse_directory, parse_file
from .extractors import (
    extract_bullet_list,
    extract_contract_name,
    extract_events,
    extract_functions,
    extract_section,
    extract_state_variables,
    parse_parameters,
    sanitize_contract_name,
)
from .sections import Section, split_sections

__all__ = [
    'SpecParser',
    'parse',
    'parse_file',
    'parse_directory',
    'extract_contract_name',
    'extract_section',
    'extract_bullet_list',
    'extract_functions',
    'extract_state_variables',
    'extract_events',
    'parse_parameters',
    'sanitize_contract_name',
    'Section',
    'split_sections',
]
