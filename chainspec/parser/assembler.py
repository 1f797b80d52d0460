"""
Assemble ContractSpec records from markdown specification documents.
"""

import logging
from pathlib import Path
from typing import List, Union

from ..core.config import INVARIANTS_HEADING, SECURITY_HEADING
from ..core.models import ContractSpec
from .extractors import (
    bullet_list_from_sections,
    contract_name_from_sections,
    events_from_sections,
    functions_from_sections,
    state_variables_from_sections,
)
from .sections import split_sections

logger = logging.getLogger(__name__)


class SpecParser:
    """Parse markdown contract specifications into ContractSpec records"""

    def parse(self, content: str) -> ContractSpec:
        """
        Parse a specification document.

        Never raises for malformed markdown: missing sections produce empty
        fields and a missing name produces "UnnamedContract".

        Args:
            content: Markdown text

        Returns:
            ContractSpec
        """
        sections = split_sections(content)

        spec = ContractSpec(
            contract_name=contract_name_from_sections(sections),
            security_requirements=tuple(bullet_list_from_sections(sections, SECURITY_HEADING)),
            functions=tuple(functions_from_sections(sections)),
            state_variables=tuple(state_variables_from_sections(sections)),
            events=tuple(events_from_sections(sections)),
            state_invariants=tuple(
                bullet_list_from_sections(sections, INVARIANTS_HEADING, strip_backticks=True)
            )
        )

        logger.debug(
            "Parsed %s: %d functions, %d state variables, %d events",
            spec.contract_name,
            len(spec.functions),
            len(spec.state_variables),
            len(spec.events)
        )
        return spec

    def parse_file(self, file_path: Union[str, Path]) -> ContractSpec:
        """
        Read a UTF-8 markdown file (with or without a byte order mark) and parse it.

        Raises:
            OSError: If the file cannot be read
        """
        with open(file_path, 'r', encoding='utf-8-sig') as f:
            content = f.read()
        return self.parse(content)

    def parse_directory(self, directory: Union[str, Path]) -> List[ContractSpec]:
        """Parse every *.md file in a directory, in file name order"""
        paths = sorted(Path(directory).glob("*.md"))
        return [self.parse_file(path) for path in paths]


_default_parser = SpecParser()


def parse(content: str) -> ContractSpec:
    return _default_parser.parse(content)


def parse_file(file_path: Union[str, Path]) -> ContractSpec:
    return _default_parser.parse_file(file_path)


def parse_directory(directory: Union[str, Path]) -> List[ContractSpec]:
    return _default_parser.parse_directory(directory)
