"""
File output for generated contracts and parsed specification records.

Filesystem errors are propagated to the caller unchanged.
"""

import json
import logging
from pathlib import Path
from typing import Union

from ..core.config import TEMPLATE_SUFFIX
from ..core.models import ContractSpec
from ..generators.solidity import to_contract_identifier

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def write_rendered(contract_code: str, identifier_hint: str, target_dir: PathLike) -> Path:
    """
    Save generated Solidity source to disk.

    Args:
        contract_code: Rendered contract text
        identifier_hint: Contract name; sanitized into the file name
        target_dir: Output directory, created if missing

    Returns:
        Path of the written file
    """
    directory = Path(target_dir)
    directory.mkdir(parents=True, exist_ok=True)

    file_path = directory / f"{to_contract_identifier(identifier_hint)}{TEMPLATE_SUFFIX}"
    with open(file_path, 'w', encoding='utf-8') as f:
        f.write(contract_code)

    logger.debug("Wrote contract to %s", file_path)
    return file_path


def write_record(spec: ContractSpec, output_path: PathLike, indent: int = 2) -> Path:
    """
    Save a parsed specification as JSON, keys in record order.

    Args:
        spec: Parsed contract specification
        output_path: Path to output JSON file
        indent: Number of spaces for indentation
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(spec.to_dict(), f, indent=indent, ensure_ascii=False)
        f.write("\n")

    logger.debug("Wrote record to %s", path)
    return path


def read_record(input_path: PathLike) -> ContractSpec:
    """Load a record written by write_record"""
    with open(input_path, 'r', encoding='utf-8') as f:
        return ContractSpec.from_dict(json.load(f))
