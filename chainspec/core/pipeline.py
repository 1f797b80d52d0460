"""
Main generation pipeline
"""

from pathlib import Path
from typing import Dict, Optional, Union

from .config import DEFAULT_TEMPLATE, VAULT_TEMPLATE, output_dir
from .models import ContractSpec
from ..generators.solidity import render
from ..generators.templates import TemplateStore
from ..output.writer import write_record, write_rendered
from ..parser.assembler import parse


def select_template(spec: ContractSpec) -> str:
    """Vault contracts get the vault template, everything else ERC20"""
    if "vault" in spec.contract_name.lower():
        return VAULT_TEMPLATE
    return DEFAULT_TEMPLATE


def generate_from_spec(spec: ContractSpec,
                       template_name: Optional[str] = None,
                       output_dir_path: Optional[Union[str, Path]] = None,
                       record_path: Optional[Union[str, Path]] = None,
                       store: Optional[TemplateStore] = None,
                       save: bool = True) -> Dict:
    """
    Render a parsed specification and optionally persist the results.

    Args:
        spec: Parsed contract specification
        template_name: Template to use (default: chosen from the contract name)
        output_dir_path: Directory for the .sol file (default: CHAINSPEC_OUTPUT_DIR)
        record_path: Where to write the JSON record (not written if None)
        store: Template store
        save: Whether to write the rendered contract

    Returns:
        Dict with:
            - code: Generated Solidity source
            - spec: The record as a dict
            - templateUsed: Template name
            - savedPath: Path of the .sol file, or "" when not saved
            - recordPath: Path of the JSON record, or ""

    Raises:
        TemplateNotFound: If the template does not exist
        OSError: If an output file cannot be written
    """
    template = template_name or select_template(spec)
    code = render(spec, template, store)

    saved_path = ""
    if save:
        target = output_dir_path if output_dir_path is not None else output_dir()
        saved_path = str(write_rendered(code, spec.contract_name, target))

    written_record = ""
    if record_path is not None:
        written_record = str(write_record(spec, record_path))

    return {
        "code": code,
        "spec": spec.to_dict(),
        "templateUsed": template,
        "savedPath": saved_path,
        "recordPath": written_record
    }


def generate(markdown: str,
             template_name: Optional[str] = None,
             output_dir_path: Optional[Union[str, Path]] = None,
             record_path: Optional[Union[str, Path]] = None,
             store: Optional[TemplateStore] = None,
             save: bool = True) -> Dict:
    """
    Parse markdown and generate a contract from it.

    Parsing never fails; only template lookup and file writes can raise.
    See generate_from_spec for arguments and the returned dict.
    """
    return generate_from_spec(
        parse(markdown),
        template_name=template_name,
        output_dir_path=output_dir_path,
        record_path=record_path,
        store=store,
        save=save
    )
