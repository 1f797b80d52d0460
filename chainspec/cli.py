#!/usr/bin/env python3
"""
Generate Solidity contracts from markdown specifications.

Usage:
    chainspec parse specs/token.md
    chainspec generate specs/token.md -t ERC20_Template -o contracts/generated
    chainspec render output/MyToken.json -t ERC20_Template
    chainspec batch specs/ -o contracts/generated --records output/
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from chainspec.core.errors import ChainSpecError
from chainspec.core.models import ContractSpec
from chainspec.core.pipeline import generate_from_spec, select_template
from chainspec.generators.templates import TemplateStore
from chainspec.output.writer import read_record, write_record
from chainspec.parser.assembler import SpecParser


def print_summary(spec: ContractSpec) -> None:
    print(f"📄 Contract: {spec.contract_name}")
    print(f"   - Functions: {len(spec.functions)}")
    print(f"   - State Variables: {len(spec.state_variables)}")
    print(f"   - Events: {len(spec.events)}")
    print(f"   - Security Requirements: {len(spec.security_requirements)}")
    print(f"   - State Invariants: {len(spec.state_invariants)}")


def emit_contract(spec: ContractSpec, args: argparse.Namespace) -> int:
    store = TemplateStore(args.templates_dir) if args.templates_dir else None
    result = generate_from_spec(
        spec,
        template_name=args.template,
        output_dir_path=args.output,
        record_path=getattr(args, "record", None),
        store=store,
        save=not args.stdout
    )

    if args.stdout:
        print(result["code"])
        return 0

    print(f"🏭 Template: {result['templateUsed']}")
    print(f"✅ Generated contract: {result['savedPath']}")
    if result["recordPath"]:
        print(f"💾 Saved record: {result['recordPath']}")
    return 0


def cmd_parse(args: argparse.Namespace) -> int:
    spec = SpecParser().parse_file(args.spec)

    if args.output:
        path = write_record(spec, args.output)
        print_summary(spec)
        print(f"💾 Saved record: {path}")
    else:
        print(json.dumps(spec.to_dict(), indent=2, ensure_ascii=False))
    return 0


def cmd_generate(args: argparse.Namespace) -> int:
    spec = SpecParser().parse_file(args.spec)
    if not args.stdout:
        print_summary(spec)
    return emit_contract(spec, args)


def cmd_render(args: argparse.Namespace) -> int:
    spec = read_record(args.record_file)
    return emit_contract(spec, args)


def cmd_batch(args: argparse.Namespace) -> int:
    parser = SpecParser()
    store = TemplateStore(args.templates_dir) if args.templates_dir else None
    paths = sorted(Path(args.directory).glob("*.md"))

    if not paths:
        print(f"⚠️  No .md files found in {args.directory}")
        return 0

    failures = 0
    for path in paths:
        print(f"\n{'=' * 60}")
        print(f"Processing: {path.name}")
        print('=' * 60)

        try:
            spec = parser.parse_file(path)
            print_summary(spec)

            record_path = None
            if args.records:
                record_path = Path(args.records) / f"{path.stem}.json"

            result = generate_from_spec(
                spec,
                template_name=select_template(spec),
                output_dir_path=args.output,
                record_path=record_path,
                store=store
            )
            print(f"✅ Generated: {result['savedPath']} ({result['templateUsed']})")
        except (ChainSpecError, OSError, UnicodeDecodeError) as e:
            failures += 1
            print(f"❌ Error processing {path.name}: {e}", file=sys.stderr)

    print(f"\n✓ Processed {len(paths) - failures}/{len(paths)} specifications")
    return 0 if failures == 0 else 1


def cmd_templates(args: argparse.Namespace) -> int:
    store = TemplateStore(args.templates_dir)
    names = store.names()
    if not names:
        print(f"⚠️  No templates found in {store.templates_dir}")
        return 1
    for name in names:
        print(name)
    return 0


def add_render_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-t", "--template", help="Template name (default: chosen from the contract name)")
    parser.add_argument("-o", "--output", help="Output directory (or CHAINSPEC_OUTPUT_DIR)")
    parser.add_argument("--templates-dir", help="Template directory (or CHAINSPEC_TEMPLATES_DIR)")
    parser.add_argument("--stdout", action="store_true", help="Print the contract instead of writing it")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chainspec",
        description="Generate Solidity contracts from markdown specifications",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Inspect what the parser extracts
    chainspec parse specs/token.md

    # Generate a contract and keep the parsed record
    chainspec generate specs/token.md --record output/MyToken.json

    # Use a custom template directory
    export CHAINSPEC_TEMPLATES_DIR=contracts/templates
    chainspec generate specs/vault.md -t DAOVault_Template
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_cmd = subparsers.add_parser("parse", help="Parse a specification into a JSON record")
    parse_cmd.add_argument("spec", help="Markdown specification file")
    parse_cmd.add_argument("-o", "--output", help="Write the record here instead of stdout")
    parse_cmd.set_defaults(func=cmd_parse)

    generate_cmd = subparsers.add_parser("generate", help="Generate a contract from a specification")
    generate_cmd.add_argument("spec", help="Markdown specification file")
    generate_cmd.add_argument("--record", help="Also write the parsed record to this path")
    add_render_options(generate_cmd)
    generate_cmd.set_defaults(func=cmd_generate)

    render_cmd = subparsers.add_parser("render", help="Generate a contract from a saved record")
    render_cmd.add_argument("record_file", help="JSON record written by 'parse -o'")
    add_render_options(render_cmd)
    render_cmd.set_defaults(func=cmd_render)

    batch_cmd = subparsers.add_parser("batch", help="Generate contracts for every .md file in a directory")
    batch_cmd.add_argument("directory", help="Directory of markdown specifications")
    batch_cmd.add_argument("-o", "--output", help="Output directory (or CHAINSPEC_OUTPUT_DIR)")
    batch_cmd.add_argument("--records", help="Directory for parsed JSON records")
    batch_cmd.add_argument("--templates-dir", help="Template directory (or CHAINSPEC_TEMPLATES_DIR)")
    batch_cmd.set_defaults(func=cmd_batch)

    templates_cmd = subparsers.add_parser("templates", help="List available templates")
    templates_cmd.add_argument("--templates-dir", help="Template directory (or CHAINSPEC_TEMPLATES_DIR)")
    templates_cmd.set_defaults(func=cmd_templates)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        return args.func(args)
    except (ChainSpecError, OSError, UnicodeDecodeError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
