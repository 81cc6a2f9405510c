#!/usr/bin/env python3
"""
r1cs-wtns

Command-line interface for inspecting and converting R1CS and WTNS files.

Usage:
    r1cs-wtns info <file> [--field-size N]
    r1cs-wtns export <file> [-o output.json]
    r1cs-wtns check <file>
    r1cs-wtns wtns-import <witness.json> <output.wtns> [--prime P]
    r1cs-wtns -h | --help
    r1cs-wtns --version

Options:
    --field-size N     Field element width in bytes (default from config)
    --config PATH      Path to config.json
"""

import sys
import json
import argparse
from pathlib import Path
from typing import Optional, Union

from . import __version__
from .config import Config
from .errors import BadMagicError
from .formats.field_element import FieldElement, BN254_PRIME
from .formats.r1cs import read_r1cs
from .formats.r1cs_structures import R1csFile, R1CS_MAGIC
from .formats.wtns import read_wtns
from .formats.wtns_structures import WtnsFile, WTNS_MAGIC
from .output.json_export import export_document, dump_json, load_witness_values


Document = Union[R1csFile, WtnsFile]


def detect_format(data: bytes) -> Optional[str]:
    """
    Identify the container kind from its first 4 bytes.

    Returns:
        'r1cs', 'wtns', or None when the magic is not recognized
    """
    magic = bytes(data[:4])
    if magic == R1CS_MAGIC:
        return 'r1cs'
    if magic == WTNS_MAGIC:
        return 'wtns'
    return None


def load_document(data: bytes, field_size: int, verbose: bool = False) -> Document:
    """
    Parse R1CS or WTNS data based on its magic.

    Args:
        data: Raw file contents
        field_size: Expected field element width in bytes
        verbose: Print the detected format

    Raises:
        FormatError: If the format is not supported or the data is malformed
    """
    kind = detect_format(data)

    if kind == 'r1cs':
        if verbose:
            print("Detected R1CS format")
        return read_r1cs(data, field_size)

    elif kind == 'wtns':
        if verbose:
            print("Detected WTNS format")
        return read_wtns(data, field_size)

    else:
        raise BadMagicError(f"Unsupported file format (magic: {bytes(data[:4])!r})")


def summarize(document: Document) -> dict:
    """Header counters of a document as a plain dict."""
    if isinstance(document, R1csFile):
        header = document.header
        return {
            'kind': 'r1cs',
            'field_size': document.field_size,
            'prime': str(header.prime.to_int()),
            'n_wires': header.n_wires,
            'n_pub_out': header.n_pub_out,
            'n_pub_in': header.n_pub_in,
            'n_prvt_in': header.n_prvt_in,
            'n_labels': header.n_labels,
            'n_constraints': header.n_constraints,
            'wire_map_len': len(document.wire_map),
        }
    return {
        'kind': 'wtns',
        'version': document.version,
        'field_size': document.field_size,
        'prime': str(document.header.prime.to_int()),
        'witness_len': document.header.witness_len,
    }


def round_trip_matches(data: bytes, document: Document) -> bool:
    """Whether re-serializing `document` reproduces `data` byte for byte."""
    return document.to_bytes() == bytes(data)


def cmd_info(args, config: Config) -> None:
    data = Path(args.file).read_bytes()
    document = load_document(data, args.field_size or config.field_size, verbose=True)

    for key, value in summarize(document).items():
        print(f"{key}: {value}")

    if config.verify_round_trip:
        status = "OK" if round_trip_matches(data, document) else "DIFFERS"
        print(f"round_trip: {status}")


def cmd_export(args, config: Config) -> None:
    data = Path(args.file).read_bytes()
    document = load_document(data, args.field_size or config.field_size, verbose=True)

    output = args.output or str(Path(args.file).with_suffix('.json'))
    print(f"Exporting to {output}...")
    dump_json(export_document(document, config), output, config)
    print("Done!")


def cmd_check(args, config: Config) -> None:
    data = Path(args.file).read_bytes()
    document = load_document(data, args.field_size or config.field_size, verbose=True)

    if round_trip_matches(data, document):
        print(f"Round trip OK ({len(data)} bytes)")
    else:
        print(f"ERROR: Round trip differs ({len(data)} bytes in, "
              f"{len(document.to_bytes())} bytes out)")
        sys.exit(1)


def cmd_wtns_import(args, config: Config) -> None:
    field_size = args.field_size or config.field_size
    with open(args.json, 'r') as f:
        values = load_witness_values(json.load(f), field_size)

    prime = FieldElement.from_int(int(args.prime, 0), field_size)
    wtns = WtnsFile.from_values(values, prime, field_size, version=config.wtns_version)

    print(f"Writing {len(values)} witness values to {args.output}...")
    wtns.save(args.output)
    print("Done!")


def create_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='r1cs-wtns',
        description="Inspect and convert R1CS constraint systems and WTNS witness files",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('--version', action='version', version=f'r1cs-wtns {__version__}')

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--field-size', type=int, default=None,
                        help='Field element width in bytes')
    common.add_argument('--config', type=str, help='Path to config.json')

    subparsers = parser.add_subparsers(dest='command')

    info = subparsers.add_parser('info', parents=[common], help='Print header information')
    info.add_argument('file')
    info.set_defaults(func=cmd_info)

    export = subparsers.add_parser('export', parents=[common], help='Export to snarkjs-style JSON')
    export.add_argument('file')
    export.add_argument('-o', '--output', help='Output JSON path (default: <file>.json)')
    export.set_defaults(func=cmd_export)

    check = subparsers.add_parser('check', parents=[common],
                                  help='Verify that re-serializing reproduces the file')
    check.add_argument('file')
    check.set_defaults(func=cmd_check)

    wtns_import = subparsers.add_parser('wtns-import', parents=[common],
                                        help='Build a .wtns file from JSON values')
    wtns_import.add_argument('json')
    wtns_import.add_argument('output')
    wtns_import.add_argument('--prime', default=str(BN254_PRIME),
                             help='Field prime (decimal or 0x hex, default BN254)')
    wtns_import.set_defaults(func=cmd_wtns_import)

    return parser


def main(argv=None):
    """Main entry point."""
    parser = create_arg_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Load config
    config_path = Path(args.config) if args.config else None
    config = Config.load(config_path)

    try:
        args.func(args, config)
    except (ValueError, OSError) as e:
        print(f"ERROR: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"ERROR: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
