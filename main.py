"""Entry point for the PO to resource bundle converter."""

import argparse

from gnu_tools.cli import run
from gnu_tools.config import DUPLICATE_POLICIES


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        description="Merge gettext PO catalogs into a JSON resource bundle",
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        help="PO files to merge, in order",
    )
    parser.add_argument(
        "-o",
        "--output",
        required=True,
        help="Path of the resource bundle to write",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to an optional YAML configuration file",
    )
    parser.add_argument(
        "--duplicates",
        choices=DUPLICATE_POLICIES,
        default=None,
        help="How to treat keys defined by more than one file "
        "(default: last-wins, or the config value)",
    )
    parser.add_argument(
        "--use-fuzzy",
        action="store_true",
        default=None,
        help="Use translations of entries marked fuzzy",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv=None) -> None:
    """Parse CLI arguments and run the conversion."""
    args = build_parser().parse_args(argv)
    run(
        input_files=args.inputs,
        output_file=args.output,
        config_path=args.config,
        duplicates=args.duplicates,
        use_fuzzy=args.use_fuzzy,
        verbose=args.verbose,
    )


if __name__ == "__main__":
    main()
