#!/usr/bin/env python3
"""
wixfrag CLI — generate WiX component fragments and update Product attributes.

  wixfrag generate        : one ComponentGroup per subdirectory of the source directory
  wixfrag update-product  : write Product Id and Version into an existing WiX source
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from pathlib import Path
from typing import Optional, NoReturn
import logging
from xml.etree.ElementTree import ParseError

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from wixfrag.core.models import (
    GenerationParams, ProductParams, IdentityMode, OperationCancelled, ProductUpdateError)
from wixfrag.commands import GenerateComponentsCommand, UpdateProductCommand
from wixfrag.utils.convert_utils import ConvertUtils
from wixfrag.aliases import (
    IDENTITY_MODE_ALIASES, IDENTITY_MODE_CHOICES, IDENTITY_MODE_HELP_TEXT, EPILOG_TEXT
)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="wixfrag",
            description="wixfrag — WiX fragment generator with duplicate file detection",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )
        subparsers = parser.add_subparsers(dest="command", required=True)

        # Options shared by every command
        common = argparse.ArgumentParser(add_help=False)
        common.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        common.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show detailed statistics and progress"
        )

        generate = subparsers.add_parser(
            "generate",
            parents=[common],
            formatter_class=argparse.RawTextHelpFormatter,
            help="Generate a WiX fragment from the files of a directory"
        )
        generate.add_argument(
            "--source", "-s",
            required=True,
            type=str,
            help="Directory whose subdirectories become component groups"
        )
        generate.add_argument(
            "--target", "-t",
            required=True,
            type=str,
            help="Directory the fragment file is written to"
        )
        generate.add_argument(
            "--fragment", "-f",
            default="",
            type=str,
            help="Name of the WiX fragment file (.wxs) to generate"
        )
        generate.add_argument(
            "--mode",
            choices=IDENTITY_MODE_CHOICES,
            default="bucketed",
            type=str,
            help=IDENTITY_MODE_HELP_TEXT
        )
        generate.add_argument(
            "--trash-existing",
            action="store_true",
            help="Move an existing fragment file to trash instead of deleting it"
        )

        update = subparsers.add_parser(
            "update-product",
            parents=[common],
            help="Update Id and Version of the Product element in a WiX source file"
        )
        update.add_argument(
            "--source", "-s",
            required=True,
            type=str,
            help="Directory containing the WiX source file"
        )
        update.add_argument(
            "--file", "-f",
            default="",
            type=str,
            help="Name of the WiX source file containing a Product element"
        )
        update.add_argument(
            "--product-id",
            default="",
            type=str,
            help="Product Id Guid. Leave empty to generate a new one"
        )
        update.add_argument(
            "--product-version",
            required=True,
            type=str,
            help="Product Version number (Major.Minor[.Build[.Revision]])"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        source_path = Path(args.source).resolve()
        if not source_path.exists():
            self.error_exit(f"Directory not found: {args.source}")
        if not source_path.is_dir():
            self.error_exit(f"Path is not a directory: {args.source}")

        if args.command == "generate":
            target_path = Path(args.target).resolve()
            if target_path.exists() and not target_path.is_dir():
                self.error_exit(f"Target path is not a directory: {args.target}")

            if args.mode not in IDENTITY_MODE_ALIASES:
                self.error_exit(
                    f"Invalid identity mode: '{args.mode}'.\n"
                    f"Valid options: {', '.join(IDENTITY_MODE_CHOICES)}"
                )

    def create_generation_params(self, args: argparse.Namespace) -> GenerationParams:
        """Create GenerationParams from CLI arguments."""
        try:
            return GenerationParams(
                source_dir=str(Path(args.source).resolve()),
                target_dir=str(Path(args.target).resolve()),
                fragment_file_name=args.fragment,
                mode=IDENTITY_MODE_ALIASES.get(args.mode, IdentityMode.BUCKETED),
                trash_existing=args.trash_existing,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def create_product_params(self, args: argparse.Namespace) -> ProductParams:
        """Create ProductParams from CLI arguments."""
        try:
            return ProductParams(
                source_dir=str(Path(args.source).resolve()),
                source_file=args.file,
                product_id=args.product_id or None,
                product_version=args.product_version.strip(),
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(
                f"\r  [{stage}] {current}/{total} ({percent:.1f}%)"
            )
            sys.stderr.flush()
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
            sys.stderr.flush()

    @staticmethod
    def stopped_flag() -> bool:
        """Check if operation should stop (placeholder for signal handling)."""
        return False

    def run_generate(self, params: GenerationParams) -> None:
        """Execute the fragment generation workflow."""
        command = GenerateComponentsCommand()
        if not self.quiet:
            print(f"Scanning directory: {params.source_dir}")
        if self.verbose:
            print(f"Identity mode: {params.mode.display_name} ({params.mode.description})")

        try:
            result = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None,
                stopped_flag=self.stopped_flag
            )
        except OperationCancelled:
            print("\n⚠️  Operation cancelled, no fragment written")
            sys.exit(130)
        except OSError as e:
            self.error_exit(f"Generation failed: {e}")

        if result is None:
            self.warning("Fragment file name not specified; cannot generate components.")
            return

        output_path, stats = result
        if self.verbose:
            sys.stderr.write("\n")
            print(stats.print_summary())

        if not self.quiet:
            files = command.get_files()
            print(f"✅ Wrote {output_path} ({len(files)} components, {stats.groups} groups)")

    def run_update_product(self, params: ProductParams) -> None:
        """Execute the Product attribute update."""
        command = UpdateProductCommand()
        try:
            updated = command.execute(params)
        except ProductUpdateError as e:
            self.error_exit(str(e))
        except ParseError as e:
            self.error_exit(f"Invalid WiX source file: {e}")
        except OSError as e:
            self.error_exit(f"Update failed: {e}")

        if not updated:
            self.warning("WiX source file does not contain a Product element.")
            return

        if not self.quiet:
            print(f"✅ {params.source_path} updated "
                  f"(Id: {command.product_id}, Version: {params.product_version})")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        if self.verbose:
            logging.getLogger("wixfrag").setLevel(logging.INFO)

        self.validate_args(args)

        if args.command == "generate":
            self.run_generate(self.create_generation_params(args))
        else:
            self.run_update_product(self.create_product_params(args))

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {ConvertUtils.seconds_to_human(elapsed)}")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
