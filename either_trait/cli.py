#!/usr/bin/env python3
"""
Generate Either implementations for @either_trait interfaces.

Usage:
    either-trait shapes.py
    either-trait shapes.py -o shapes_either.py --json report.json
    either-trait example.json --verbose
"""

import argparse
import dataclasses
import sys
from pathlib import Path
from typing import List, Optional

from either_trait.core.config import GeneratorOptions
from either_trait.core.pipeline import expand_module, generate_from_description
from either_trait.errors import EitherTraitError
from either_trait.output import GenerationJSONFormatter
from either_trait.utils.files import save_module


class InterfaceOutcome:
    """Result of generating one interface"""

    def __init__(self, name: str, lineno: Optional[int]):
        self.name = name
        self.lineno = lineno
        self.generated = False
        self.reason = ""
        self.class_name = None
        self.error = None

    def __repr__(self):
        status = "✅ GENERATED" if self.generated else "❌ REJECTED"
        where = f"{self.name}:{self.lineno}" if self.lineno is not None else self.name
        return f"{status} {where} - {self.reason}"


class GenerationSummary:
    """Summary of generation results for a file"""

    def __init__(self, filename: str):
        self.filename = filename
        self.results: List[InterfaceOutcome] = []
        self.output_file: Optional[str] = None

    def add_result(self, result: InterfaceOutcome):
        self.results.append(result)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def generated(self) -> int:
        return sum(1 for r in self.results if r.generated)

    @property
    def rejected(self) -> int:
        return sum(1 for r in self.results if not r.generated)

    def print_summary(self):
        """Print formatted summary"""
        print("\n" + "=" * 80)
        print(f"GENERATION SUMMARY: {self.filename}")
        print("=" * 80)

        if not self.results:
            print("⚠️  No @either_trait interfaces found")
            return

        print(f"\nInterfaces: {self.total}")
        print(f"✅ Generated: {self.generated}")
        print(f"❌ Rejected: {self.rejected}")

        print("\n" + "-" * 80)
        for result in self.results:
            print(f"{result}")

        if self.output_file:
            print(f"\n💾 Written to: {self.output_file}")
        print("=" * 80)


def _rejected(name: str, lineno: Optional[int], error: EitherTraitError) -> InterfaceOutcome:
    outcome = InterfaceOutcome(name, lineno)
    outcome.reason = str(error)
    outcome.error = error
    return outcome


def generate_file(file_path: str,
                  options: Optional[GeneratorOptions] = None,
                  output_path: Optional[str] = None,
                  json_output: Optional[str] = None,
                  verbose: bool = False) -> GenerationSummary:
    """
    Generate implementations for a Python module or a JSON description.

    Args:
        file_path: `.py` module or `.json` interface description
        options: Generator options
        output_path: Where to write the generated module (default: OUTPUT_DIR)
        json_output: Optional path to save a JSON report
        verbose: Print verbose output

    Returns:
        GenerationSummary
    """
    options = options or GeneratorOptions()
    summary = GenerationSummary(file_path)
    formatter = GenerationJSONFormatter(file_path, options.allow_generic_methods)

    text = Path(file_path).read_text(encoding="utf-8")
    module = None

    if file_path.endswith(".json"):
        try:
            result = generate_from_description(text, options)
        except EitherTraitError as e:
            name = e.location.interface if e.location else Path(file_path).stem
            summary.add_result(_rejected(name, None, e))
            formatter.add_rejected(name, None, e.to_dict())
        else:
            module = result.output
            outcome = InterfaceOutcome(result.interface.name, None)
            outcome.generated = True
            outcome.class_name = result.implementation.class_name
            outcome.reason = f"generated {outcome.class_name}"
            summary.add_result(outcome)
            formatter.add_generated(
                result.interface.name, None, result.interface.source,
                outcome.class_name, list(result.implementation.methods),
                result.implementation.source
            )
    else:
        try:
            expansion = expand_module(text, options, filename=file_path)
        except EitherTraitError as e:
            summary.add_result(_rejected("<module>", e.location.line if e.location else None, e))
            formatter.add_rejected("<module>", None, e.to_dict())
        else:
            if verbose:
                found = len(expansion.results) + len(expansion.errors)
                print(f"\n🔍 Found {found} @either_trait interfaces")

            for result in expansion.results:
                outcome = InterfaceOutcome(result.interface.name, result.interface.location.line)
                outcome.generated = True
                outcome.class_name = result.implementation.class_name
                outcome.reason = f"generated {outcome.class_name}"
                summary.add_result(outcome)
                formatter.add_generated(
                    result.interface.name, result.interface.location.line,
                    result.interface.source, outcome.class_name,
                    list(result.implementation.methods), result.implementation.source
                )

            for failure in expansion.errors:
                summary.add_result(_rejected(failure.name, failure.line, failure.error))
                formatter.add_rejected(failure.name, failure.line, failure.error.to_dict())

            # Results are grouped by outcome above; report them in source order
            summary.results.sort(key=lambda r: r.lineno or 0)

            if expansion.results:
                module = expansion.output

    if module is not None:
        summary.output_file = save_module(module, file_path, output_path, options.output_dir)
        formatter.output_file = summary.output_file
        if verbose:
            print(f"\n💾 Generated module saved to: {summary.output_file}")

    if json_output:
        formatter.save_to_file(json_output)
        if verbose:
            print(f"\n💾 JSON report saved to: {json_output}")

    return summary


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Generate Either implementations for @either_trait interfaces",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Write ./either_out/shapes_either.py
    either-trait shapes.py

    # Choose the destination and keep a report
    either-trait shapes.py -o src/shapes_either.py --json report.json

    # Reject methods with their own type parameters
    either-trait shapes.py --no-generic-methods
        """
    )

    parser.add_argument("file", help="Python module or JSON interface description")
    parser.add_argument("-o", "--output", help="Path of the generated module")
    parser.add_argument("--output-dir", help="Directory for the generated module (or EITHER_TRAIT_OUTPUT_DIR)")
    parser.add_argument("--json", dest="json_output", help="Save a JSON report to this path")
    parser.add_argument("--no-generic-methods", action="store_true",
                        help="Reject methods that declare their own type parameters")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    args = parser.parse_args(argv)

    # Check file exists
    if not Path(args.file).exists():
        print(f"❌ Error: File not found: {args.file}")
        sys.exit(1)

    options = GeneratorOptions.from_env()
    if args.no_generic_methods:
        options = dataclasses.replace(options, allow_generic_methods=False)
    if args.output_dir:
        options = dataclasses.replace(options, output_dir=args.output_dir)

    summary = generate_file(args.file, options, args.output, args.json_output, args.verbose)
    summary.print_summary()

    sys.exit(0 if summary.rejected == 0 else 1)


if __name__ == "__main__":
    main()
