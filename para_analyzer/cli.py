#!/usr/bin/env python3
"""
Command-line front end for the parallelizable-await detector.

Analyzes C# files or directories and prints one line per finding,
followed by a batch summary.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from para_analyzer.finder import analyze_file
from para_analyzer.issues import PARALLELIZABLE_RULE, Finding
from para_analyzer.sources import select_sources
from para_analyzer.utils import create_csharp_parser

log = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Aggregate results from analyzing multiple files."""
    total_files: int = 0
    successful_files: int = 0
    failed_files: int = 0
    findings_by_file: Dict[str, List[Finding]] = field(default_factory=dict)
    errors_by_file: Dict[str, str] = field(default_factory=dict)

    @property
    def total_findings(self) -> int:
        return sum(len(findings) for findings in self.findings_by_file.values())


def analyze_files(files: List[Path], show_findings: bool = True) -> BatchResult:
    """
    Analyze multiple files.

    Args:
        files: C# source files to analyze
        show_findings: Print each finding as it is produced

    Returns:
        BatchResult with aggregate statistics
    """
    batch_result = BatchResult(total_files=len(files))
    parser = create_csharp_parser()

    for source_file in files:
        try:
            findings = analyze_file(source_file, parser=parser)
        except OSError as e:
            batch_result.failed_files += 1
            batch_result.errors_by_file[str(source_file)] = str(e)
            log.error(f"Could not read {source_file}: {e}")
            continue

        batch_result.successful_files += 1
        batch_result.findings_by_file[str(source_file)] = findings
        if show_findings:
            for finding in findings:
                print(finding)

    return batch_result


def print_batch_summary(batch_result: BatchResult):
    """Print aggregate summary of batch analysis."""
    print(f"\n{'='*70}")
    print(f"{PARALLELIZABLE_RULE.id}: {PARALLELIZABLE_RULE.title}")
    print(f"{'='*70}\n")

    print("Files Processed:")
    print(f"  Total: {batch_result.total_files}")
    print(f"  Successful: {batch_result.successful_files}")
    print(f"  Failed: {batch_result.failed_files}")

    print(f"\nFindings: {batch_result.total_findings}")

    if batch_result.errors_by_file:
        print("\nErrors:")
        for file, error in batch_result.errors_by_file.items():
            print(f"  {Path(file).name}: {error}")

    print(f"\n{'='*70}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="para-analyzer",
        description="Find C# methods whose awaited tasks might be parallelizable",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Single file
  para-analyzer src/Services/OrderService.cs

  # Whole project, failing the build on any finding
  para-analyzer --strict src/

  # Include *.g.cs / *.designer.cs and <auto-generated> files
  para-analyzer --include-generated src/
        """,
    )

    parser.add_argument("paths", nargs="+", type=Path, metavar="PATH",
                        help="C# source files or directories to analyze")
    parser.add_argument("--include-generated", action="store_true",
                        help="Also analyze generated code (skipped by default)")
    parser.add_argument("--strict", action="store_true",
                        help="Exit with status 1 when any finding is reported")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Quiet mode: only print findings, no summary")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Debug logging")
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.WARNING
    else:
        log_level = logging.INFO
    logging.basicConfig(level=log_level, format="%(message)s")

    for path in args.paths:
        if not path.exists():
            log.error(f"Path not found: {path}")
            return 1

    files = select_sources(args.paths, include_generated=args.include_generated)
    if not files:
        log.error("No C# files found in " + ", ".join(str(p) for p in args.paths))
        return 1

    batch_result = analyze_files(files)
    if not args.quiet:
        print_batch_summary(batch_result)

    if args.strict and batch_result.total_findings:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
