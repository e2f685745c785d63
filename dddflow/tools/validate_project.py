#!/usr/bin/env python3
"""
validate_project.py - Validate every flow and domain of a dddflow project.

Loads the project manifest, each domain.yaml and every flow file it lists,
then runs flow, domain and system validation and reports the result. This
is the same engine the editor uses to decide whether a flow may move on to
implementation.

Usage:
    python -m dddflow.tools.validate_project                 # current directory
    python -m dddflow.tools.validate_project path/to/project
    python -m dddflow.tools.validate_project --domain billing --json
    dddflow-validate --strict

Exit Codes:
    0 - No errors (and no warnings under --strict)
    1 - Validation failed
    2 - Fatal error (missing manifest, unparseable flow file)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from dddflow import __version__
from dddflow.config.project_loader import ProjectRegistry
from dddflow.config.validation_config import get_log_level, is_strict_mode
from dddflow.model._time import utc_now_iso
from dddflow.validator import ValidationResult, ValidationStore

logger = logging.getLogger(__name__)

# Exit codes per contract
EXIT_SUCCESS = 0
EXIT_VALIDATION_FAILED = 1
EXIT_FATAL_ERROR = 2


class ProjectReport:
    """Every result produced by one CLI run."""

    def __init__(
        self,
        flow_results: List[ValidationResult],
        domain_results: List[ValidationResult],
        system_result: ValidationResult,
    ):
        self.flow_results = flow_results
        self.domain_results = domain_results
        self.system_result = system_result

    @property
    def all_results(self) -> List[ValidationResult]:
        return [*self.flow_results, *self.domain_results, self.system_result]

    @property
    def total_errors(self) -> int:
        return sum(r.error_count for r in self.all_results)

    @property
    def total_warnings(self) -> int:
        return sum(r.warning_count for r in self.all_results)

    def failed(self, strict: bool) -> bool:
        if self.total_errors:
            return True
        return strict and self.total_warnings > 0

    def to_dict(self, strict: bool) -> Dict[str, Any]:
        return {
            "version": __version__,
            "timestamp": utc_now_iso(),
            "summary": {
                "status": "FAIL" if self.failed(strict) else "PASS",
                "strict": strict,
                "flows": len(self.flow_results),
                "domains": len(self.domain_results),
                "errors": self.total_errors,
                "warnings": self.total_warnings,
            },
            "flows": {r.target_id: r.to_dict() for r in self.flow_results},
            "domains": {r.target_id: r.to_dict() for r in self.domain_results},
            "system": self.system_result.to_dict(),
        }


def run_validation(registry: ProjectRegistry, domain_filter: Optional[str] = None) -> ProjectReport:
    """Validate the loaded project.

    System validation always covers every domain; ``domain_filter`` only
    narrows which flows and domains are validated individually.
    """
    store = ValidationStore()
    domains = registry.domains

    domain_ids = registry.domain_ids
    if domain_filter is not None:
        domain_ids = [d for d in domain_ids if d == domain_filter]

    flow_results: List[ValidationResult] = []
    domain_results: List[ValidationResult] = []
    for domain_id in domain_ids:
        for flow in registry.get_domain_flows(domain_id):
            flow_results.append(store.validate_flow(flow))
        result = store.validate_domain(domain_id, domains)
        if result is not None:
            domain_results.append(result)

    system_result = store.validate_system(domains)
    return ProjectReport(flow_results, domain_results, system_result)


# ============================================================================
# Output
# ============================================================================


def print_json_output(report: ProjectReport, strict: bool) -> None:
    """Print JSON output to stdout."""
    print(json.dumps(report.to_dict(strict), indent=2))


def _print_result(result: ValidationResult, verbose: bool) -> None:
    if not result.issues:
        if verbose:
            print(f"  [PASS] {result.scope.value} {result.target_id}")
        return
    print(
        f"\n{result.scope.value} {result.target_id} "
        f"({result.error_count} errors, {result.warning_count} warnings)",
        file=sys.stderr,
    )
    print("=" * 70, file=sys.stderr)
    for item in result.issues:
        print(item.format(), file=sys.stderr)


def print_report(report: ProjectReport, strict: bool, verbose: bool = False) -> None:
    """Print issues to stderr and the verdict to stdout (PASS) or stderr (FAIL)."""
    for result in report.all_results:
        _print_result(result, verbose)

    if report.failed(strict):
        reason = f"{report.total_errors} errors"
        if strict and not report.total_errors:
            reason = f"{report.total_warnings} warnings, strict mode"
        print(f"\nProject validation FAILED ({reason}).", file=sys.stderr)
        return

    print("Project validation PASSED.")
    print(f"  [PASS] {len(report.flow_results)} flow(s) validated")
    print(f"  [PASS] {len(report.domain_results)} domain(s) validated")
    if report.system_result.warning_count == 0:
        print("  [PASS] Event wiring consistent across domains")
    if report.total_warnings:
        print(f"\nNote: {report.total_warnings} warning(s) reported.", file=sys.stderr)
        print("      Use --strict flag to treat warnings as errors.", file=sys.stderr)


# ============================================================================
# CLI and Main
# ============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="dddflow project validator - check flows, domains and event wiring",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit Codes:
  0 - All validation checks passed
  1 - Validation failed (errors, or warnings under --strict)
  2 - Fatal error (missing manifest, parse errors)

Examples:
  dddflow-validate
  dddflow-validate path/to/project --json
  dddflow-validate --domain billing --strict
        """,
    )
    parser.add_argument(
        "project_dir",
        nargs="?",
        default=".",
        help="Project root containing the project manifest (default: current directory)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output machine-readable JSON with per-flow/domain/system results",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings as errors (also enabled by DDDFLOW_STRICT)",
    )
    parser.add_argument(
        "--domain",
        metavar="ID",
        help="Only validate flows and the domain document of this domain",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging and list passing targets",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"dddflow-validate {__version__}",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, get_log_level(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    strict = args.strict or is_strict_mode()

    try:
        registry = ProjectRegistry(Path(args.project_dir))
    except (FileNotFoundError, ValueError) as e:
        if args.json:
            error_output: Dict[str, Any] = {
                "version": __version__,
                "timestamp": utc_now_iso(),
                "summary": {"status": "ERROR", "message": str(e)},
                "flows": {},
                "domains": {},
                "system": None,
            }
            print(json.dumps(error_output, indent=2))
        else:
            print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(EXIT_FATAL_ERROR)

    if args.domain and registry.get_domain(args.domain) is None:
        print(f"ERROR: Unknown domain '{args.domain}'", file=sys.stderr)
        sys.exit(EXIT_FATAL_ERROR)

    report = run_validation(registry, domain_filter=args.domain)
    logger.debug(
        "Validation finished: %d error(s), %d warning(s)",
        report.total_errors,
        report.total_warnings,
    )

    if args.json:
        print_json_output(report, strict)
    else:
        print_report(report, strict, verbose=args.verbose)

    sys.exit(EXIT_VALIDATION_FAILED if report.failed(strict) else EXIT_SUCCESS)


if __name__ == "__main__":
    main()
