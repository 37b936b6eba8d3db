"""
govaudit CLI - Command Line Interface for auditing queued contract calls
"""

import argparse
import logging
import sys
from typing import List, Optional

from govaudit.analyzers.call_analyzer import Penalties
from govaudit.analyzers.report import audit
from govaudit.analyzers.rules import DEFAULT_RULES, RuleEngine, load_rules
from govaudit.analyzers.selectors import build_selector_index
from govaudit.config import get_settings
from govaudit.exceptions import GovAuditError
from govaudit.utils.file_utils import RULES_LABEL, load_abi, load_calls, read_json
from govaudit.utils.logger import setup_logger
from govaudit.utils.report_generator import generate_report

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, json_logs: bool = False) -> None:
    """Configure logging for the CLI."""
    setup_logger(
        log_level=logging.DEBUG if verbose else None,
        json_format=True if json_logs else None,
    )


def build_engine(rules_path: Optional[str] = None, extra_rules_path: Optional[str] = None) -> RuleEngine:
    """Assemble the rule engine from the default table and optional rule files."""
    if rules_path:
        engine = RuleEngine(load_rules(read_json(rules_path, RULES_LABEL)))
    else:
        engine = RuleEngine(DEFAULT_RULES)
    if extra_rules_path:
        engine = engine.extended(load_rules(read_json(extra_rules_path, RULES_LABEL)))
    return engine


def audit_queue(abi_path: str, calls_path: str, output_path: Optional[str] = None,
                format: str = 'json', rules_path: Optional[str] = None,
                extra_rules_path: Optional[str] = None) -> None:
    """Audit a call queue and print or save the report.

    Both inputs and any rule files are loaded before analysis starts, so an
    input error never produces a partial report.
    """
    logger.info(f"Auditing {calls_path} against {abi_path}")

    engine = build_engine(rules_path, extra_rules_path)
    abi = load_abi(abi_path)
    calls = load_calls(calls_path)

    report = audit(abi, calls, engine=engine, penalties=Penalties.from_settings(get_settings()))

    output = generate_report(report, output_path, format)
    if output_path:
        logger.info(f"Report generated: {output}")
    else:
        print(output)


def list_selectors(abi_path: str) -> None:
    """Print the selector table for an ABI."""
    index = build_selector_index(load_abi(abi_path))
    for selector, descriptor in index.items():
        print(f"{selector}  {descriptor.signature}  {descriptor.mutability.value}")


def list_rules(rules_path: Optional[str] = None, extra_rules_path: Optional[str] = None) -> None:
    """Print the active rule table in evaluation order."""
    for rule in build_engine(rules_path, extra_rules_path).rules:
        print(f"{rule.id}\t{rule.weight}\t{rule.description}")


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog='govaudit',
        description='govaudit - Offline risk audit of queued contract calls',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    # Global arguments
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose output')
    parser.add_argument('--json-logs', action='store_true', help='Emit logs as JSON')

    subparsers = parser.add_subparsers(dest='command', help='Available commands', required=True)

    # Audit command
    audit_parser = subparsers.add_parser('audit', help='Audit a queue of pending calls')
    audit_parser.add_argument('--abi', default=str(settings.DEFAULT_ABI_PATH),
                              help='Path to the ABI JSON (array or compiler artifact)')
    audit_parser.add_argument('--calls', default=str(settings.DEFAULT_CALLS_PATH),
                              help='Path to the queued calls JSON')
    audit_parser.add_argument('--rules', help='JSON rule table replacing the default rules')
    audit_parser.add_argument('--extra-rules', help='JSON rule table appended to the active rules')
    audit_parser.add_argument('-o', '--output', help='Output file path for the report (default: print to stdout)')
    audit_parser.add_argument('--format', choices=['json', 'markdown'], default='json',
                              help='Output format of the report')

    # Selectors command
    selectors_parser = subparsers.add_parser('selectors', help='List the selectors of an ABI')
    selectors_parser.add_argument('--abi', default=str(settings.DEFAULT_ABI_PATH),
                                  help='Path to the ABI JSON (array or compiler artifact)')

    # Rules command
    rules_parser = subparsers.add_parser('rules', help='List the active rule table')
    rules_parser.add_argument('--rules', help='JSON rule table replacing the default rules')
    rules_parser.add_argument('--extra-rules', help='JSON rule table appended to the active rules')

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the govaudit CLI."""
    args = None
    try:
        parser = build_parser()
        args = parser.parse_args(argv)

        setup_logging(verbose=args.verbose, json_logs=args.json_logs)

        if args.command == 'audit':
            audit_queue(
                abi_path=args.abi,
                calls_path=args.calls,
                output_path=args.output,
                format=args.format,
                rules_path=args.rules,
                extra_rules_path=args.extra_rules
            )
        elif args.command == 'selectors':
            list_selectors(args.abi)
        elif args.command == 'rules':
            list_rules(args.rules, args.extra_rules)
        else:
            parser.print_help()
            sys.exit(1)

    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        sys.exit(130)
    except GovAuditError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Error: {e}")
        if args is not None and args.verbose:
            logger.exception("Detailed error:")
        sys.exit(1)


if __name__ == '__main__':
    main()
