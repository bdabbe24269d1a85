"""CLI entry point for running the Antijection node locally."""

import argparse
import json
import sys
from typing import Any

from antijection_node.client import AntijectionClient
from antijection_node.config import Settings, get_settings_eager
from antijection_node.credentials.settings import SettingsCredentialBackend
from antijection_node.exceptions import ConfigError, NodeOperationError
from antijection_node.logging_config import configure_logging
from antijection_node.models import DetectionMethod, RuleCategory
from antijection_node.node import AntijectionNode


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="antijection",
        description="Antijection - prompt injection and safety detection",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    detect_parser = subparsers.add_parser(
        "detect",
        help="Analyze prompts (argument, --file, or stdin)",
    )
    detect_parser.add_argument("prompt", nargs="?", help="Prompt to analyze")
    detect_parser.add_argument(
        "--file",
        help="JSON file with a list of item parameter objects",
    )
    detect_parser.add_argument(
        "--method",
        choices=[m.value for m in DetectionMethod],
        help="Detection method (default: from config)",
    )
    detect_parser.add_argument(
        "--continue-on-fail",
        action="store_true",
        default=None,
        help="Emit error records for failing items instead of aborting",
    )
    detect_parser.add_argument(
        "--disable-rules",
        action="store_true",
        help="Turn off heuristic rule-based detection",
    )
    detect_parser.add_argument(
        "--disable-category",
        action="append",
        choices=[c.value for c in RuleCategory],
        default=[],
        metavar="CATEGORY",
        help="Rule category to disable (repeatable)",
    )
    detect_parser.add_argument(
        "--block",
        action="append",
        default=[],
        metavar="KEYWORD",
        help="Keyword or regex to block (repeatable)",
    )

    subparsers.add_parser("test-credentials", help="Check the configured API key")
    subparsers.add_parser("serve", help="Run the MCP server over stdio")
    return parser


def _rule_settings(args: argparse.Namespace) -> dict[str, Any] | None:
    if not (args.disable_rules or args.disable_category or args.block):
        return None
    return {
        "enabled": not args.disable_rules,
        "disabledCategories": args.disable_category,
        "blockedKeywords": "\n".join(args.block),
    }


def _load_items(args: argparse.Namespace, settings: Settings) -> list[dict[str, Any]]:
    """Collect item parameters from the prompt argument, a file or stdin."""
    if args.file:
        with open(args.file) as f:
            items = json.load(f)
        if not isinstance(items, list):
            raise ValueError(f"{args.file} must contain a JSON list of objects")
    else:
        prompt = args.prompt if args.prompt is not None else sys.stdin.read()
        items = [{"prompt": prompt}]

    method = args.method or settings.detection_method.value
    rule_settings = _rule_settings(args)
    for item in items:
        if not isinstance(item, dict):
            raise ValueError("Each item must be a JSON object")
        item.setdefault("detectionMethod", method)
        if rule_settings is not None:
            item.setdefault("ruleSettings", rule_settings)
    return items


def _handle_detect(args: argparse.Namespace, settings: Settings) -> int:
    credentials = SettingsCredentialBackend(settings).get_credentials()
    items = _load_items(args, settings)
    continue_on_fail = (
        settings.continue_on_fail if args.continue_on_fail is None else args.continue_on_fail
    )

    try:
        results = AntijectionNode().execute(
            items, credentials, continue_on_fail=continue_on_fail
        )
    except NodeOperationError as e:
        print(f"✗ Item {e.item_index}: {e}", file=sys.stderr)
        return 1

    print(json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False))
    return 0


def _handle_test_credentials(settings: Settings) -> int:
    credentials = SettingsCredentialBackend(settings).get_credentials()
    with AntijectionClient(credentials) as client:
        result = client.test_credentials()
    if result.ok:
        print(f"✓ Credentials OK ({credentials.base_url})")
        return 0
    print(f"✗ {result.message}", file=sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "serve":
        from antijection_node.server import main as serve

        serve()
        return 0

    try:
        settings = get_settings_eager()
        configure_logging(settings.log_level)
        if args.command == "detect":
            return _handle_detect(args, settings)
        if args.command == "test-credentials":
            return _handle_test_credentials(settings)
    except (ConfigError, OSError, ValueError) as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1

    return 1


if __name__ == "__main__":
    sys.exit(main())
