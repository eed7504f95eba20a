"""CLI entry point for the Graphite CI action."""

import argparse
import asyncio

from .main import run
from .github.core import ActionsCore
from .observability.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Ask Graphite whether this CI run can be skipped",
        epilog="Flags override the INPUT_* environment variables set by the Actions runner."
    )
    parser.add_argument('policy', nargs='?', choices=['gate', 'optimizer'],
                        help='Post-decision policy (default: INPUT_POLICY or "gate")')
    parser.add_argument('--graphite-token', help='Graphite CI token')
    parser.add_argument('--github-token', help='GitHub token used to cancel the run (gate)')
    parser.add_argument('--endpoint', help='Decision service base URL')
    parser.add_argument('--timeout', help='Request timeout in whole seconds')
    parser.add_argument('--cancel-on-any-response', action='store_true', default=None,
                        help='Gate only: cancel after any non-401 response as well')
    parser.add_argument('--verbose', '-v', action='store_true', help='Emit debug logs')
    return parser


def main(argv=None) -> int:
    """Main CLI function. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)

    overrides = {
        'policy': args.policy,
        'graphite_token': args.graphite_token,
        'github_token': args.github_token,
        'endpoint': args.endpoint,
        'timeout': args.timeout,
        'cancel_on_any_response': args.cancel_on_any_response,
    }

    core = ActionsCore()
    asyncio.run(run(overrides=overrides, core=core))
    return core.exit_code
