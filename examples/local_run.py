"""
Example: ask a local decision service about a fake pull request run.

Start a service on http://localhost:8080 answering POST /api/v1/ci/optimizer,
then run:

    python examples/local_run.py
"""

import asyncio
import logging

from graphite_ci import run
from graphite_ci.github.core import ActionsCore
from graphite_ci.observability import configure_logging

ENV = {
    "GITHUB_REPOSITORY": "withgraphite/monorepo",
    "GITHUB_SHA": "0f1e2d3c4b5a69788796a5b4c3d2e1f00f1e2d3c",
    "GITHUB_REF": "refs/pull/42/merge",
    "GITHUB_HEAD_REF": "feature/skip-ci",
    "GITHUB_WORKFLOW": "CI",
    "GITHUB_JOB": "test",
    "GITHUB_RUN_ID": "1",
    "GITHUB_EVENT_NAME": "pull_request",
    "INPUT_GRAPHITE_TOKEN": "local-token",
    "INPUT_ENDPOINT": "http://localhost:8080",
    "INPUT_TIMEOUT": "5",
    "INPUT_POLICY": "optimizer",
}


async def main():
    configure_logging(verbose=True)
    core = ActionsCore(ENV)

    outcome = await run(ENV, core=core, read_event=lambda path: {"pull_request": {"number": 42}})

    logging.getLogger("graphite_ci.examples").info(f"Outcome: {outcome}")
    print(f"skip output: {core.outputs.get('skip')}, exit code: {core.exit_code}")


if __name__ == "__main__":
    asyncio.run(main())
