"""
Graphite CI constants.

Central location for service paths, defaults and GitHub API metadata.
"""

# Decision service
DEFAULT_ENDPOINT = "https://api.graphite.dev"
GATE_PATH = "/api/v1/ci"
OPTIMIZER_PATH = "/api/v1/ci/optimizer"
DEFAULT_TIMEOUT_SECONDS = 30

# Identity reported to the decision service
CALLER_NAME = "graphite-ci"

# Context tag for runs originating from GitHub Actions
CONTEXT_KIND = "GITHUB_ACTIONS"

# Events that are never optimized away
MANUAL_EVENTS = frozenset({"workflow_dispatch"})

# GitHub REST API
DEFAULT_GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
GITHUB_ACCEPT = "application/vnd.github+json"

# Messages surfaced to the workflow log
INVALID_TOKEN_MESSAGE = "Invalid authentication. Please update your Graphite CI token."
SKIPPING_CHECKS = "Skipping Graphite checks."
