"""Configuration constants. Input parsing lives in ``graphite_ci.config.inputs``."""

from .constants import (
    CALLER_NAME,
    DEFAULT_ENDPOINT,
    DEFAULT_TIMEOUT_SECONDS,
    GATE_PATH,
    OPTIMIZER_PATH,
)

__all__ = [
    "CALLER_NAME",
    "DEFAULT_ENDPOINT",
    "DEFAULT_TIMEOUT_SECONDS",
    "GATE_PATH",
    "OPTIMIZER_PATH",
]
