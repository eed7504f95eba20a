from .client import DecisionClient

__all__ = ["DecisionClient"]
