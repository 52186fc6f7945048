"""Scanning services: tree walk and reporting."""

from .reporter import CHECKS, Finding, Reporter, iter_findings
from .walker import TreeWalker, list_subdirectories

__all__ = [
    # reporter
    "CHECKS",
    "Finding",
    "Reporter",
    "iter_findings",
    # walker
    "TreeWalker",
    "list_subdirectories",
]
