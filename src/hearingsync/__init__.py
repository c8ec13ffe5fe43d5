"""Hearing notice ingestion and calendar reconciliation."""

from .classifier import classify
from .notice_parser import parse_notice
from .reconciler import reconcile

__version__ = "0.1.0"

__all__ = ["classify", "parse_notice", "reconcile", "__version__"]
