"""
Evaluation helpers for formation runs.

This package contains:
- logger.py  : CSV log of slot tracking, one row per agent per step
- metrics.py : pandas summaries of such a log
"""

from . import logger
from . import metrics

__all__ = ["logger", "metrics"]
