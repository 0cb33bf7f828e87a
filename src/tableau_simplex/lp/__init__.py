"""Tableau simplex: builder, pivot engine and result extractor."""

from .builder import build_tableau
from .pivot import pivot, run_pivots
from .extract import extract_report
from .simplex import solve
from .reference import cross_check

__all__ = ["build_tableau", "pivot", "run_pivots", "extract_report", "solve", "cross_check"]
