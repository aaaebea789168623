"""Verdict reporting exports."""

from .console_reporter import PLAIN_SYMBOLS, UNICODE_SYMBOLS, ConsoleVerdictReporter, SymbolSet
from .verdict_models import CaseVerdict, VerdictReporter, VerdictStatus, build_case_verdict

__all__ = [
    "CaseVerdict",
    "VerdictReporter",
    "VerdictStatus",
    "build_case_verdict",
    "ConsoleVerdictReporter",
    "SymbolSet",
    "PLAIN_SYMBOLS",
    "UNICODE_SYMBOLS",
]
