"""Output comparison exports."""

from .comparison_rules import ComparisonMode, outputs_match

__all__ = ["ComparisonMode", "outputs_match"]
