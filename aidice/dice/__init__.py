"""
Dice formula engine.

Parses "NdM+K" formulas and rolls them into RollOutcome values.
"""

from aidice.dice.engine import FormulaEngine
from aidice.dice.models import Formula, InvalidFormulaError, RollOutcome

__all__ = ["Formula", "FormulaEngine", "InvalidFormulaError", "RollOutcome"]
