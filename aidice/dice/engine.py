"""
Formula engine: parsing, validation and rolling of dice formulas.

Grammar: N "d" M [("+"|"-") K]

    N  die count, >= 1
    M  faces per die, >= 2
    K  optional flat modifier

The "d" separator is case-insensitive. Surrounding whitespace is ignored,
inner whitespace is not allowed. Formulas beyond the configured DiceSettings
limits are rejected the same way malformed ones are.

Malformed input is an expected case: roll_safe() returns None for it and
reports the formula on the diagnostic logger instead of raising.
"""

from __future__ import annotations

import logging
import random
import re

from aidice.config.logging import get_logger
from aidice.config.settings import DiceSettings, get_settings
from aidice.dice.models import Formula, InvalidFormulaError, RollOutcome

_FORMULA_RE = re.compile(
    r"(?P<count>\d+)[dD](?P<sides>\d+)(?:(?P<sign>[+-])(?P<modifier>\d+))?",
    re.ASCII,
)


class FormulaEngine:
    """
    Parses and rolls dice formulas.

    The engine keeps no state between calls; the only collaborators are the
    injected random generator and logger.

    Args:
        settings: Resource limits for formulas (default: get_settings().dice)
        rng: Random generator. When omitted, a generator seeded from
             settings.seed is created (unseeded if seed is None).
        logger: Diagnostic logger for rejected formulas
    """

    def __init__(
        self,
        settings: DiceSettings | None = None,
        rng: random.Random | None = None,
        logger: logging.Logger | None = None,
    ):
        self._settings = settings or get_settings().dice
        self._rng = rng if rng is not None else random.Random(self._settings.seed)
        self._logger = logger or get_logger(__name__)

    def parse(self, formula: str) -> Formula:
        """
        Parse a formula string into a Formula.

        Args:
            formula: Dice formula, e.g. "1d20" or "2d6+3"

        Returns:
            The parsed Formula

        Raises:
            InvalidFormulaError: If the formula is malformed or out of range
        """
        if not isinstance(formula, str):
            raise InvalidFormulaError(formula, "formula must be a string")

        text = formula.strip()
        if not text:
            raise InvalidFormulaError(formula, "formula is empty")

        # Checked before int() so huge digit runs never reach the parser
        if len(text) > self._settings.max_formula_length:
            raise InvalidFormulaError(
                formula, f"longer than {self._settings.max_formula_length} characters"
            )

        match = _FORMULA_RE.fullmatch(text)
        if match is None:
            raise InvalidFormulaError(formula, "expected the form NdM, NdM+K or NdM-K")

        count = int(match.group("count"))
        sides = int(match.group("sides"))
        modifier = int(match.group("modifier") or 0)
        if match.group("sign") == "-":
            modifier = -modifier

        if count < 1:
            raise InvalidFormulaError(formula, "die count must be at least 1")
        if count > self._settings.max_dice:
            raise InvalidFormulaError(
                formula, f"die count exceeds {self._settings.max_dice}"
            )
        if sides < 2:
            raise InvalidFormulaError(formula, "dice must have at least 2 faces")
        if sides > self._settings.max_sides:
            raise InvalidFormulaError(
                formula, f"face count exceeds {self._settings.max_sides}"
            )
        if abs(modifier) > self._settings.max_modifier:
            raise InvalidFormulaError(
                formula, f"modifier exceeds {self._settings.max_modifier}"
            )

        return Formula(text=text, count=count, sides=sides, modifier=modifier)

    def validate(self, formula: str) -> bool:
        """Return True if the formula parses and is within limits."""
        try:
            self.parse(formula)
        except InvalidFormulaError:
            return False
        return True

    def roll(self, formula: str | Formula) -> RollOutcome:
        """
        Roll a formula.

        Callers must validate string input first; an invalid string raises
        InvalidFormulaError here. Use roll_safe() for untrusted input.

        Args:
            formula: Formula string or an already-parsed Formula

        Returns:
            RollOutcome with rolls in generation order
        """
        parsed = formula if isinstance(formula, Formula) else self.parse(formula)
        rolls = [self._rng.randint(1, parsed.sides) for _ in range(parsed.count)]
        return RollOutcome(total=sum(rolls) + parsed.modifier, rolls=rolls)

    def roll_safe(self, formula: str) -> RollOutcome | None:
        """
        Roll a formula, returning None instead of raising for invalid input.

        Rejected formulas are logged at ERROR level with the reason.
        """
        try:
            parsed = self.parse(formula)
        except InvalidFormulaError as e:
            self._logger.error(f"Invalid dice formula provided: {formula!r} ({e.reason})")
            return None

        outcome = self.roll(parsed)
        self._logger.debug(f"Rolled {parsed}: {outcome.rolls} -> {outcome.total}")
        return outcome
