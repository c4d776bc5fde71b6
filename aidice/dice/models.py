"""
Data structures for the dice formula engine.

- Formula: a parsed, range-checked "NdM+K" dice formula
- RollOutcome: the total and individual die results of one roll
- InvalidFormulaError: raised by FormulaEngine.parse for rejected formulas
"""

from pydantic import BaseModel, ConfigDict, Field


class InvalidFormulaError(ValueError):
    """Raised when a dice formula is malformed or outside configured limits."""

    def __init__(self, formula: object, reason: str):
        self.formula = formula
        self.reason = reason
        super().__init__(f"Invalid dice formula {formula!r}: {reason}")


class Formula(BaseModel):
    """
    A validated dice formula.

    Only FormulaEngine.parse builds these from user input, so the field
    constraints here are a second line of checks rather than the grammar.
    """

    text: str = Field(description="Formula as supplied by the caller, stripped")
    count: int = Field(ge=1, description="Number of dice rolled (N)")
    sides: int = Field(ge=2, description="Faces per die (M)")
    modifier: int = Field(default=0, description="Flat modifier added to the sum (K)")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if self.modifier:
            return f"{self.count}d{self.sides}{self.modifier:+d}"
        return f"{self.count}d{self.sides}"


class RollOutcome(BaseModel):
    """
    Result of rolling a Formula.

    Field order matters: the JSON form handed to agents is
    {"total": ..., "rolls": [...]}. `rolls` keeps generation order.
    """

    total: int = Field(description="Sum of all rolls plus the formula's modifier")
    rolls: list[int] = Field(description="Individual die results in the order rolled")

    model_config = ConfigDict(frozen=True)

    def to_json(self) -> str:
        """Serialize to compact JSON, e.g. '{"total":25,"rolls":[17,8]}'."""
        return self.model_dump_json()
