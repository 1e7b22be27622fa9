"""Arithmetic rules behind each calculator endpoint."""
import math
import operator
from typing import Callable, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from calculator_microservice.common.models import ErrorKind


class CalculationError(ValueError):
    """Base class for arithmetic failures reported back to the client."""

    kind: ErrorKind


class DivisionByZeroError(CalculationError):
    """Raised when dividing by zero."""

    kind = ErrorKind.DIVISION_BY_ZERO

    def __init__(self, n1: float, n2: float):
        super().__init__(f"Division by zero is not allowed: num1={n1}, num2={n2}")


def divide(n1: float, n2: float) -> float:
    """
    Divide ``n1`` by ``n2``.

    :raises DivisionByZeroError: If ``n2`` is zero
    """
    if n2 == 0:
        raise DivisionByZeroError(n1, n2)
    return n1 / n2


def exponentiate(n1: float, n2: float) -> float:
    """
    Raise ``n1`` to ``n2``.

    Overflow and zero raised to a negative power give infinity, a complex
    result gives NaN.
    """
    if n1 == 0 and n2 < 0:
        # -0.0 to an odd negative integer keeps the sign
        odd = float(n2).is_integer() and n2 % 2 == 1
        return math.copysign(math.inf, n1) if odd else math.inf
    try:
        return math.pow(n1, n2)
    except OverflowError:
        return math.inf
    except ValueError:
        return math.nan


def modulo(n1: float, n2: float) -> float:
    """Truncated remainder: the result carries the sign of ``n1``. Modulo by zero gives NaN."""
    try:
        return math.fmod(n1, n2)
    except ValueError:
        return math.nan


def square_root(n1: float) -> float:
    """Square root. Negative input gives NaN rather than an error."""
    if n1 < 0:
        return math.nan
    return math.sqrt(n1)


class Operation(BaseModel):
    """A single arithmetic operation exposed as an endpoint."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Endpoint path segment, e.g. 'add'")
    label: str = Field(..., description="Human-readable name used in log records")
    symbol: str = Field(default="", description="Infix symbol used in log records")
    arity: int = Field(..., ge=1, le=2, description="Number of operands")
    fn: Callable[..., float] = Field(..., description="Arithmetic rule")

    def compute(self, n1: float, n2: Optional[float] = None) -> float:
        """
        Apply the rule to the operands.

        :param float n1: First operand
        :param Optional[float] n2: Second operand, ignored for unary operations

        :return: Computed value
        :rtype: float
        :raises CalculationError: If the operands are rejected by the rule
        """
        if self.arity == 1:
            return self.fn(n1)
        return self.fn(n1, n2)

    def describe(self, n1: float, n2: Optional[float], result: float) -> str:
        """Render the log line for a completed computation."""
        if self.arity == 1:
            return f"{self.label}: {self.name}({n1}) = {result}"
        return f"{self.label}: {n1} {self.symbol} {n2} = {result}"


OPERATIONS: Dict[str, Operation] = {
    op.name: op
    for op in (
        Operation(name="add", label="Addition", symbol="+", arity=2, fn=operator.add),
        Operation(name="subtract", label="Subtraction", symbol="-", arity=2, fn=operator.sub),
        Operation(name="multiply", label="Multiplication", symbol="*", arity=2, fn=operator.mul),
        Operation(name="divide", label="Division", symbol="/", arity=2, fn=divide),
        Operation(name="exponentiate", label="Exponentiation", symbol="^", arity=2, fn=exponentiate),
        Operation(name="sqrt", label="Square root", arity=1, fn=square_root),
        Operation(name="modulo", label="Modulo", symbol="%", arity=2, fn=modulo),
    )
}
