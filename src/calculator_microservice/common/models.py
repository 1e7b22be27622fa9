"""Pydantic models for operands, validation results and HTTP responses."""
from enum import Enum
import math
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ErrorKind(str, Enum):
    """Client-input error taxonomy."""

    MISSING_PARAMETER = "MissingParameter"
    INVALID_NUMBER = "InvalidNumber"
    DIVISION_BY_ZERO = "DivisionByZero"


class Operands(BaseModel):
    """Successfully parsed operands. ``n2`` is None for single-operand operations."""

    model_config = ConfigDict(frozen=True)

    status: Literal["ok"] = "ok"
    n1: float = Field(..., description="First operand")
    n2: Optional[float] = Field(default=None, description="Second operand, absent for sqrt")


class ValidationFailure(BaseModel):
    """Operand parsing failure with a human-readable message."""

    model_config = ConfigDict(frozen=True)

    status: Literal["error"] = "error"
    kind: ErrorKind = Field(..., description="Which validation rule failed")
    error: str = Field(..., description="Message returned to the client")


# Tagged result of operand validation: check ``status`` (or isinstance) before use
ValidationResult = Union[Operands, ValidationFailure]


class CalculationResponse(BaseModel):
    """Body of a successful calculation (HTTP 200)."""

    statuscode: int = Field(default=200, description="HTTP status code echoed in the body")
    result: Optional[float] = Field(..., description="Computed value, null when not finite")

    @field_validator("result")
    def non_finite_as_null(cls, v: Optional[float]) -> Optional[float]:
        """JSON has no NaN or Infinity, so such results are rendered as null."""
        if v is not None and not math.isfinite(v):
            return None
        return v


class ErrorResponse(BaseModel):
    """Body of a rejected calculation (HTTP 400)."""

    statuscode: int = Field(default=400, description="HTTP status code echoed in the body")
    error: str = Field(..., description="Human-readable failure description")
