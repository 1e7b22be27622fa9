"""Parse and validate raw query-string operands."""
import logging
import re
from typing import Optional

from calculator_microservice.common.models import (
    ErrorKind,
    Operands,
    ValidationFailure,
    ValidationResult,
)

# ASCII decimal: optional sign, digits with optional fraction, optional exponent
DECIMAL_PATTERN = re.compile(r"\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*", re.ASCII)
INFINITY_PATTERN = re.compile(r"\s*[+-]?Infinity\s*", re.ASCII)


def parse_number(raw: str) -> Optional[float]:
    """
    Parse a decimal number, returning None when the string is not one.

    Accepts ASCII integers, decimals and exponents, plus the literal
    ``Infinity`` with an optional sign. Digit grouping (``1_000``), non-ASCII
    digits, ``inf`` and ``nan`` are refused.

    :param str raw: Raw operand string

    :return: Parsed value, or None if invalid
    :rtype: Optional[float]
    """
    if DECIMAL_PATTERN.fullmatch(raw) or INFINITY_PATTERN.fullmatch(raw):
        return float(raw)
    return None


def _fail(logger: logging.Logger, kind: ErrorKind, message: str) -> ValidationFailure:
    logger.error(message)
    return ValidationFailure(kind=kind, error=message)


def validate_params(
    logger: logging.Logger,
    num1: Optional[str],
    num2: Optional[str] = None,
    single: bool = False,
) -> ValidationResult:
    """
    Validate one or two raw operands.

    A missing or empty operand yields a MissingParameter failure, an operand
    that is not a decimal number yields an InvalidNumber failure. Every
    failure is logged at error level.

    :param logging.Logger logger: Logger receiving failure records
    :param Optional[str] num1: Raw first operand
    :param Optional[str] num2: Raw second operand, ignored when ``single`` is set
    :param bool single: Whether only ``num1`` is required

    :return: Parsed operands or a validation failure
    :rtype: ValidationResult
    """
    if single:
        if not num1:
            return _fail(logger, ErrorKind.MISSING_PARAMETER, f"Missing num1 parameter: num1={num1}")
        n1 = parse_number(num1)
        if n1 is None:
            return _fail(logger, ErrorKind.INVALID_NUMBER, f"Invalid num1 value: {num1}")
        return Operands(n1=n1)

    if not num1 or not num2:
        return _fail(
            logger,
            ErrorKind.MISSING_PARAMETER,
            f"Missing num1 or num2 parameter: num1={num1}, num2={num2}",
        )
    n1 = parse_number(num1)
    n2 = parse_number(num2)
    if n1 is None or n2 is None:
        return _fail(
            logger,
            ErrorKind.INVALID_NUMBER,
            f"Invalid num1 or num2 value: num1={num1}, num2={num2}",
        )
    return Operands(n1=n1, n2=n2)
