"""HTTP handlers: one GET endpoint per arithmetic operation."""
import logging
from typing import Callable, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from calculator_microservice.common.models import (
    CalculationResponse,
    ErrorResponse,
    ValidationFailure,
)
from calculator_microservice.common.operations import OPERATIONS, CalculationError, Operation
from calculator_microservice.common.validator import validate_params


def get_logger(request: Request) -> logging.Logger:
    """Dependency returning the logger the application was built with."""
    return request.app.state.logger


def _error(message: str) -> JSONResponse:
    body = ErrorResponse(error=message)
    return JSONResponse(status_code=body.statuscode, content=body.model_dump())


def dispatch(
    operation: Operation,
    logger: logging.Logger,
    num1: Optional[str],
    num2: Optional[str] = None,
) -> JSONResponse:
    """
    Validate raw operands, apply the operation and build the HTTP response.

    :param Operation operation: Operation to apply
    :param logging.Logger logger: Logger receiving diagnostic records
    :param Optional[str] num1: Raw first operand
    :param Optional[str] num2: Raw second operand

    :return: 200 with the result, or 400 with the failure message
    :rtype: JSONResponse
    """
    validation = validate_params(logger, num1, num2, single=operation.arity == 1)
    if isinstance(validation, ValidationFailure):
        return _error(validation.error)

    n1, n2 = validation.n1, validation.n2
    try:
        result = operation.compute(n1, n2)
    except CalculationError as exc:
        logger.error(str(exc))
        return _error(str(exc))

    logger.info(operation.describe(n1, n2, result))
    body = CalculationResponse(result=result)
    return JSONResponse(status_code=body.statuscode, content=body.model_dump())


def _make_handler(operation: Operation) -> Callable[..., JSONResponse]:
    if operation.arity == 1:

        def unary_handler(
            num1: Optional[str] = Query(default=None, description="Operand"),
            logger: logging.Logger = Depends(get_logger),
        ) -> JSONResponse:
            return dispatch(operation, logger, num1)

        return unary_handler

    def binary_handler(
        num1: Optional[str] = Query(default=None, description="First operand"),
        num2: Optional[str] = Query(default=None, description="Second operand"),
        logger: logging.Logger = Depends(get_logger),
    ) -> JSONResponse:
        return dispatch(operation, logger, num1, num2)

    return binary_handler


def build_router() -> APIRouter:
    """Create a router exposing every operation in OPERATIONS as ``GET /<name>``."""
    router = APIRouter(tags=["calculator"])
    for operation in OPERATIONS.values():
        router.add_api_route(
            f"/{operation.name}",
            _make_handler(operation),
            methods=["GET"],
            name=operation.name,
            summary=operation.label,
            response_model=CalculationResponse,
            responses={400: {"model": ErrorResponse}},
        )
    return router
