"""HTTP server exposing the calculator operations."""
from contextlib import asynccontextmanager
import logging
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from pydantic import BaseModel, ConfigDict, Field, IPvAnyAddress, field_validator
import uvicorn

from calculator_microservice.common.logger import close_logger, create_logger
from calculator_microservice.server.routes import build_router

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class CalculatorServer(BaseModel):
    """
    FastAPI application factory and runner.

    Features:
        - Builds the service logger from its own configuration.
        - Injects the logger into every handler through ``app.state``.
        - Serves the application with uvicorn.
    """

    # Make the Pydantic instance immutable (read-only), the configuration
    # must not change once the server is bound.
    model_config = ConfigDict(frozen=True)

    host: IPvAnyAddress = Field(default="127.0.0.1", description="Server host address")
    port: int = Field(default=3000, ge=1, le=65535, description="Server TCP port")
    log_dir: Path = Field(default=Path("logs"), description="Directory for combined.log and error.log")
    log_level: str = Field(default="INFO", description="Minimum level recorded")

    @field_validator("log_level")
    def log_level_must_be_known(cls, v: str) -> str:
        """Ensure the log level is one the logging module understands."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level

    def create_app(self, logger: Optional[logging.Logger] = None) -> FastAPI:
        """
        Build the FastAPI application.

        :param Optional[logging.Logger] logger: Logger to inject, built from the
            configuration when omitted

        :return: Configured application
        :rtype: FastAPI
        """
        if logger is None:
            logger = create_logger(self.log_dir, self.log_level)

        port = self.port

        @asynccontextmanager
        async def lifespan(app: FastAPI) -> AsyncIterator[None]:
            app.state.logger.info(f"Server started on port {port}")
            yield
            app.state.logger.info("Server stopped")

        app = FastAPI(
            title="Calculator Microservice",
            description="Arithmetic operations over HTTP GET.",
            lifespan=lifespan,
        )
        app.state.logger = logger
        app.include_router(build_router())
        return app

    def start(self) -> None:
        """
        Build the application and serve it until interrupted.

        :return: None
        """
        logger = create_logger(self.log_dir, self.log_level)
        app = self.create_app(logger)
        logger.info(f"🖥️ Calculator microservice running at http://{self.host}:{self.port}")
        try:
            uvicorn.run(app, host=str(self.host), port=self.port, log_level=self.log_level.lower())
        finally:
            close_logger(logger)
