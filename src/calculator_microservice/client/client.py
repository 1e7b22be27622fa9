"""HTTP client."""
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, FilePath, IPvAnyAddress

from calculator_microservice.common.operations import OPERATIONS


class CalculatorClient(BaseModel):
    """
    HTTP client for the calculator microservice.

    The HTTP client:
    - calls a single operation endpoint and returns the JSON body
    - replays a text file of operations (one ``<operation> <num1> [num2]`` per line)
    - writes one result or error line per operation into an output file
    """

    # Make the Pydantic instance immutable (read-only), to prevent errors
    # that could be caused by changes to the network configuration during execution.
    model_config = ConfigDict(frozen=True)

    host: IPvAnyAddress = Field(default="127.0.0.1", description="Server host address")
    port: int = Field(default=3000, ge=1, le=65535, description="Server TCP port")
    timeout: float = Field(default=5.0, gt=0, description="Request timeout in seconds")

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def _session(self) -> httpx.Client:
        return httpx.Client(base_url=self.base_url, timeout=self.timeout)

    @staticmethod
    def _request(
        session: httpx.Client, operation: str, num1: str, num2: Optional[str] = None
    ) -> Dict[str, Any]:
        params = {"num1": num1}
        if num2 is not None:
            params["num2"] = num2
        response = session.get(f"/{operation}", params=params)
        # 400 carries a structured error body, anything else unexpected is raised
        if response.status_code != 400:
            response.raise_for_status()
        return response.json()

    def compute(self, operation: str, num1: str, num2: Optional[str] = None) -> Dict[str, Any]:
        """
        Call one operation endpoint.

        :param str operation: Operation name, e.g. ``add``
        :param str num1: First operand, sent as-is
        :param Optional[str] num2: Second operand, omitted when None

        :return: Decoded JSON body (``result`` or ``error`` key)
        :rtype: Dict[str, Any]
        :raises httpx.HTTPError: On transport failures or unexpected status codes
        """
        with self._session() as session:
            return self._request(session, operation, num1, num2)

    def run_file(self, input_file: FilePath, output_file: Path) -> None:
        """
        Send every operation of ``input_file`` to the server and write the results to ``output_file``.

        Lines that cannot be sent (unknown operation, wrong operand count) are
        reported in the output file instead of aborting the run.

        :param FilePath input_file: Path to the operations file
        :param Path output_file: Path where results will be written

        :return: None
        :raises httpx.HTTPError: If the server cannot be reached
        """
        lines: List[str] = [line.strip() for line in input_file.read_text().splitlines() if line.strip()]

        with self._session() as session, output_file.open("w", encoding="utf-8") as f_out:
            for line in lines:
                name, *args = line.split()
                operation = OPERATIONS.get(name)
                if operation is None:
                    f_out.write(f"{line} -> ERROR: Unknown operation: {name}\n")
                elif len(args) != operation.arity:
                    f_out.write(f"{line} -> ERROR: {name} expects {operation.arity} operand(s), got {len(args)}\n")
                else:
                    payload = self._request(session, name, *args)
                    if "result" in payload:
                        # Non-finite results arrive as null
                        result = "null" if payload["result"] is None else payload["result"]
                        f_out.write(f"{line} = {result}\n")
                    else:
                        f_out.write(f"{line} -> ERROR: {payload['error']}\n")
                # Flush so progress survives an interrupted run
                f_out.flush()
