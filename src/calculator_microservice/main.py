"""
Command-line entrypoint.

Sub-commands:
- ``serve``: run the calculator microservice in the foreground
- ``run FILE``: start a server process, replay an operations file through the
  HTTP client, then stop the server

``run`` validates, end to end, the HTTP routing, the logging setup and the
arithmetic of every operation listed in the file.
"""

import argparse
from multiprocessing import Process
from pathlib import Path
import time
from typing import List, Optional

from pydantic import BaseModel, FilePath, IPvAnyAddress, ValidationError

from calculator_microservice.client.client import CalculatorClient
from calculator_microservice.server.server import CalculatorServer


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    command : str
        Sub-command to execute.
    host : IPvAnyAddress
        Address the server binds and the client connects to.
    port : int
        Server TCP port.
    log_dir : Path
        Directory for the log files.
    log_level : str
        Minimum level recorded.
    file_path : Optional[FilePath]
        Operations file, required by ``run``.
    """

    command: str
    host: IPvAnyAddress
    port: int
    log_dir: Path
    log_level: str
    file_path: Optional[FilePath] = None


def run_server(server: CalculatorServer) -> None:
    """
    Start the calculator server.

    The server runs in its own process when used by ``run``.
    """
    server.start()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Calculator microservice")
    parser.add_argument("--host", default="127.0.0.1", help="Server host address")
    parser.add_argument("--port", type=int, default=3000, help="Server TCP port")
    parser.add_argument("--log-dir", default="logs", help="Directory for combined.log and error.log")
    parser.add_argument("--log-level", default="INFO", help="Minimum level recorded")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("serve", help="Run the HTTP server")
    run_parser = subparsers.add_parser("run", help="Replay an operations file against a fresh server")
    run_parser.add_argument("file_path", help="Path to the file containing operations")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return CliArgs(**vars(args))
    except ValidationError as exc:
        parser.error(str(exc))


def build_output_path(input_path: Path) -> Path:
    """
    Construct the output file path next to the input file.

    Examples
    --------
    input: resources/operations.txt
    output: resources/operations_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    return input_path.with_name(f"{input_path.stem}_results.txt")


def main(argv: Optional[List[str]] = None) -> None:
    cli_args = parse_args(argv)
    try:
        server = CalculatorServer(
            host=cli_args.host,
            port=cli_args.port,
            log_dir=cli_args.log_dir,
            log_level=cli_args.log_level,
        )
    except ValidationError as exc:
        build_parser().error(str(exc))

    if cli_args.command == "serve":
        run_server(server)
        return

    input_path: Path = Path(cli_args.file_path)
    output_path: Path = build_output_path(input_path)

    server_process = Process(target=run_server, args=(server,))
    server_process.start()

    # Give the server time to start listening
    time.sleep(1)

    try:
        client = CalculatorClient(host=cli_args.host, port=cli_args.port)
        client.run_file(input_path, output_path)
    finally:
        # Ensure the server is always stopped
        server_process.terminate()
        server_process.join()


if __name__ == "__main__":
    main()
