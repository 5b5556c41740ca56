import argparse
import os
import shlex
from pathlib import Path
from typing import Mapping, Optional, Sequence, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from utils.sync import DEFAULT_SYNC_COMMAND, DEFAULT_SYNC_TIMEOUT

USAGE = "greenhorn-deploy [address:port] [path_to_repo]"

class ConfigurationError(ValueError):
    """Startup configuration is missing or invalid."""

class Settings(BaseModel):
    """Process wide configuration, built once at startup and never mutated."""
    model_config = ConfigDict(frozen=True)

    repo_path: Path = Field(..., description="Working copy that gets pulled")
    secret: str = Field(..., repr=False, description="Shared webhook secret")
    repo_name: str = Field(..., description="Expected repository full name, e.g. 'owner/repo'")
    branch: str = Field(default="refs/heads/main", description="Expected push ref")
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=3000)
    sync_command: Tuple[str, ...] = Field(default=DEFAULT_SYNC_COMMAND)
    sync_timeout: float = Field(default=DEFAULT_SYNC_TIMEOUT, description="Seconds before the pull is killed")
    log_level: str = Field(default="INFO")

def parse_address(address: str) -> Tuple[str, int]:
    """Split 'host:port' or '[ipv6]:port' into its parts."""
    host, separator, port = address.rpartition(":")
    if not separator or not host:
        raise ConfigurationError(f"Address:port not valid: {address!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        port_number = int(port)
    except ValueError:
        raise ConfigurationError(f"Address:port not valid: {address!r}")
    if not 0 < port_number < 65536:
        raise ConfigurationError(f"Port out of range: {port_number}")
    return host, port_number

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="greenhorn-deploy",
        usage=USAGE,
        description="Pull a git working copy whenever GitHub reports a push to the watched branch.",
    )
    parser.add_argument("address", nargs="?", help="Listen address, e.g. 127.0.0.1:3000")
    parser.add_argument("path", nargs="?", help="Path to the working copy")
    parser.add_argument("--branch", help="Expected ref (default: refs/heads/main)")
    parser.add_argument("--repo", help="Expected repository full name, e.g. owner/repo")
    parser.add_argument("--timeout", type=float, help="Seconds before the pull is killed")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    return parser

def load_settings(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Merge command line arguments over environment variables.

    A .env file in the working directory is loaded first when reading the real
    environment. Raises ConfigurationError for anything missing or invalid.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    args = build_parser().parse_args(argv)

    secret = environ.get("GREENHORN_DEPLOY_SIGNATURE")
    if not secret:
        raise ConfigurationError("GREENHORN_DEPLOY_SIGNATURE not set")

    repo_name = args.repo or environ.get("GREENHORN_DEPLOY_REPO")
    if not repo_name:
        raise ConfigurationError("Repository name not set, pass --repo or set GREENHORN_DEPLOY_REPO")

    address = args.address or environ.get("GREENHORN_DEPLOY_ADDRESS")
    path = args.path or environ.get("GREENHORN_DEPLOY_PATH")
    if not address or not path:
        raise ConfigurationError(f"Usage: {USAGE}")
    host, port = parse_address(address)

    command = environ.get("GREENHORN_DEPLOY_COMMAND")
    sync_command = tuple(shlex.split(command)) if command else DEFAULT_SYNC_COMMAND
    if not sync_command:
        raise ConfigurationError("GREENHORN_DEPLOY_COMMAND is empty")

    timeout = args.timeout
    if timeout is None:
        try:
            timeout = float(environ.get("GREENHORN_DEPLOY_TIMEOUT", DEFAULT_SYNC_TIMEOUT))
        except ValueError:
            raise ConfigurationError("GREENHORN_DEPLOY_TIMEOUT must be a number of seconds")
    if timeout <= 0:
        raise ConfigurationError("Sync timeout must be positive")

    log_level = (args.log_level or environ.get("GREENHORN_DEPLOY_LOG_LEVEL", "INFO")).upper()
    if log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ConfigurationError(f"Invalid log level: {log_level}")

    return Settings(
        repo_path=Path(path).expanduser(),
        secret=secret,
        repo_name=repo_name,
        branch=args.branch or environ.get("GREENHORN_DEPLOY_BRANCH", "refs/heads/main"),
        host=host,
        port=port,
        sync_command=sync_command,
        sync_timeout=timeout,
        log_level=log_level,
    )
