"""
Client configuration for the job API.

Credentials come from the environment (.env supported). Endpoints and timing come
from YAML files layered over the ClientConfig defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()
CONFIG_PATH = Path(os.getenv("CONFIG_PATH", "config"))


def _get_required_env(key: str) -> str:
    """Get required environment variable or raise clear error."""
    try:
        return os.environ[key]
    except KeyError:
        raise EnvironmentError(
            f"Required environment variable '{key}' not found. "
            f"Ensure .env file exists and contains {key}."
        )


@dataclass(frozen=True)
class ApiCredentials:
    """Basic-auth credential pair for the job API."""

    username: str
    password: str

    def __post_init__(self):
        if not self.username or not self.password:
            raise ValueError("Both username and password are required")

    @classmethod
    def from_env(cls):
        """Create credentials from OXYLABS_USERNAME / OXYLABS_PASSWORD."""
        return cls(
            username=_get_required_env("OXYLABS_USERNAME"),
            password=_get_required_env("OXYLABS_PASSWORD"),
        )

    def __repr__(self) -> str:
        return f"ApiCredentials(username={self.username!r}, password='***')"


@dataclass
class ClientConfig:
    """Endpoints and timing for one client. Shared read-only between jobs."""

    submit_url: str = "https://data.oxylabs.io/v1/queries"
    results_host: str = "https://data.oxylabs.io"
    timeout: float = 50.0  # total polling budget per job, seconds
    wait_time: float = 2.0  # sleep between polls, seconds
    request_timeout: float = 30.0  # per HTTP call, seconds

    def __post_init__(self):
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.wait_time < 0:
            raise ValueError(f"wait_time must be non-negative, got {self.wait_time}")
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be positive, got {self.request_timeout}")

    def status_url(self, job_id: str) -> str:
        return f"{self.results_host.rstrip('/')}/v1/queries/{job_id}"

    def results_url(self, job_id: str) -> str:
        return f"{self.status_url(job_id)}/results"


def load_client_config(
    config_paths: Optional[List[Union[str, Path]]] = None,
) -> ClientConfig:
    """
    Build a ClientConfig from the defaults plus YAML overrides.

    Args:
        config_paths: YAML files to layer over the defaults, later ones winning.
            Default: CONFIG_PATH/client.yaml if it exists, otherwise defaults only.

    Returns:
        Validated ClientConfig

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist
        ValueError: If a merged value is out of range
    """
    base = OmegaConf.structured(ClientConfig)

    if config_paths is None:
        default_path = CONFIG_PATH / "client.yaml"
        config_paths = [default_path] if default_path.exists() else []

    # Each layer is merged onto the typed base, so a bad key or type fails on the file that has it
    for path in config_paths:
        if not Path(path).exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        base = OmegaConf.merge(base, OmegaConf.load(path))

    return ClientConfig(**OmegaConf.to_container(base, resolve=True))
