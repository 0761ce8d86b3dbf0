"""Configuration for the BTTS client."""

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_API_ROOT = "http://127.0.0.1:8080/api"


def default_data_dir() -> Path:
    return Path.home() / ".cache" / "btts"


@dataclass(frozen=True)
class Config:
    """Client configuration."""

    api_root: str = DEFAULT_API_ROOT
    data_dir: Path = field(default_factory=default_data_dir)
    timeout: float = 30.0
    page_size: int = 12

    @property
    def db_path(self) -> Path:
        return self.data_dir / "client.db"
