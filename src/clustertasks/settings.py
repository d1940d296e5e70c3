"""Settings for clustertasks."""

from __future__ import annotations

import os
import socket
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


def _default_worker_id() -> str:
    hostname = socket.gethostname().strip() or "host"
    return f"clustertasks-worker-{hostname}-{os.getpid()}"


class Settings(BaseSettings):
    database_url: str = "sqlite:///./clustertasks.db"
    worker_id: str = Field(default_factory=_default_worker_id)
    worker_poll_interval_seconds: float = 2.0
    log_level: str = "INFO"
    yb_home_dir: str = "/home/yugabyte"
    master_rpc_port: int = 7100
    ssh_enabled: bool = True
    ssh_user: str = "yugabyte"
    ssh_port: int = 22
    ssh_key_path: str | None = None

    class Config:
        env_file = ".env"
        env_prefix = "CLUSTERTASKS_"
        extra = "ignore"

    @property
    def yb_admin_path(self) -> Path:
        return Path(self.yb_home_dir) / "master" / "bin" / "yb-admin"


settings = Settings()
