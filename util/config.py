"""
Environment configuration.

Everything is read from environment variables once, at startup, and the
resulting ``Settings`` is handed to the entry points.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


def env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


def env_int(key: str, default: int = 0) -> int:
    return int(os.environ.get(key, str(default)))


def env_bool(key: str, default: bool = False) -> bool:
    return os.environ.get(key, str(default)).lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class Settings:
    influx_url: str = ""
    influx_username: str = ""
    influx_password: str = ""
    influx_database: str = ""
    debug: bool = False
    app_port: int = 8080
    log_format: str = "text"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            influx_url=env("INFLUXDB_URL"),
            influx_username=env("INFLUXDB_USERNAME"),
            influx_password=env("INFLUXDB_PASSWORD"),
            influx_database=env("INFLUXDB_DB_DATA"),
            debug=env_bool("DEBUG"),
            app_port=env_int("APP_PORT", 8080),
            log_format=env("LOG_FORMAT", "text"),
        )

    @property
    def influx_token(self) -> Optional[str]:
        # InfluxDB 1.x accepts "username:password" as a v2 API token
        if not self.influx_username:
            return None
        return f"{self.influx_username}:{self.influx_password}"

    def __repr__(self) -> str:
        return (
            f"Settings(influx_url={self.influx_url!r}, influx_username={self.influx_username!r}, "
            f"influx_database={self.influx_database!r}, debug={self.debug}, app_port={self.app_port})"
        )
