from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "qr_attendance"

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        """Build from a settings DB_CONFIG dict; missing keys keep the defaults."""
        base = cls()
        return cls(
            host=str(db_config.get("host", base.host)),
            port=int(db_config.get("port", base.port)),
            user=str(db_config.get("user", base.user)),
            password=str(db_config.get("password", base.password)),
            database=str(db_config.get("database", base.database)),
        )


class DatabaseConnection:
    """Hands out one short-lived mysql-connector connection per repository call."""

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.config != config:
            cls._instance = cls(config)
        return cls._instance

    def connect(self, *, with_database: bool = True):
        cfg = self._config
        params = {"host": cfg.host, "port": cfg.port, "user": cfg.user, "password": cfg.password}
        if with_database and cfg.database:
            params["database"] = cfg.database
        return mysql.connector.connect(**params)
