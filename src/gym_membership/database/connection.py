from __future__ import annotations

import logging
from dataclasses import dataclass

import mysql.connector

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connect_timeout: int = 5

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
        )


class DatabaseConnection:
    """Store handle shared by every repository.

    Short-lived connections are created per unit of work; the handle only tracks
    whether the database is reachable so the API can degrade instead of crashing.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._available = False
        self._closed = False

    @property
    def config(self) -> DBConfig:
        return self._config

    def open(self) -> bool:
        self._closed = False
        try:
            conn = self.connect()
            try:
                conn.ping(reconnect=False)
            finally:
                conn.close()
        except mysql.connector.Error as e:
            self._available = False
            logger.error(
                "database unreachable at %s:%s/%s: %s",
                self._config.host, self._config.port, self._config.database, e,
            )
            return False

        if not self._available:
            logger.info("database connected at %s:%s/%s", self._config.host, self._config.port, self._config.database)
        self._available = True
        return True

    def is_available(self) -> bool:
        return self._available and not self._closed

    def mark_unavailable(self, reason: object = None) -> None:
        if self._available:
            logger.error("database connection lost: %s", reason)
        self._available = False

    def close(self) -> None:
        self._closed = True
        self._available = False

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            connection_timeout=int(self._config.connect_timeout),
        )
