from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

from pymongo import MongoClient
from pymongo.database import Database


@dataclass
class StoreConfig:
    uri: str
    database: str
    timeout_ms: int = 10000


class DatabaseConnection:
    """Owns the process-wide MongoClient.

    Built once by the entry point (app factory or script) and handed to the
    repositories through the container. The client is opened lazily on first
    use and reused afterwards; `close()` releases it.
    """

    def __init__(self, config: StoreConfig):
        self._config = config
        self._client: Optional[MongoClient] = None
        self._lock = threading.Lock()

    @property
    def database_name(self) -> str:
        return self._config.database

    @property
    def client(self) -> MongoClient:
        with self._lock:
            if self._client is None:
                self._client = MongoClient(
                    self._config.uri,
                    serverSelectionTimeoutMS=int(self._config.timeout_ms),
                    tz_aware=True,
                )
            return self._client

    def db(self) -> Database:
        return self.client[self._config.database]

    def close(self) -> None:
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None
