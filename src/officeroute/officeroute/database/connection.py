from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from .tables import Base


@dataclass
class DBConfig:
    url: str


class DatabaseConnection:
    """Singleton-like engine and session factory, one per database URL.

    Note: sessions are short-lived, one per repository operation. Writers in
    this process are serialized through ``locked()``.
    """

    _instances: dict[str, "DatabaseConnection"] = {}
    _instances_lock = threading.Lock()

    def __init__(self, config: DBConfig):
        self._config = config
        url = make_url(config.url)

        connect_args = {}
        if url.get_backend_name() == "sqlite":
            # Sessions are used from the request thread and the sync worker.
            connect_args["check_same_thread"] = False
            if url.database and url.database != ":memory:":
                Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        self._engine = create_engine(url, connect_args=connect_args)
        self._sessions = sessionmaker(bind=self._engine, expire_on_commit=False)
        self._lock = threading.RLock()

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        with cls._instances_lock:
            if config.url not in cls._instances:
                cls._instances[config.url] = DatabaseConnection(config)
            return cls._instances[config.url]

    @property
    def url(self) -> str:
        return self._config.url

    @property
    def engine(self) -> Engine:
        return self._engine

    def create_schema(self) -> None:
        Base.metadata.create_all(self._engine)

    def session(self) -> Session:
        return self._sessions()

    @contextmanager
    def locked(self) -> Iterator["DatabaseConnection"]:
        """Hold off other writers in this process across a read-modify-write."""
        with self._lock:
            yield self


def open_database(url: str, *, shared: bool = True) -> DatabaseConnection:
    config = DBConfig(url=url)
    conn = DatabaseConnection.get_instance(config) if shared else DatabaseConnection(config)
    conn.create_schema()
    return conn

