from __future__ import annotations

from typing import Protocol


class SyncSettingsRepository(Protocol):
    """Where the remote endpoint URL is remembered between runs."""

    def get_cloud_url(self) -> str:
        raise NotImplementedError

    def set_cloud_url(self, url: str) -> None:
        raise NotImplementedError
