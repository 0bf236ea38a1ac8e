from __future__ import annotations

from pathlib import Path
from typing import Protocol
from urllib.parse import quote


class ObjectStorage(Protocol):
    """Binary object storage. Documents keep the stable path, never the URL."""

    def upload(self, path: str, data: bytes) -> None:
        raise NotImplementedError

    def get_download_url(self, path: str) -> str:
        raise NotImplementedError


class LocalObjectStorage(ObjectStorage):
    """Stores objects below a filesystem root and serves them from ``base_url``."""

    def __init__(self, root: str | Path, *, base_url: str):
        self._root = Path(root)
        self._base_url = base_url.rstrip("/")

    def _resolve(self, path: str) -> Path:
        target = (self._root / path).resolve()
        if self._root.resolve() not in target.parents:
            raise ValueError(f"Invalid storage path: {path!r}")
        return target

    def upload(self, path: str, data: bytes) -> None:
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    def get_download_url(self, path: str) -> str:
        self._resolve(path)
        return f"{self._base_url}/{quote(path)}"

    def read(self, path: str) -> bytes:
        return self._resolve(path).read_bytes()
