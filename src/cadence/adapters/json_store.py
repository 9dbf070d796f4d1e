"""File-based JSON store adapter."""

import json
import logging
from pathlib import Path

from cadence.errors import StoreError

from .memory_store import COLLECTIONS, MemoryStore

logger = logging.getLogger(__name__)


class JsonFileStore(MemoryStore):
    """
    JSON file storage.

    Each collection lives in its own file under data_dir
    (templates.json, recurring.json, tasks.json, bundles.json,
    notifications.json) as an object keyed by record id. Every read goes
    to disk, so separate processes see each other's writes.
    """

    def __init__(self, data_dir: Path | str):
        super().__init__()
        self.data_dir = Path(data_dir).expanduser()
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path_for(self, collection: str) -> Path:
        if collection not in COLLECTIONS:
            raise StoreError(f"Unknown collection: {collection}")
        return self.data_dir / f"{collection}.json"

    def _read(self, collection: str) -> dict[str, dict]:
        path = self._path_for(collection)
        if not path.exists():
            return {}
        try:
            data = json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Failed to read {path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"Malformed collection file {path}: expected an object")
        return data

    def _write(self, collection: str, records: dict[str, dict]) -> None:
        path = self._path_for(collection)
        tmp = path.with_suffix(".json.tmp")
        try:
            tmp.write_text(json.dumps(records, indent=2, sort_keys=True))
            tmp.replace(path)
        except OSError as e:
            raise StoreError(f"Failed to write {path}: {e}") from e
        logger.debug(f"Wrote {len(records)} records to {path.name}")
