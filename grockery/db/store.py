"""JSON-file backed record store.

The whole document is read and rewritten on every mutating call. Nothing is
cached between calls, so concurrent writers follow last-writer-wins.
"""
from __future__ import annotations
import asyncio
import json
import logging
import os
import tempfile
import uuid
from pathlib import Path
from typing import Any, Dict, Iterable, List

log = logging.getLogger(__name__)

Record = Dict[str, Any]
Document = Dict[str, List[Record]]


class RecordNotFoundError(LookupError):
    """No record with the given id exists for the entity."""

    def __init__(self, entity: str, record_id: str):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"Cannot find {entity} item with id {record_id}.")


class RecordStore:
    # one store per resolved file path
    _instances: Dict[Path, "RecordStore"] = {}

    def __init__(self, filepath: Path):
        self.filepath = filepath

    @classmethod
    def open(cls, filepath) -> "RecordStore":
        """
        Return the store for a file path, creating the file on first use.

        A missing or empty file is seeded with an empty JSON object.
        """
        path = Path(filepath).resolve()
        store = cls._instances.get(path)
        if store is None:
            path.parent.mkdir(parents=True, exist_ok=True)
            if not path.exists() or not path.read_text(encoding="utf-8").strip():
                path.write_text("{}", encoding="utf-8")
                log.info("Created database file %s", path)
            store = cls(path)
            cls._instances[path] = store
        return store

    @classmethod
    def forget(cls, filepath) -> None:
        """Drop the registered instance for a path (used by tests and reloads)."""
        cls._instances.pop(Path(filepath).resolve(), None)

    def _read_sync(self) -> Document:
        with open(self.filepath, "r", encoding="utf-8") as f:
            return json.load(f)

    def _write_sync(self, document: Document) -> None:
        # readers only ever see a complete document
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=self.filepath.parent,
            prefix=f".{self.filepath.name}.", suffix=".tmp", delete=False,
        ) as f:
            json.dump(document, f, indent=2)
            f.flush()
            os.fsync(f.fileno())
        try:
            os.replace(f.name, self.filepath)
        except OSError:
            os.unlink(f.name)
            raise

    async def _read(self) -> Document:
        return await asyncio.to_thread(self._read_sync)

    async def _write(self, document: Document) -> None:
        await asyncio.to_thread(self._write_sync, document)

    @staticmethod
    def _find_index(items: List[Record], record_id: str) -> int:
        for index, item in enumerate(items):
            if item.get("id") == record_id:
                return index
        return -1

    async def get_all(self, entity: str) -> List[Record]:
        """Return all records of an entity, or an empty list."""
        document = await self._read()
        return document.get(entity) or []

    async def get(self, entity: str, record_id: str) -> Record:
        document = await self._read()
        items = document.get(entity) or []
        index = self._find_index(items, record_id)
        if index < 0:
            raise RecordNotFoundError(entity, record_id)
        return items[index]

    async def add(self, entity: str, data: Dict[str, Any]) -> Record:
        """Append a new record with a server-assigned id."""
        document = await self._read()
        item = {**data, "id": str(uuid.uuid4())}
        document.setdefault(entity, []).append(item)
        await self._write(document)
        log.debug("Added record %s", item["id"], extra={"entity": entity, "op": "add"})
        return item

    async def update(self, entity: str, record_id: str, data: Dict[str, Any]) -> Record:
        """Shallow-merge `data` onto an existing record; other fields are kept."""
        document = await self._read()
        items = document.get(entity) or []
        index = self._find_index(items, record_id)
        if index < 0:
            raise RecordNotFoundError(entity, record_id)

        item = items[index]
        item.update(data)
        item["id"] = record_id
        await self._write(document)
        log.debug("Updated record %s", record_id, extra={"entity": entity, "op": "update"})
        return item

    async def delete(self, entity: str, record_id: str) -> Record:
        document = await self._read()
        items = document.get(entity) or []
        index = self._find_index(items, record_id)
        if index < 0:
            raise RecordNotFoundError(entity, record_id)

        item = items.pop(index)
        await self._write(document)
        log.debug("Deleted record %s", record_id, extra={"entity": entity, "op": "delete"})
        return item

    async def reset(self) -> None:
        """Replace the whole document with an empty object."""
        await self._write({})
        log.info("Database reset", extra={"entity": "-", "op": "reset"})

    async def ensure_entities(self, entities: Iterable[str]) -> None:
        """Make sure every entity has a (possibly empty) record list."""
        document = await self._read()
        changed = False
        for entity in entities:
            if not isinstance(document.get(entity), list):
                document[entity] = []
                changed = True
        if changed:
            await self._write(document)
