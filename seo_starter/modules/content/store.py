"""Content stores — key/collection-indexed sources of typed site records.

Every store answers two questions: ``get(collection, entry_id)`` returns one
record (or ``None`` when the id does not exist) and
``list(collection, predicate)`` returns every record of a collection.  A
missing id is never an error; an unreadable store or an undecodable record
raises :class:`~seo_starter.errors.FetchFailureError`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import copy
import json
import logging
from pathlib import Path
from typing import Any, Callable, Optional

import yaml
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from seo_starter.errors import FetchFailureError, MalformedRecordError

logger = logging.getLogger(__name__)

Record = dict[str, Any]
Predicate = Callable[[Record], bool]

_FILE_SUFFIXES = (".yaml", ".yml", ".json")


class ContentStore(ABC):
    """Interface shared by every content store."""

    @abstractmethod
    def get(self, collection: str, entry_id: str) -> Optional[Record]:
        """Return one entry, or ``None`` when it does not exist."""

    @abstractmethod
    def list(
        self, collection: str, predicate: Optional[Predicate] = None
    ) -> list[Record]:
        """Return the entries of *collection* that satisfy *predicate*."""

    @abstractmethod
    def collections(self) -> list[str]:
        """Names of the collections this store knows about."""


# ---------------------------------------------------------------------------
# In-memory store
# ---------------------------------------------------------------------------

class MemoryContentStore(ContentStore):
    """Store backed by a nested ``{collection: {entry_id: record}}`` mapping.

    Records are deep-copied on the way in and out, so callers can never
    mutate the stored data.
    """

    def __init__(self, data: Optional[dict[str, dict[str, Record]]] = None) -> None:
        self._data: dict[str, dict[str, Record]] = {}
        for collection, entries in (data or {}).items():
            for entry_id, record in entries.items():
                self.put(collection, entry_id, record)

    def put(self, collection: str, entry_id: str, record: Record) -> None:
        if not isinstance(record, dict):
            raise MalformedRecordError(
                "Record " + collection + "/" + entry_id + " must be a mapping"
            )
        self._data.setdefault(collection, {})[entry_id] = copy.deepcopy(record)

    def get(self, collection: str, entry_id: str) -> Optional[Record]:
        record = self._data.get(collection, {}).get(entry_id)
        return copy.deepcopy(record) if record is not None else None

    def list(
        self, collection: str, predicate: Optional[Predicate] = None
    ) -> list[Record]:
        records = [copy.deepcopy(r) for r in self._data.get(collection, {}).values()]
        if predicate is not None:
            records = [r for r in records if predicate(r)]
        return records

    def collections(self) -> list[str]:
        return sorted(self._data)


# ---------------------------------------------------------------------------
# File store (YAML / JSON data collections)
# ---------------------------------------------------------------------------

class FileContentStore(ContentStore):
    """Store reading ``<root>/<collection>/<entry_id>.yaml`` (or ``.yml``/``.json``).

    Usage::

        store = FileContentStore("content")
        global_seo = store.get("seo", "global")
    """

    def __init__(self, root: str | Path = "content") -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def get(self, collection: str, entry_id: str) -> Optional[Record]:
        path = self._find_file(collection, entry_id)
        if path is None:
            logger.debug("No content file for %s/%s", collection, entry_id)
            return None
        return self._load_file(path)

    def list(
        self, collection: str, predicate: Optional[Predicate] = None
    ) -> list[Record]:
        records = [self._load_file(path) for path in self._collection_files(collection)]
        if predicate is not None:
            records = [r for r in records if predicate(r)]
        return records

    def entry_ids(self, collection: str) -> list[str]:
        return [path.stem for path in self._collection_files(collection)]

    def collections(self) -> list[str]:
        if not self._root.is_dir():
            return []
        return sorted(p.name for p in self._root.iterdir() if p.is_dir())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _find_file(self, collection: str, entry_id: str) -> Optional[Path]:
        # Entry ids are plain names; never let them walk out of the collection.
        if not entry_id or "/" in entry_id or "\\" in entry_id or entry_id.startswith("."):
            return None
        directory = self._root / collection
        for suffix in _FILE_SUFFIXES:
            candidate = directory / (entry_id + suffix)
            if candidate.is_file():
                return candidate
        return None

    def _collection_files(self, collection: str) -> list[Path]:
        directory = self._root / collection
        if not directory.is_dir():
            return []
        return sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix in _FILE_SUFFIXES
        )

    @staticmethod
    def _load_file(path: Path) -> Record:
        try:
            with open(path, "r", encoding="utf-8") as fh:
                if path.suffix == ".json":
                    data = json.load(fh)
                else:
                    data = yaml.safe_load(fh)
        except OSError as exc:
            raise FetchFailureError("Cannot read " + str(path) + ": " + str(exc)) from exc
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            raise MalformedRecordError("Cannot parse " + str(path) + ": " + str(exc)) from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise MalformedRecordError(str(path) + " does not contain a mapping")
        return data


# ---------------------------------------------------------------------------
# Database store
# ---------------------------------------------------------------------------

class DatabaseContentStore(ContentStore):
    """Store backed by :class:`~seo_starter.models.ContentEntry` rows.

    Call :func:`seo_starter.database.init_db` before first use.
    """

    def get(self, collection: str, entry_id: str) -> Optional[Record]:
        from seo_starter.database import get_session
        from seo_starter.models import ContentEntry

        try:
            with get_session() as session:
                row = session.execute(
                    select(ContentEntry).where(
                        ContentEntry.collection == collection,
                        ContentEntry.entry_id == entry_id,
                    )
                ).scalar_one_or_none()
                data = row.data if row is not None else None
        except SQLAlchemyError as exc:
            raise FetchFailureError(
                "Database read failed for " + collection + "/" + entry_id + ": " + str(exc)
            ) from exc

        if data is None:
            return None
        if not isinstance(data, dict):
            raise MalformedRecordError(
                "Record " + collection + "/" + entry_id + " is not a mapping"
            )
        return data

    def list(
        self, collection: str, predicate: Optional[Predicate] = None
    ) -> list[Record]:
        from seo_starter.database import get_session
        from seo_starter.models import ContentEntry

        try:
            with get_session() as session:
                rows = session.execute(
                    select(ContentEntry)
                    .where(ContentEntry.collection == collection)
                    .order_by(ContentEntry.entry_id)
                ).scalars().all()
                records = [row.data for row in rows]
        except SQLAlchemyError as exc:
            raise FetchFailureError(
                "Database read failed for collection " + collection + ": " + str(exc)
            ) from exc

        records = [r for r in records if isinstance(r, dict)]
        if predicate is not None:
            records = [r for r in records if predicate(r)]
        return records

    def collections(self) -> list[str]:
        from seo_starter.database import get_session
        from seo_starter.models import ContentEntry

        with get_session() as session:
            names = session.execute(
                select(ContentEntry.collection).distinct().order_by(ContentEntry.collection)
            ).scalars().all()
        return list(names)

    def put(self, collection: str, entry_id: str, record: Record) -> None:
        """Insert or replace one record."""
        from seo_starter.database import get_session
        from seo_starter.models import ContentEntry

        if not isinstance(record, dict):
            raise MalformedRecordError(
                "Record " + collection + "/" + entry_id + " must be a mapping"
            )
        with get_session() as session:
            row = session.execute(
                select(ContentEntry).where(
                    ContentEntry.collection == collection,
                    ContentEntry.entry_id == entry_id,
                )
            ).scalar_one_or_none()
            if row is None:
                session.add(ContentEntry(collection=collection, entry_id=entry_id, data=record))
            else:
                row.data = record
        logger.debug("Stored content entry %s/%s", collection, entry_id)

    def import_directory(self, source: FileContentStore) -> int:
        """Copy every record of a file store into the database.

        Returns the number of records written.
        """
        count = 0
        for collection in source.collections():
            for entry_id in source.entry_ids(collection):
                record = source.get(collection, entry_id)
                if record is None:
                    continue
                self.put(collection, entry_id, record)
                count += 1
        logger.info("Imported %d content entries from %s", count, source.root)
        return count
