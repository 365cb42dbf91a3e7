"""JSON file storage - the low-level read/write used by every file store."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# What a from_dict raises on a record of the wrong shape
PARSE_ERRORS = (ValueError, KeyError, TypeError, AttributeError)


class JsonFile:
    """
    A single JSON document on disk.

    Missing or unparseable files read as the given default; corrupt data is
    logged and treated as "no data", never raised.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def read(self, default: Any = None) -> Any:
        if not self.path.exists():
            return default
        try:
            return json.loads(self.path.read_text())
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Ignoring unreadable data in {self.path}: {e}")
            return default

    def write(self, data: Any) -> None:
        """Write atomically: temp file in the same directory, then replace."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(data, f, indent=2)
            Path(tmp).replace(self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise


def _parses(parse: Callable[[dict], Any], record: dict) -> bool:
    try:
        parse(record)
    except PARSE_ERRORS:
        return False
    return True


class JsonCollectionFile(JsonFile):
    """A JSON array of records."""

    def read_items(self) -> list:
        data = self.read(default=[])
        if not isinstance(data, list):
            logger.warning(f"Expected a JSON array in {self.path}, got {type(data).__name__}")
            return []
        return data

    def read_records(self) -> list[dict]:
        return [item for item in self.read_items() if isinstance(item, dict)]

    def load(self, parse: Callable[[dict], T]) -> list[T]:
        """Parse every record, skipping (and logging) the malformed ones."""
        items = []
        for i, record in enumerate(self.read_records()):
            try:
                items.append(parse(record))
            except PARSE_ERRORS as e:
                logger.warning(f"Skipping malformed record #{i} in {self.path.name}: {e}")
        return items

    def unreadable_items(self, parse: Callable[[dict], Any]) -> list:
        """Stored items that `parse` can't turn into a record."""
        return [item for item in self.read_items() if not (isinstance(item, dict) and _parses(parse, item))]

    def save(
        self,
        items: list,
        serialize: Callable[[Any], dict],
        parse: Callable[[dict], Any] | None = None,
    ) -> None:
        """
        Replace the collection with `items`.

        With `parse`, stored items it rejects are carried over untouched, so
        a record this version can't read is never lost on save.
        """
        kept = self.unreadable_items(parse) if parse is not None else []
        if kept:
            logger.warning(f"Keeping {len(kept)} unreadable record(s) in {self.path.name}")
        self.write([serialize(item) for item in items] + kept)
