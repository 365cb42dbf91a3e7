"""Adapters - I/O implementations of ports."""

from .json_store import JsonCollectionFile, JsonFile
from .file_stores import (
    FileLeisureStore,
    FileMemoStore,
    FileProjectStore,
    FileReadingStore,
    FileStrategyStore,
    FileTimeLogStore,
)

__all__ = [
    "JsonFile",
    "JsonCollectionFile",
    "FileProjectStore",
    "FileTimeLogStore",
    "FileReadingStore",
    "FileLeisureStore",
    "FileMemoStore",
    "FileStrategyStore",
]
