"""Client modules for storage backends."""

from src.clients.json_file_client import (
    JsonFileClient,
    JsonFileError,
    JsonFileNotFoundError,
    JsonFileParseError,
    JsonFileReadError,
    JsonFileWriteError,
)

__all__ = [
    "JsonFileClient",
    "JsonFileError",
    "JsonFileNotFoundError",
    "JsonFileParseError",
    "JsonFileReadError",
    "JsonFileWriteError",
]
