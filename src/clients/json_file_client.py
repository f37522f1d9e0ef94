"""JSON file client for whole-document reads and writes."""

import asyncio
import codecs
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Union

logger = logging.getLogger(__name__)


class JsonFileError(Exception):
    """Base exception for JSON file operations."""

    pass


class JsonFileReadError(JsonFileError):
    """Raised when the file cannot be read."""

    pass


class JsonFileNotFoundError(JsonFileReadError):
    """Raised when the file does not exist."""

    pass


class JsonFileParseError(JsonFileError):
    """Raised when the file content is not valid JSON."""

    pass


class JsonFileWriteError(JsonFileError):
    """Raised when the file cannot be written."""

    pass


class JsonFileClient:
    """Reads and writes a single JSON document on disk.

    Blocking file access runs in a worker thread so callers on the event
    loop only suspend at I/O boundaries.
    """

    def __init__(
        self,
        path: Union[str, Path],
        indent: int = 2,
        encoding: str = "utf-8",
        atomic_writes: bool = True,
    ):
        """Initialize the client.

        Args:
            path: Location of the JSON file.
            indent: Indentation used when serializing.
            encoding: Text encoding of the file.
            atomic_writes: Write to a temporary file and rename it into place.

        Raises:
            ValueError: If ``encoding`` is not a known codec.
        """
        try:
            codecs.lookup(encoding)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {encoding!r}") from e

        self.path = Path(path)
        self.indent = indent
        self.encoding = encoding
        self.atomic_writes = atomic_writes

    def exists(self) -> bool:
        """Check whether the backing file exists."""
        return self.path.is_file()

    def dumps(self, data: Any) -> str:
        """Serialize ``data`` the way it is stored on disk."""
        return json.dumps(data, indent=self.indent, ensure_ascii=False) + "\n"

    async def read(self) -> Any:
        """Read and parse the whole file.

        A file holding only whitespace reads as None.

        Raises:
            JsonFileNotFoundError: If the file does not exist.
            JsonFileReadError: If the file cannot be read.
            JsonFileParseError: If the content is not valid JSON.
        """
        return await asyncio.to_thread(self._read_sync)

    async def write(self, data: Any) -> None:
        """Serialize ``data`` and replace the whole file with it.

        Raises:
            JsonFileWriteError: If serialization or the write fails.
        """
        await asyncio.to_thread(self._write_sync, data)

    def _read_sync(self) -> Any:
        try:
            text = self.path.read_text(encoding=self.encoding)
        except UnicodeDecodeError as e:
            raise JsonFileParseError(f"Cannot decode {self.path} as {self.encoding}: {e}") from e
        except FileNotFoundError as e:
            raise JsonFileNotFoundError(f"File not found: {self.path}") from e
        except OSError as e:
            raise JsonFileReadError(f"Cannot read {self.path}: {e}") from e

        if not text.strip():
            return None

        # Oversized integers raise ValueError, deep nesting RecursionError
        try:
            return json.loads(text)
        except (ValueError, RecursionError) as e:
            raise JsonFileParseError(f"Invalid JSON in {self.path}: {e}") from e

    def _write_sync(self, data: Any) -> None:
        try:
            content = self.dumps(data)
        except (TypeError, ValueError) as e:
            raise JsonFileWriteError(f"Cannot serialize data for {self.path}: {e}") from e

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if self.atomic_writes:
                self._replace_atomically(content)
            else:
                self.path.write_text(content, encoding=self.encoding)
        except (OSError, UnicodeError) as e:
            raise JsonFileWriteError(f"Cannot write {self.path}: {e}") from e

        logger.debug(f"Wrote {len(content)} characters to {self.path}")

    def _replace_atomically(self, content: str) -> None:
        """Write to a sibling temp file, then rename it over the target."""
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding=self.encoding) as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise
