"""
app/services/file_store.py

Purpose: Local disk storage for uploaded files

- Generates "<millis>-<original name>" filenames
- Writes content synchronously (callers run it in a worker thread)
- Resolves generated names back to paths for download
- No delete or update
"""

import time
from pathlib import Path, PurePosixPath
from typing import Callable, Union

from app.core.exceptions import FileNotFoundInStoreError, StorageError
from app.core.logging import get_logger

logger = get_logger(__name__)


def current_millis() -> int:
    return int(time.time() * 1000)


def safe_basename(original_name: str) -> str:
    """
    Strips any directory part from a client-supplied filename.

    Handles both POSIX and Windows separators.
    """
    return PurePosixPath(original_name.replace("\\", "/")).name


class FileStore:
    """
    Flat directory of uploaded files.

    Two uploads of the same original name within the same millisecond
    produce the same generated name; the second write then fails with
    StorageError instead of overwriting the first file.
    """

    def __init__(self, root: Union[str, Path], clock: Callable[[], int] = current_millis):
        self.root = Path(root)
        self._clock = clock

    def ensure_root(self) -> Path:
        """Creates the upload directory if it does not exist yet."""
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    def generate_name(self, original_name: str) -> str:
        return f"{self._clock()}-{safe_basename(original_name)}"

    def store(self, data: bytes, original_name: str) -> str:
        """
        Writes a file under a newly generated name.

        Args:
            data: File content
            original_name: Filename submitted by the client

        Returns:
            The generated filename

        Raises:
            StorageError: If the file cannot be written
        """
        generated_name = self.generate_name(original_name)
        path = self.root / generated_name

        try:
            with open(path, "xb") as fh:
                fh.write(data)
        except FileExistsError as e:
            raise StorageError(
                f"A stored file named {generated_name} already exists",
                details={"stored_name": generated_name}
            ) from e
        except OSError as e:
            raise StorageError(
                f"Could not write {generated_name}: {e.strerror or e}",
                details={"stored_name": generated_name}
            ) from e

        logger.debug(
            f"Stored {len(data)} bytes",
            extra={"upload_name": original_name, "stored_name": generated_name}
        )
        return generated_name

    def resolve(self, generated_name: str) -> Path:
        """
        Maps a generated name to a file inside the upload directory.

        Raises:
            FileNotFoundInStoreError: If no such file exists in the store
        """
        root = self.root.resolve()
        path = (root / generated_name).resolve()

        if path.parent != root or not path.is_file():
            raise FileNotFoundInStoreError(
                f"No such file: {generated_name}",
                details={"stored_name": generated_name}
            )

        return path

    def retrieve(self, generated_name: str) -> bytes:
        """
        Reads back the content of a stored file.

        Raises:
            FileNotFoundInStoreError: If no such file exists in the store
            StorageError: If the file exists but cannot be read
        """
        path = self.resolve(generated_name)

        try:
            return path.read_bytes()
        except OSError as e:
            raise StorageError(
                f"Could not read {generated_name}: {e.strerror or e}",
                details={"stored_name": generated_name}
            ) from e
