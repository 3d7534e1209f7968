"""
Reading and writing document files.
"""

import logging
import os
from typing import List, Optional

logger = logging.getLogger(__name__)


def candidate_paths(filename: str, save_directory: Optional[str] = None) -> List[str]:
    """Paths tried when opening a file: the save directory first, then as given."""

    paths = []
    if save_directory and not os.path.isabs(filename):
        paths.append(os.path.join(save_directory, filename))

    paths.append(filename)
    return paths


def read_file(filename: str, save_directory: Optional[str] = None) -> Optional[bytes]:
    """
    Read a file's content.

    Args:
        filename: Name of the file to open
        save_directory: Directory searched before the name as given

    Returns:
        The raw content, or None if no candidate exists

    Raises:
        OSError: If a file exists but cannot be read
    """

    for path in candidate_paths(filename, save_directory):
        try:
            with open(path, "rb") as f:
                data = f.read()
        except FileNotFoundError:
            continue

        logger.debug("Read %d bytes from %s", len(data), path)
        return data

    return None


def save_path(filename: str, save_directory: Optional[str] = None) -> str:
    """Path a document is written to, creating the save directory if needed."""

    if not save_directory or os.path.isabs(filename):
        return filename

    try:
        os.makedirs(save_directory, exist_ok=True)
    except OSError as e:
        logger.warning("Could not create directory %s: %s", save_directory, e)

    return os.path.join(save_directory, filename)


def write_file(filename: str, data: bytes, save_directory: Optional[str] = None) -> int:
    """
    Write a document's bytes to disk.

    Returns:
        The number of bytes written

    Raises:
        OSError: If the file cannot be written
    """

    path = save_path(filename, save_directory)

    with open(path, "wb") as f:
        written = f.write(data)

    logger.debug("Wrote %d bytes to %s", written, path)
    return written
