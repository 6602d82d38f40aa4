# src/tickloop/handlers/files.py

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

NEW_FILE_CONTENT = "New file created"


def read_file(filename: str, *, placeholder: str = NEW_FILE_CONTENT) -> str:
    """
    Return the file's text. A missing file is created with `placeholder`
    and that content is returned. Never raises: I/O failures come back as
    an error string.
    """
    path = Path(filename)
    try:
        return path.read_text("utf-8")
    except FileNotFoundError:
        logger.info("%s does not exist, creating it.", path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read %s: %s", path, e)
        return f"Error reading file: {e}"

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(placeholder, "utf-8")
    except OSError as e:
        logger.warning("Failed to create %s: %s", path, e)
        return f"Error creating file: {e}"

    try:
        return path.read_text("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return f"Error reading file: {e}"
