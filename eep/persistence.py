"""Whole-document load and save."""

import logging
import os
import stat
import tempfile

from .buffer import LineBuffer
from .constants import EditorConstants

logger = logging.getLogger(__name__)


def load_document(path: str) -> LineBuffer:
    """Read a file into a LineBuffer.

    Raises:
        FileNotFoundError: if the file does not exist.
        OSError: for any other read failure.
    """
    with open(path, 'r', encoding=EditorConstants.ENCODING, newline='') as f:
        content = f.read()
    buffer = LineBuffer.load(content)
    logger.debug(f"Loaded {path} ({buffer.line_count()} lines)")
    return buffer


def save_document(path: str, buffer: LineBuffer) -> None:
    """Write the buffer to path atomically.

    The content goes to a temporary file in the same directory, is flushed to
    disk, and is then renamed over the target, so a failed save never leaves
    a half-written file behind.

    Raises:
        OSError: if the file cannot be written (permission denied, disk full, ...).
    """
    content = buffer.serialize()
    dir_name = os.path.dirname(path) or '.'
    temp_filename = None
    try:
        with tempfile.NamedTemporaryFile(mode='w', encoding=EditorConstants.ENCODING,
                                         dir=dir_name, suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                         delete=False, newline='') as temp_file:
            temp_filename = temp_file.name
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        # Keep the permissions of an existing file
        if os.path.exists(path):
            os.chmod(temp_filename, stat.S_IMODE(os.stat(path).st_mode))
        os.replace(temp_filename, path)
    except OSError:
        if temp_filename is not None and os.path.exists(temp_filename):
            try:
                os.remove(temp_filename)
            except OSError as cleanup_error:
                logger.warning(f"Could not remove temporary file {temp_filename}: {cleanup_error}")
        raise
    logger.debug(f"Saved {path} ({buffer.line_count()} lines)")
