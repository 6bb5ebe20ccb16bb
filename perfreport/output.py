"""Writing rendered reports to disk."""

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Union

from perfreport.errors import ReportWriteError

logger = logging.getLogger(__name__)


def _target_mode(path: Path) -> int:
    """Mode for the written file: the existing destination's, else 0666 minus umask."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_text_atomic(path: Union[str, Path], text: str, encoding: str = "utf-8") -> Path:
    """Write ``text`` to ``path`` through a temporary sibling file.

    The destination is only replaced once the whole document has been
    written, so a failed write never leaves a partial file behind.

    Raises:
        ReportWriteError: If the destination cannot be created or written
    """
    path = Path(path)
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
            f.write(text)
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ReportWriteError(f"cannot write {path}: {e.strerror or e}") from e

    logger.info("Wrote %s", path)
    return path


__all__ = ["write_text_atomic"]
