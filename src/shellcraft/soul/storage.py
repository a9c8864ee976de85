from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Union

from .codec import encode_soul, read_soul
from .errors import SoulIOError
from .models import Soul

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_soul(path: PathLike) -> Soul:
    """Load and validate the soul stored at ``path``.

    OS-level failures (missing file included) surface as SoulIOError; format
    and range problems surface as the matching SoulError subclass.
    """
    path = Path(path)
    try:
        with path.open("rb") as fh:
            soul = read_soul(fh)
    except OSError as e:
        raise SoulIOError(f"Cannot read soul file {path}: {e}", cause=e, path=path) from e
    logger.debug("Loaded soul from %s: level=%d hp=%d", path, soul.level, soul.hit_points)
    return soul


def save_soul(soul: Soul, path: PathLike) -> None:
    """Validate, encode and atomically persist ``soul`` to ``path``.

    Either the old file remains or the new one fully replaces it. Raises
    SoulIOError with ``ambiguous=True`` if the failure came after the replace.
    """
    path = Path(path)
    data = encode_soul(soul)
    _atomic_write_bytes(path, data)
    logger.info("Saved soul to %s (%d bytes)", path, len(data))


def _atomic_write_bytes(path: Path, data: bytes) -> None:
    directory = path.parent
    try:
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=directory)
    except OSError as e:
        raise SoulIOError(f"Cannot prepare write of {path}: {e}", cause=e, path=path) from e

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        _keep_mode(path, tmp_name)
        os.replace(tmp_name, path)
    except OSError as e:
        _discard(tmp_name)
        raise SoulIOError(f"Cannot write soul file {path}: {e}", cause=e, path=path) from e

    try:
        _fsync_dir(directory)
    except OSError as e:
        raise SoulIOError(
            f"Soul file {path} was replaced but the directory sync failed: {e}",
            cause=e,
            path=path,
            ambiguous=True,
        ) from e


def _keep_mode(path: Path, tmp_name: str) -> None:
    # mkstemp creates 0600; a replaced soul file keeps its permissions
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        return
    os.chmod(tmp_name, mode)


def _fsync_dir(directory: Path) -> None:
    if os.name == "nt":
        # Directory handles cannot be fsynced on Windows
        return
    dir_fd = os.open(directory, os.O_RDONLY)
    try:
        os.fsync(dir_fd)
    finally:
        os.close(dir_fd)


def _discard(tmp_name: str) -> None:
    try:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
    except OSError:
        logger.debug("Could not remove temp file %s", tmp_name, exc_info=True)
