"""Process-wide locks serializing mutations of a working copy."""

import threading
from pathlib import Path
from typing import Final

_registry_lock: Final = threading.Lock()
_locks: dict[Path, threading.RLock] = {}


def working_copy_lock(path: Path) -> threading.RLock:
    """Return the lock guarding mutations of the working copy at `path`.

    Sessions opened on the same directory (after resolving symlinks) share
    one re-entrant lock, so a checkout cannot interleave with a pull or
    commit issued by another thread.

    Example:
        >>> working_copy_lock(Path("/srv/app")) is working_copy_lock(Path("/srv/app/"))
        True
    """
    key = path.resolve()
    with _registry_lock:
        lock = _locks.get(key)
        if lock is None:
            lock = threading.RLock()
            _locks[key] = lock
        return lock
