"""
Named lock registry guarding long-running external tool processes
"""
import logging
import threading

logger = logging.getLogger(__name__)


class ProcessAlreadyRunningError(Exception):
    """The lock for this key is held by a running process"""

    def __init__(self, key):
        super().__init__(key)
        self.key = key


class TooManyProcessesError(Exception):
    """The registry already holds the maximum number of entries"""

    def __init__(self, max_entries):
        super().__init__(max_entries)
        self.max_entries = max_entries


class ProcessLockRegistry:
    """Mapping from a key to the lock of the process working on it

    At most ``max_entries`` keys are registered at once. Reservation is
    atomic, so two concurrent triggers for the same key can never both win.
    """

    def __init__(self, max_entries=10):
        self.max_entries = max_entries
        self._locks = {}
        self._guard = threading.Lock()

    def is_locked(self, key):
        with self._guard:
            lock = self._locks.get(key)
            return lock is not None and lock.locked()

    def __len__(self):
        with self._guard:
            return len(self._locks)

    def __contains__(self, key):
        with self._guard:
            return key in self._locks

    def reserve(self, key):
        """Register and acquire the lock for ``key``

        Raises ProcessAlreadyRunningError when the key's lock is held and
        TooManyProcessesError when the registry is full.
        """
        with self._guard:
            lock = self._locks.get(key)
            if lock is not None and lock.locked():
                raise ProcessAlreadyRunningError(key)
            if lock is None and len(self._locks) >= self.max_entries:
                raise TooManyProcessesError(self.max_entries)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            lock.acquire()
            logger.debug(f"Reserved process lock for {key} ({len(self._locks)}/{self.max_entries})")
            return lock

    def release(self, key):
        """Release the lock for ``key`` and drop it from the registry"""
        with self._guard:
            lock = self._locks.pop(key, None)
            if lock is not None and lock.locked():
                lock.release()
        logger.debug(f"Released process lock for {key}")
