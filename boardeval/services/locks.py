"""Per-ballot mutual exclusion.

Every (candidate, rater, cohort, phase) key gets its own process-local lock.
When Redis is configured the key is also locked there, so that several
gunicorn workers serialize the same ballot too.
"""

import threading
from contextlib import contextmanager

from flask import current_app
from redis.exceptions import LockError, RedisError

from ..extensions import redis_store


class KeyedLocks:
    """Registry of threading locks, one per key while anyone holds or waits on it.

    An entry is dropped when its last user leaves, so the registry only ever
    holds the ballots being submitted right now.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._entries = {}  # key -> [lock, users]

    @contextmanager
    def hold(self, key, timeout):
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = [threading.Lock(), 0]
            entry[1] += 1
        try:
            if not entry[0].acquire(timeout=timeout):
                raise TimeoutError(f"ballot lock {key} busy")
            try:
                yield
            finally:
                entry[0].release()
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._entries[key]

    def __len__(self):
        with self._guard:
            return len(self._entries)


_local_locks = KeyedLocks()


def ballot_lock_key(candidate_id, rater, cohort_id, phase):
    return f"boardeval:ballot:{cohort_id}:{candidate_id}:{phase.value}:{rater.label}"


@contextmanager
def ballot_lock(key, timeout=None):
    """Hold the lock for `key` for the duration of the block.

    Raises TimeoutError if either lock cannot be taken in time; the caller
    must not write without it.
    """
    if timeout is None:
        timeout = float(current_app.config.get("RATING_LOCK_TIMEOUT", 10))

    with _local_locks.hold(key, timeout):
        client = redis_store.client
        if client is None:
            yield
            return

        try:
            remote = client.lock(key, timeout=timeout, blocking_timeout=timeout)
            acquired = remote.acquire()
        except RedisError:
            current_app.logger.warning("Redis lock failed for %s, continuing with process-local lock", key)
            yield
            return

        if not acquired:
            raise TimeoutError(f"ballot lock {key} busy")
        try:
            yield
        finally:
            try:
                remote.release()
            except LockError:
                # expired while held; the write already finished or failed
                current_app.logger.warning("Redis lock %s expired before release", key)
