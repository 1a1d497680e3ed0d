"""In-memory registry of the load balancers this process has installed.

The registry is the only "old state" the controller trusts: it is never
re-derived from the gateway. It lives for the process lifetime and is not
persisted.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from threading import Lock

from packages.schemas.edge import LoadBalancerRecord

logger = logging.getLogger(__name__)


class ReconciliationRegistry:
    """Keyed store of ``LoadBalancerRecord`` with one exclusive lock per key.

    Reads and writes of the table are guarded by a single lock; holding
    ``exclusive(name)`` additionally serializes whole reconciliations of the
    same load balancer while letting different names proceed in parallel.

    Example:
        >>> registry = ReconciliationRegistry()
        >>> with registry.exclusive("kubernetes/default/web"):
        ...     registry.get("kubernetes/default/web") is None
        True
    """

    def __init__(self) -> None:
        self._records: dict[str, LoadBalancerRecord] = {}
        self._key_locks: dict[str, Lock] = {}
        self._key_users: dict[str, int] = {}
        self._lock = Lock()

    def get(self, name: str) -> LoadBalancerRecord | None:
        with self._lock:
            return self._records.get(name)

    def put(self, name: str, record: LoadBalancerRecord) -> None:
        with self._lock:
            self._records[name] = record
        logger.debug(
            f"Registry: recorded {len(record.installed_mappings)} mapping(s) for {name}"
        )

    def remove(self, name: str) -> LoadBalancerRecord | None:
        with self._lock:
            record = self._records.pop(name, None)
        if record is not None:
            logger.debug(f"Registry: removed {name}")
        return record

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._records)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    @contextmanager
    def exclusive(self, name: str) -> Iterator[None]:
        """Hold the per-name lock for the duration of the block.

        The lock entry is dropped once its last holder or waiter leaves, so
        the table only holds names with a reconciliation in flight.
        """
        with self._lock:
            key_lock = self._key_locks.setdefault(name, Lock())
            self._key_users[name] = self._key_users.get(name, 0) + 1
        try:
            with key_lock:
                yield
        finally:
            with self._lock:
                self._key_users[name] -= 1
                if self._key_users[name] == 0:
                    del self._key_users[name]
                    del self._key_locks[name]


__all__ = ["ReconciliationRegistry"]
