"""Single-flight request queue.

Entries run one at a time in enqueue order. When a round trip finishes and
more than one entry is waiting, every waiting entry except the newest is
dropped: a later edit of the same editor supersedes the earlier ones, and the
dropped callers are never told.
"""

import logging
import threading
from typing import Any, Optional, Protocol

import requests

from .routes import QueueEntry
from .utils import mask_url

logger = logging.getLogger(__name__)


class EntryRunner(Protocol):
    def run_entry(self, entry: QueueEntry) -> dict[str, Any]: ...


class RequestQueue:
    """Persist/render queue with at most one round trip in flight."""

    def __init__(self, client: EntryRunner):
        self._client = client
        self._entries: list[QueueEntry] = []
        self._lock = threading.Lock()
        self._idle = threading.Event()
        self._idle.set()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def enqueue(self, entry: QueueEntry) -> None:
        with self._lock:
            self._entries.append(entry)
            start = len(self._entries) == 1
            if start:
                self._idle.clear()

        logger.debug(f"Enqueued update: {mask_url(entry.persist_url)}")

        # A non-empty queue already has a worker draining it
        if start:
            worker = threading.Thread(target=self._process, name="liveedit-queue", daemon=True)
            worker.start()

    def drain(self, timeout: Optional[float] = None) -> bool:
        """Block until the queue is empty. Returns False on timeout."""
        return self._idle.wait(timeout)

    def _run(self, entry: QueueEntry) -> dict[str, Any]:
        try:
            return self._client.run_entry(entry)
        except requests.RequestException as e:
            logger.error(f"Request failed for {mask_url(entry.persist_url)}: {e}")
            return {"error": f"Request failed: {e}"}
        except Exception as e:
            logger.exception(f"Unexpected error for {mask_url(entry.persist_url)}")
            return {"error": f"Unexpected error: {e}"}

    def _complete(self, entry: QueueEntry, response: dict[str, Any]) -> None:
        try:
            entry.on_complete(response)
        except Exception:
            logger.exception(f"Response callback failed for {mask_url(entry.persist_url)}")

    def _process(self) -> None:
        while True:
            with self._lock:
                entry = self._entries[0]

            try:
                self._complete(entry, self._run(entry))
            except BaseException:
                # The worker is going down; leave the queue startable again
                with self._lock:
                    self._entries.clear()
                    self._idle.set()
                raise

            with self._lock:
                self._entries.pop(0)
                waiting = len(self._entries)
                if waiting > 1:
                    logger.debug(f"Dropping {waiting - 1} superseded update(s)")
                    del self._entries[:-1]
                if not self._entries:
                    self._idle.set()
                    return
