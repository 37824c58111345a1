"""Recovery action run by the health monitor when the server stops answering."""

from __future__ import annotations

import threading
from typing import Literal

from logging_config import get_logger
from web.server import ControlServer, PortUnavailableError

logger = get_logger(__name__)

RestartMode = Literal["rebind", "respawn"]


class RestartSupervisor:
    """
    Restarts a ControlServer after a fixed delay.

    "rebind" replaces the listening socket inside this process, "respawn"
    re-executes the whole process. Only one restart runs at a time; requests
    arriving while one is in progress, or after shutdown began, are skipped.
    """

    def __init__(
        self,
        server: ControlServer,
        *,
        delay_seconds: float = 1.0,
        mode: RestartMode = "rebind",
        stop_event: threading.Event | None = None,
    ):
        self.server = server
        self.delay_seconds = delay_seconds
        self.mode = mode
        self._stop_event = stop_event or threading.Event()
        self._restart_lock = threading.Lock()
        self.restart_count = 0
        self.failed_restart_count = 0

    def restart(self) -> bool:
        """
        Runs one restart on the calling thread.

        Returns:
            True if the server is serving again, False if the restart was
            skipped or failed.
        """
        if not self._restart_lock.acquire(blocking=False):
            logger.warning("Restart already in progress, skipping")
            return False
        try:
            if self._stop_event.is_set() or self.server.is_stopping:
                logger.info("Shutdown in progress, skipping restart")
                return False

            # Interruptible delay so shutdown does not wait on it.
            if self._stop_event.wait(self.delay_seconds):
                logger.info("Shutdown requested during restart delay, skipping restart")
                return False

            self.restart_count += 1
            if self.mode == "respawn":
                self.server.respawn()
                return False

            try:
                restarted = self.server.rebind()
            except PortUnavailableError as e:
                self.failed_restart_count += 1
                logger.error(f"Server restart failed: {e}")
                return False

            if restarted:
                logger.info("Server initialization succeeded")
            return restarted
        finally:
            self._restart_lock.release()

    def shutdown(self):
        """Prevents further restarts and cancels a pending restart delay."""
        self._stop_event.set()
