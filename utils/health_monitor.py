# utils/health_monitor.py
"""
Self-probing watchdog for the camera control server.

Periodically requests the server's own root endpoint over a fresh connection
and classifies the outcome. An unresponsive server triggers the configured
recovery callback; a degraded probe is only logged.
"""

import threading
from collections import Counter
from collections.abc import Callable
from enum import Enum

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from logging_config import get_logger


logger = get_logger(__name__)


class HealthState(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNRESPONSIVE = "unresponsive"


class HealthMonitor:
    """
    Probes `probe_url` every `interval_seconds` on a background thread.

    - 200 response: HEALTHY
    - connection failure, connect timeout, proxy failure or any other
      status: UNRESPONSIVE, `on_unresponsive` is called once
    - any other probe error (TLS handshake, read timeout, ...): DEGRADED

    The loop never stops on its own; stop() ends it without waiting out the
    current interval.
    """

    def __init__(
        self,
        probe_url: str,
        on_unresponsive: Callable[[], object],
        interval_seconds: float = 60.0,
        timeout_seconds: float = 10.0,
        verify_tls: bool = False,
        ca_file: str = "",
    ):
        self.probe_url = probe_url
        self.on_unresponsive = on_unresponsive
        self.interval = interval_seconds
        self.timeout = timeout_seconds
        # requests accepts a CA bundle path in place of True.
        self.verify = (ca_file or True) if verify_tls else False

        self.last_state: HealthState | None = None
        self.state_counts: Counter = Counter()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

        if self.verify is False:
            urllib3.disable_warnings(InsecureRequestWarning)

    def probe(self) -> HealthState:
        """Issues one GET against the server and classifies the result."""
        try:
            response = requests.get(self.probe_url, timeout=self.timeout, verify=self.verify)
        except requests.exceptions.SSLError as e:
            logger.error(f"Health probe TLS error: {e}")
            return HealthState.DEGRADED
        except requests.exceptions.ConnectionError as e:
            # Covers refused connections, connect timeouts and proxy failures.
            logger.error(f"Connection error on health probe: {e}")
            return HealthState.UNRESPONSIVE
        except Exception as e:
            logger.error(f"Unexpected error in health probe: {e}")
            return HealthState.DEGRADED

        try:
            if response.status_code != 200:
                logger.error(f"Health probe returned status {response.status_code}")
                return HealthState.UNRESPONSIVE
        finally:
            response.close()

        logger.debug("The server running")
        return HealthState.HEALTHY

    def run_once(self) -> HealthState:
        """Runs a single probe cycle, invoking recovery when unresponsive."""
        state = self.probe()
        self.last_state = state
        self.state_counts[state] += 1

        if state is HealthState.UNRESPONSIVE:
            logger.error("Server unresponsive. Restarting...")
            self.on_unresponsive()
        return state

    def _monitor_loop(self):
        """Main monitoring loop running in background thread."""
        logger.info(
            f"HealthMonitor started (url={self.probe_url}, interval={self.interval}s, verify={self.verify})"
        )

        while not self._stop_event.is_set():
            try:
                self.run_once()
            except Exception as e:
                logger.error(f"Unexpected error in monitoring thread: {e}", exc_info=True)

            self._stop_event.wait(self.interval)

    def start(self):
        """Start the monitoring thread."""
        if self._thread is not None and self._thread.is_alive():
            logger.warning("HealthMonitor already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._monitor_loop, daemon=True, name="HealthMonitor"
        )
        self._thread.start()

    def stop(self, timeout: float = 5.0):
        """Signal the monitoring thread to stop and wait for it."""
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=timeout)
            self._thread = None
        logger.info(f"HealthMonitor stopped ({dict((k.value, v) for k, v in self.state_counts.items())})")

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
