"""
Control Server - Listener lifecycle for the camera control app.

Owns the werkzeug WSGI server and its serving thread. All bind, re-bind
and shutdown transitions go through one lock so a watchdog restart can
never interleave with another restart or with process shutdown.
"""

from __future__ import annotations

import os
import socket
import ssl
import sys
import threading

from flask import Flask
from werkzeug.serving import BaseWSGIServer, make_server

from config import ServerConfig
from logging_config import get_logger

logger = get_logger(__name__)

WILDCARD_HOSTS = {"", "0.0.0.0", "::"}


class PortUnavailableError(RuntimeError):
    """Raised when the listener cannot bind its configured address."""


def is_port_available(host: str, port: int) -> bool:
    """
    Checks whether host:port can be bound by binding and releasing a socket.

    Best-effort only: another process may grab the port between this check
    and the real bind, so callers must still handle a failing bind.
    """
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    with socket.socket(family, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
        except OSError:
            return False
    return True


def build_ssl_context(cert_file: str, key_file: str) -> ssl.SSLContext:
    """Server-side TLS context loaded from a certificate/key pair."""
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    context.load_cert_chain(certfile=cert_file, keyfile=key_file)
    return context


class ControlServer:
    """
    Serves a Flask app on a background thread with an explicit lifecycle.

    start() binds and serves, rebind() replaces the listening socket with a
    fresh one on the same address, stop() shuts down for good.
    """

    def __init__(
        self,
        app: Flask,
        host: str,
        port: int,
        ssl_context: ssl.SSLContext | None = None,
    ):
        self.app = app
        self.host = host
        self.port = port
        self.ssl_context = ssl_context

        self._lock = threading.Lock()
        self._server: BaseWSGIServer | None = None
        self._thread: threading.Thread | None = None
        self._stopping = False
        self._stopped = threading.Event()

    @classmethod
    def from_config(cls, app: Flask, server_config: ServerConfig) -> ControlServer:
        """Creates a TLS-enabled server from the process configuration."""
        server_config.require_credentials()
        ssl_context = build_ssl_context(server_config.cert_file, server_config.key_file)
        return cls(app, server_config.host, server_config.port, ssl_context=ssl_context)

    @property
    def scheme(self) -> str:
        return "https" if self.ssl_context is not None else "http"

    @property
    def probe_url(self) -> str:
        """Root URL of this server as seen from the local machine."""
        host = self.host
        if host in WILDCARD_HOSTS:
            host = "::1" if host == "::" else "127.0.0.1"
        if ":" in host:
            host = f"[{host}]"
        return f"{self.scheme}://{host}:{self.port}/"

    @property
    def is_serving(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def is_stopping(self) -> bool:
        return self._stopping

    def start(self) -> bool:
        """
        Checks the port, binds and starts serving on a background thread.

        Returns:
            False if the server was already started or has been stopped.

        Raises:
            PortUnavailableError: The address could not be bound.
        """
        with self._lock:
            if self._stopping:
                logger.warning("ControlServer has been stopped and cannot be started again")
                return False
            if self._server is not None:
                logger.warning("ControlServer already running")
                return False
            if not is_port_available(self.host, self.port):
                raise PortUnavailableError(f"Port {self.port} is not available!")
            self._bind()
        logger.info(f"The server runs at address: {self.host}:{self.port} ({self.scheme})")
        return True

    def rebind(self) -> bool:
        """
        Closes the current listener and binds a new one on the same address.

        Returns:
            False if the server is shutting down, True once serving again.

        Raises:
            PortUnavailableError: The new listener could not bind.
        """
        with self._lock:
            if self._stopping:
                logger.info("Skipping rebind, server is shutting down")
                return False
            self._unbind()
            self._bind()
        logger.info(f"Server re-bound at {self.host}:{self.port}")
        return True

    def respawn(self):
        """Closes the listener and replaces this process with a fresh copy."""
        with self._lock:
            if self._stopping:
                logger.info("Skipping respawn, server is shutting down")
                return
            self._unbind()
            logger.info("Re-executing server process")
            os.execv(sys.executable, [sys.executable, *sys.argv])

    def stop(self):
        """Stops serving. Idempotent; waits for an in-flight rebind to finish."""
        with self._lock:
            if self._stopping:
                return
            self._stopping = True
            logger.info("Stopping ControlServer...")
            self._unbind()
        self._stopped.set()
        logger.info("ControlServer stopped")

    def wait(self, timeout: float | None = None) -> bool:
        """Blocks until stop() has completed. Returns False on timeout."""
        return self._stopped.wait(timeout)

    def _bind(self):
        try:
            server = make_server(
                self.host,
                self.port,
                self.app,
                threaded=True,
                ssl_context=self.ssl_context,
            )
        except SystemExit as e:
            # werkzeug reports bind errors on stderr and exits.
            raise PortUnavailableError(f"Failed to bind {self.host}:{self.port}") from e
        except OSError as e:
            raise PortUnavailableError(f"Failed to bind {self.host}:{self.port}: {e}") from e

        # Port 0 requests an ephemeral port; keep the real one for rebinds.
        self.port = server.server_port
        self._server = server
        self._thread = threading.Thread(
            target=server.serve_forever, daemon=True, name="ControlServer"
        )
        self._thread.start()

    def _unbind(self):
        server, thread = self._server, self._thread
        self._server, self._thread = None, None
        if server is None:
            return
        server.shutdown()
        server.server_close()
        if thread is not None:
            thread.join(timeout=5.0)
