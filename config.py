# config.py
import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables from .env file.
load_dotenv()

RESTART_MODES = ("rebind", "respawn")

_config_cache = None


class ConfigError(ValueError):
    """Raised when a configuration value cannot be used to start the server."""


def _env_bool(name, default):
    return os.getenv(name, default).strip().lower() == "true"


def load_config():
    """
    Loads configuration from environment variables and returns a dictionary.
    """
    config = {
        # General Settings
        "DEBUG_MODE": _env_bool("DEBUG_MODE", "False"),

        # Listener Settings
        "SERVER_HOST": os.getenv("SERVER_HOST", "0.0.0.0"),
        "SERVER_PORT": os.getenv("SERVER_PORT", "8080"),
        "SSL_CERT_FILE": os.getenv("SSL_CERT_FILE", ""),
        "SSL_KEY_FILE": os.getenv("SSL_KEY_FILE", ""),
        "CORS_ALLOW_ORIGIN": os.getenv("CORS_ALLOW_ORIGIN", "*"),

        # Health Monitor Settings
        "HEALTH_CHECK_ENABLED": _env_bool("HEALTH_CHECK_ENABLED", "True"),
        "HEALTH_CHECK_INTERVAL": float(os.getenv("HEALTH_CHECK_INTERVAL", 60)),
        "HEALTH_CHECK_TIMEOUT": float(os.getenv("HEALTH_CHECK_TIMEOUT", 10)),
        # Self-probe skips certificate verification unless explicitly enabled.
        "HEALTH_CHECK_VERIFY_TLS": _env_bool("HEALTH_CHECK_VERIFY_TLS", "False"),
        "HEALTH_CHECK_CA_FILE": os.getenv("HEALTH_CHECK_CA_FILE", ""),

        # Restart Settings
        "RESTART_DELAY": float(os.getenv("RESTART_DELAY", 1)),
        "RESTART_MODE": os.getenv("RESTART_MODE", "rebind").strip().lower(),

        # Camera device factory as "package.module:callable"
        "CAMERA_DEVICE_FACTORY": os.getenv("CAMERA_DEVICE_FACTORY", ""),
    }
    return config


def get_config():
    """Returns the process-wide configuration, loading it on first use."""
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache


@dataclass(frozen=True)
class ServerConfig:
    """Immutable listener and watchdog settings for one server process."""

    host: str
    port: int
    cert_file: str
    key_file: str
    cors_allow_origin: str = "*"
    health_check_enabled: bool = True
    health_check_interval: float = 60.0
    health_check_timeout: float = 10.0
    health_check_verify_tls: bool = False
    health_check_ca_file: str = ""
    restart_delay: float = 1.0
    restart_mode: str = "rebind"

    @classmethod
    def from_config(cls, config: dict) -> "ServerConfig":
        """Builds a ServerConfig from a load_config() dictionary."""
        try:
            port = int(config["SERVER_PORT"])
        except (TypeError, ValueError):
            raise ConfigError(f"SERVER_PORT must be an integer, got {config['SERVER_PORT']!r}")
        if not 0 < port < 65536:
            raise ConfigError(f"SERVER_PORT out of range: {port}")

        restart_mode = config.get("RESTART_MODE", "rebind")
        if restart_mode not in RESTART_MODES:
            raise ConfigError(
                f"RESTART_MODE must be one of {', '.join(RESTART_MODES)}, got {restart_mode!r}"
            )

        if config.get("HEALTH_CHECK_INTERVAL", 60.0) <= 0:
            raise ConfigError("HEALTH_CHECK_INTERVAL must be positive")

        return cls(
            host=config["SERVER_HOST"],
            port=port,
            cert_file=config.get("SSL_CERT_FILE", ""),
            key_file=config.get("SSL_KEY_FILE", ""),
            cors_allow_origin=config.get("CORS_ALLOW_ORIGIN", "*"),
            health_check_enabled=config.get("HEALTH_CHECK_ENABLED", True),
            health_check_interval=config.get("HEALTH_CHECK_INTERVAL", 60.0),
            health_check_timeout=config.get("HEALTH_CHECK_TIMEOUT", 10.0),
            health_check_verify_tls=config.get("HEALTH_CHECK_VERIFY_TLS", False),
            health_check_ca_file=config.get("HEALTH_CHECK_CA_FILE", ""),
            restart_delay=max(0.0, config.get("RESTART_DELAY", 1.0)),
            restart_mode=restart_mode,
        )

    def require_credentials(self):
        """Raises ConfigError unless both certificate and key files exist."""
        for name, path in (("SSL_CERT_FILE", self.cert_file), ("SSL_KEY_FILE", self.key_file)):
            if not path:
                raise ConfigError(f"{name} is required")
            if not os.path.isfile(path):
                raise ConfigError(f"{name} not found: {path}")


if __name__ == "__main__":
    # For testing purposes, print the configuration
    config = load_config()
    from pprint import pprint

    pprint(config)
