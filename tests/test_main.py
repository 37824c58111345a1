"""
Startup and shutdown wiring tests for main.main().
"""

from unittest.mock import MagicMock

import main as main_mod
from camera.device_loader import DeviceFactoryError
from web.server import PortUnavailableError


def test_missing_credentials_abort_startup(monkeypatch):
    monkeypatch.setitem(main_mod.config, "SSL_CERT_FILE", "")
    monkeypatch.setitem(main_mod.config, "SSL_KEY_FILE", "")
    monkeypatch.setitem(main_mod.config, "CAMERA_DEVICE_FACTORY", "")

    assert main_mod.main() == 1


def test_busy_port_aborts_startup(monkeypatch):
    fake_server = MagicMock()
    fake_server.start.side_effect = PortUnavailableError("Port 8443 is not available!")
    monkeypatch.setattr(main_mod.ControlServer, "from_config", lambda app, cfg: fake_server)
    monitor_cls = MagicMock()
    monkeypatch.setattr(main_mod, "HealthMonitor", monitor_cls)
    monkeypatch.setitem(main_mod.config, "CAMERA_DEVICE_FACTORY", "")

    assert main_mod.main() == 1
    monitor_cls.assert_not_called()


def test_runs_monitor_and_shuts_down_cleanly(monkeypatch):
    fake_server = MagicMock()
    fake_server.probe_url = "https://127.0.0.1:8443/"
    monkeypatch.setattr(main_mod.ControlServer, "from_config", lambda app, cfg: fake_server)
    monitor_cls = MagicMock()
    monkeypatch.setattr(main_mod, "HealthMonitor", monitor_cls)
    monkeypatch.setitem(main_mod.config, "CAMERA_DEVICE_FACTORY", "")
    monkeypatch.setitem(main_mod.config, "HEALTH_CHECK_ENABLED", True)

    assert main_mod.main() == 0

    fake_server.start.assert_called_once_with()
    fake_server.wait.assert_called_once_with()
    fake_server.stop.assert_called_once_with()
    monitor_cls.assert_called_once()
    assert monitor_cls.call_args.kwargs["probe_url"] == "https://127.0.0.1:8443/"
    monitor_cls.return_value.start.assert_called_once_with()
    monitor_cls.return_value.stop.assert_called_once_with()


def test_health_monitor_can_be_disabled(monkeypatch):
    fake_server = MagicMock()
    monkeypatch.setattr(main_mod.ControlServer, "from_config", lambda app, cfg: fake_server)
    monitor_cls = MagicMock()
    monkeypatch.setattr(main_mod, "HealthMonitor", monitor_cls)
    monkeypatch.setitem(main_mod.config, "CAMERA_DEVICE_FACTORY", "")
    monkeypatch.setitem(main_mod.config, "HEALTH_CHECK_ENABLED", False)

    assert main_mod.main() == 0
    monitor_cls.assert_not_called()
    fake_server.stop.assert_called_once_with()


def test_failing_device_factory_aborts_startup(monkeypatch):
    def failing_loader(factory_path):
        raise DeviceFactoryError(f"{factory_path} failed to create a device: SDK init failed")

    monkeypatch.setattr(main_mod, "load_camera_device", failing_loader)
    monkeypatch.setitem(main_mod.config, "CAMERA_DEVICE_FACTORY", "vendor_sdk:create_device")

    assert main_mod.main() == 1
