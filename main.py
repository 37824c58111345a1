# ------------------------------------------------------------------------------
# Main Script for the Camera Control HTTPS Server with Self-Monitoring
# main.py
# ------------------------------------------------------------------------------
import sys

from config import ConfigError, ServerConfig, get_config
config = get_config()
from logging_config import get_logger
logger = get_logger(__name__)

from camera.device_loader import DeviceFactoryError, load_camera_device
from utils.health_monitor import HealthMonitor
from web.restart_supervisor import RestartSupervisor
from web.server import ControlServer, PortUnavailableError
from web.web_interface import create_web_interface


def main() -> int:
    _debug = config["DEBUG_MODE"]
    logger.info(f"Debug mode is {'enabled' if _debug else 'disabled'}.")

    try:
        server_config = ServerConfig.from_config(config)
        camera_device = load_camera_device(config["CAMERA_DEVICE_FACTORY"])
        app = create_web_interface(camera_device, server_config.cors_allow_origin)
        server = ControlServer.from_config(app, server_config)
        server.start()
    except (ConfigError, DeviceFactoryError, PortUnavailableError, OSError) as e:
        logger.error(f"Server Error: {e}")
        return 1

    supervisor = RestartSupervisor(
        server,
        delay_seconds=server_config.restart_delay,
        mode=server_config.restart_mode,
    )

    # -----------------------------
    # Start the Health Monitor
    # -----------------------------
    monitor = None
    if server_config.health_check_enabled:
        monitor = HealthMonitor(
            probe_url=server.probe_url,
            on_unresponsive=supervisor.restart,
            interval_seconds=server_config.health_check_interval,
            timeout_seconds=server_config.health_check_timeout,
            verify_tls=server_config.health_check_verify_tls,
            ca_file=server_config.health_check_ca_file,
        )
        monitor.start()
    else:
        logger.warning("Health monitor disabled, server will not restart itself.")

    try:
        server.wait()
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt received. Shutting down server...")
    finally:
        supervisor.shutdown()
        if monitor is not None:
            monitor.stop()
        server.stop()
    return 0


if __name__ == '__main__':
    sys.exit(main())
