# ------------------------------------------------------------------------------
# Camera Device Loader
# camera/device_loader.py
# ------------------------------------------------------------------------------
import importlib

from camera.interfaces import CameraDeviceInterface
from logging_config import get_logger

logger = get_logger(__name__)


class DeviceFactoryError(RuntimeError):
    """Raised when the configured camera device factory cannot be used."""


def load_camera_device(factory_path: str) -> CameraDeviceInterface | None:
    """
    Imports and calls a camera device factory given as "package.module:callable".

    Returns None when no factory is configured; the server then answers every
    device command with its failure envelope.
    """
    if not factory_path:
        logger.warning(
            "CAMERA_DEVICE_FACTORY not set, camera commands will report the device as unavailable."
        )
        return None

    module_name, sep, attr = factory_path.partition(":")
    if not sep or not module_name or not attr:
        raise DeviceFactoryError(
            f"CAMERA_DEVICE_FACTORY must look like 'package.module:callable', got {factory_path!r}"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise DeviceFactoryError(f"Cannot import {module_name}: {e}") from e

    factory = getattr(module, attr, None)
    if not callable(factory):
        raise DeviceFactoryError(f"{factory_path} is not callable")

    try:
        device = factory()
    except Exception as e:
        raise DeviceFactoryError(f"{factory_path} failed to create a device: {e}") from e

    if not isinstance(device, CameraDeviceInterface):
        raise DeviceFactoryError(
            f"{factory_path} returned {type(device).__name__}, expected a CameraDeviceInterface"
        )

    logger.info(f"Camera device loaded from {factory_path} ({type(device).__name__})")
    return device
