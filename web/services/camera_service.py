"""
Camera Service - Web Layer Service for Camera Commands.

Binds request data and the application's camera device to core commands.
"""

from flask import current_app, request

from core import camera_control_core
from core.envelope import ResponseEnvelope

DEVICE_EXTENSION_KEY = "camera_device"


def get_device():
    """Returns the camera device registered on the current app, or None."""
    return current_app.extensions.get(DEVICE_EXTENSION_KEY)


def server_status() -> ResponseEnvelope:
    return camera_control_core.server_status()


def run_command(name: str) -> ResponseEnvelope:
    """
    Runs the named camera command with the current request's query string.

    Args:
        name: Key in camera_control_core.COMMANDS.
    """
    command = camera_control_core.COMMANDS[name]
    return camera_control_core.execute_command(command, get_device(), request.args)
