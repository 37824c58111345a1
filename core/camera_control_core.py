"""
Camera Control Core - Command dispatch to the camera device.

Each endpoint is described by a CameraCommand. execute_command() applies the
shared contract: validate camera_id, validate command-specific integers,
call the device once, and map the boolean outcome to an envelope.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from camera.interfaces import CameraDeviceInterface
from core.envelope import ResponseEnvelope
from core.validation import validate_camera_id, validate_int_params

logger = logging.getLogger(__name__)

SERVER_RUNNING_MESSAGE = "The server is running"


@dataclass(frozen=True)
class CameraCommand:
    """Static description of one device-backed endpoint."""

    name: str
    success_message: str
    failure_message: str
    invoke: Callable[..., bool]
    int_params: tuple[str, ...] = ()
    # Extra success fields, read from the device after invoke() succeeded.
    enrich: Callable[[CameraDeviceInterface, int], dict[str, Any]] | None = None


def _mode_details(device: CameraDeviceInterface, camera_id: int) -> dict[str, Any]:
    return {"mode": str(device.get_camera_mode_str(camera_id))}


SWITCH_TO_P_MODE = CameraCommand(
    name="switch_to_p_mode",
    success_message="Successfully switched to P mode",
    failure_message="Failed to switch to P mode",
    invoke=lambda device, camera_id: device.switch_to_p_mode(camera_id),
)

SWITCH_TO_M_MODE = CameraCommand(
    name="switch_to_m_mode",
    success_message="Successfully switched to M mode",
    failure_message="Failed to switch to M mode",
    invoke=lambda device, camera_id: device.switch_to_m_mode(camera_id),
)

CHANGE_BRIGHTNESS = CameraCommand(
    name="change_brightness",
    success_message="Successfully changed brightness value",
    failure_message="Failed to change brightness value",
    invoke=lambda device, camera_id, value: device.change_brightness(camera_id, value),
    int_params=("brightness_value",),
)

CHANGE_AF_AREA_POSITION = CameraCommand(
    name="change_af_area_position",
    success_message="Successfully changed AF Area Position",
    failure_message="Failed to change AF Area Position",
    invoke=lambda device, camera_id, x, y: device.change_af_area_position(camera_id, x, y),
    int_params=("x", "y"),
)

GET_CAMERA_MODE = CameraCommand(
    name="get_camera_mode",
    success_message="Successfully retrieved camera mode",
    failure_message="Failed to retrieve camera mode",
    invoke=lambda device, camera_id: device.get_camera_mode(camera_id),
    enrich=_mode_details,
)

# Settings download is a mode read on the device side; no file is transferred.
DOWNLOAD_CAMERA_SETTING = CameraCommand(
    name="download_camera_setting",
    success_message="Successfully download camera setting",
    failure_message="Failed to download camera setting",
    invoke=lambda device, camera_id: device.get_camera_mode(camera_id),
)

UPLOAD_CAMERA_SETTING = CameraCommand(
    name="upload_camera_setting",
    success_message="Successfully upload camera setting",
    failure_message="Failed to upload camera setting",
    invoke=lambda device, camera_id: device.upload_camera_setting(camera_id),
)

COMMANDS: dict[str, CameraCommand] = {
    command.name: command
    for command in (
        SWITCH_TO_P_MODE,
        SWITCH_TO_M_MODE,
        CHANGE_BRIGHTNESS,
        CHANGE_AF_AREA_POSITION,
        GET_CAMERA_MODE,
        DOWNLOAD_CAMERA_SETTING,
        UPLOAD_CAMERA_SETTING,
    )
}


def server_status() -> ResponseEnvelope:
    """Liveness envelope for the root endpoint."""
    return ResponseEnvelope.success(SERVER_RUNNING_MESSAGE)


def execute_command(
    command: CameraCommand,
    device: CameraDeviceInterface | None,
    params: Mapping[str, str],
) -> ResponseEnvelope:
    """
    Runs one camera command against the device.

    Returns:
        400 plain text for rejected input (the device is not touched),
        500 with the command's error envelope when the device is missing,
        reports failure or raises, 200 with its message otherwise.
    """
    camera_id_result = validate_camera_id(params)
    if not camera_id_result.ok:
        return ResponseEnvelope.bad_request(camera_id_result.error)
    camera_id = camera_id_result.value

    args: tuple[int, ...] = ()
    if command.int_params:
        args_result = validate_int_params(params, command.int_params)
        if not args_result.ok:
            return ResponseEnvelope.bad_request(args_result.error)
        args = args_result.value

    if device is None:
        logger.error(f"{command.name}: camera device unavailable (camera_id={camera_id})")
        return ResponseEnvelope.failure(command.failure_message)

    logger.info(f"{command.name}: camera_id={camera_id} args={list(args)}")
    try:
        success = bool(command.invoke(device, camera_id, *args))
        extra = command.enrich(device, camera_id) if success and command.enrich else {}
    except Exception as e:
        logger.error(f"{command.name}: device call raised for camera_id={camera_id}: {e}", exc_info=True)
        return ResponseEnvelope.failure(command.failure_message)

    if not success:
        logger.error(f"{command.name}: device reported failure for camera_id={camera_id}")
        return ResponseEnvelope.failure(command.failure_message)

    return ResponseEnvelope.success(command.success_message, **extra)
