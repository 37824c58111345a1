"""
Camera Control Blueprint.

Handles all camera command routes:
- GET / - Server liveness indicator
- GET /switch_to_p_mode - Exposure program P mode
- GET /switch_to_m_mode - Exposure program M mode
- GET /change_brightness - Brightness value
- GET /change_af_area_position - Autofocus area position
- GET /get_camera_mode - Current exposure program mode
- GET /download_camera_setting - Camera setting download
- GET /upload_camera_setting - Camera setting upload

All routes take camera_id (0-3) except the indicator. Rejected input is
answered with 400 plain text, device outcomes with JSON.
"""

from flask import Blueprint, Response, current_app

from core.envelope import ResponseEnvelope
from logging_config import get_logger
from web.services import camera_service

logger = get_logger(__name__)

camera_control_bp = Blueprint("camera_control", __name__)


def to_response(envelope: ResponseEnvelope) -> Response:
    """
    Serializes an envelope into a Flask response.

    JSON bodies are compact with no trailing newline, e.g. {"message":"..."}.
    """
    if envelope.is_json:
        body = current_app.json.dumps(envelope.body, separators=(",", ":"))
        response = Response(body, mimetype=current_app.json.mimetype)
    else:
        response = Response(envelope.body, mimetype="text/plain")
    response.status_code = envelope.status_code
    return response


@camera_control_bp.route("/", methods=["GET"])
def indicator():
    """Liveness endpoint, also used by the health monitor's self-probe."""
    return to_response(camera_service.server_status())


@camera_control_bp.route("/switch_to_p_mode", methods=["GET"])
def switch_to_p_mode():
    return to_response(camera_service.run_command("switch_to_p_mode"))


@camera_control_bp.route("/switch_to_m_mode", methods=["GET"])
def switch_to_m_mode():
    return to_response(camera_service.run_command("switch_to_m_mode"))


@camera_control_bp.route("/change_brightness", methods=["GET"])
def change_brightness():
    """Requires brightness_value; the value is passed to the device as-is."""
    return to_response(camera_service.run_command("change_brightness"))


@camera_control_bp.route("/change_af_area_position", methods=["GET"])
def change_af_area_position():
    """Requires x and y."""
    return to_response(camera_service.run_command("change_af_area_position"))


@camera_control_bp.route("/get_camera_mode", methods=["GET"])
def get_camera_mode():
    """Adds the device's mode string to the success envelope."""
    return to_response(camera_service.run_command("get_camera_mode"))


@camera_control_bp.route("/download_camera_setting", methods=["GET"])
def download_camera_setting():
    return to_response(camera_service.run_command("download_camera_setting"))


@camera_control_bp.route("/upload_camera_setting", methods=["GET"])
def upload_camera_setting():
    return to_response(camera_service.run_command("upload_camera_setting"))
