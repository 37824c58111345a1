# ------------------------------------------------------------------------------
# web_interface.py
# ------------------------------------------------------------------------------

from flask import Flask
from werkzeug.exceptions import HTTPException

from camera.interfaces import CameraDeviceInterface
from core.envelope import ResponseEnvelope
from logging_config import get_logger
from web.blueprints import camera_control_bp
from web.blueprints.camera_control import to_response
from web.services.camera_service import DEVICE_EXTENSION_KEY

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def create_web_interface(
    camera_device: CameraDeviceInterface | None,
    cors_allow_origin: str = "*",
) -> Flask:
    """
    Creates the Flask application serving the camera control routes.

    Args:
        camera_device: Device commands are forwarded to. None keeps the server
            up but answers every camera command with its failure envelope.
        cors_allow_origin: Value of Access-Control-Allow-Origin on every response.
    """
    app = Flask(__name__)
    app.extensions[DEVICE_EXTENSION_KEY] = camera_device
    app.register_blueprint(camera_control_bp)

    @app.after_request
    def add_cors_header(response):
        response.headers["Access-Control-Allow-Origin"] = cors_allow_origin
        return response

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        # Routing errors (404/405) keep werkzeug's default responses.
        if isinstance(e, HTTPException):
            return e
        logger.error(f"Unhandled error in request: {e}", exc_info=True)
        return to_response(ResponseEnvelope.failure(INTERNAL_ERROR_MESSAGE))

    if camera_device is None:
        logger.warning("Web interface created without a camera device.")
    return app
