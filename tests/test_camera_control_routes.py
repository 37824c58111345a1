"""
Camera Control Blueprint Tests.

These tests verify the HTTP contract of the control endpoints: status
codes, JSON envelopes, plain-text rejections and the CORS header.
"""

from unittest.mock import MagicMock, patch

import pytest

from camera.interfaces import CameraDeviceInterface
from web.services import camera_service
from web.web_interface import create_web_interface


@pytest.fixture
def device():
    mock_device = MagicMock(spec=CameraDeviceInterface)
    mock_device.switch_to_p_mode.return_value = True
    mock_device.switch_to_m_mode.return_value = True
    mock_device.change_brightness.return_value = True
    mock_device.change_af_area_position.return_value = True
    mock_device.get_camera_mode.return_value = True
    mock_device.get_camera_mode_str.return_value = "M"
    mock_device.upload_camera_setting.return_value = True
    return mock_device


@pytest.fixture
def app(device):
    app = create_web_interface(device)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


class TestIndicator:
    def test_root_reports_running(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.get_json() == {"message": "The server is running"}
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        assert response.mimetype == "application/json"

    def test_json_bodies_are_compact(self, client, device):
        assert client.get("/").data == b'{"message":"The server is running"}'

        device.switch_to_p_mode.return_value = False
        assert (
            client.get("/switch_to_p_mode?camera_id=1").data
            == b'{"error":"Failed to switch to P mode"}'
        )
        assert (
            client.get("/get_camera_mode?camera_id=1").data
            == b'{"message":"Successfully retrieved camera mode","mode":"M"}'
        )


class TestCameraCommands:
    @pytest.mark.parametrize(
        "path,query,message",
        [
            ("/switch_to_p_mode", "camera_id=1", "Successfully switched to P mode"),
            ("/switch_to_m_mode", "camera_id=1", "Successfully switched to M mode"),
            (
                "/change_brightness",
                "camera_id=0&brightness_value=5",
                "Successfully changed brightness value",
            ),
            (
                "/change_af_area_position",
                "camera_id=2&x=320&y=240",
                "Successfully changed AF Area Position",
            ),
            ("/download_camera_setting", "camera_id=3", "Successfully download camera setting"),
            ("/upload_camera_setting", "camera_id=3", "Successfully upload camera setting"),
        ],
    )
    def test_success_envelopes(self, client, path, query, message):
        response = client.get(f"{path}?{query}")

        assert response.status_code == 200
        assert response.get_json() == {"message": message}
        assert response.headers["Access-Control-Allow-Origin"] == "*"

    def test_switch_to_p_mode_failure(self, client, device):
        device.switch_to_p_mode.return_value = False

        response = client.get("/switch_to_p_mode?camera_id=1")

        assert response.status_code == 500
        assert response.get_json() == {"error": "Failed to switch to P mode"}
        assert response.headers["Access-Control-Allow-Origin"] == "*"

    def test_get_camera_mode_includes_mode(self, client, device):
        response = client.get("/get_camera_mode?camera_id=0")

        assert response.status_code == 200
        data = response.get_json()
        assert data["message"] == "Successfully retrieved camera mode"
        assert data["mode"] == "M"
        device.get_camera_mode.assert_called_once_with(0)

    def test_repeated_requests_are_byte_identical(self, client):
        first = client.get("/get_camera_mode?camera_id=1")
        second = client.get("/get_camera_mode?camera_id=1")

        assert first.status_code == second.status_code == 200
        assert first.data == second.data


class TestRejectedInput:
    def test_out_of_range_is_plain_text(self, client, device):
        response = client.get("/change_brightness?camera_id=5")

        assert response.status_code == 400
        assert response.get_data(as_text=True) == "Camera_id out of range"
        assert response.mimetype == "text/plain"
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        device.change_brightness.assert_not_called()

    def test_missing_camera_id(self, client):
        response = client.get("/switch_to_m_mode")

        assert response.status_code == 400
        assert response.get_data(as_text=True) == "Missing camera_id parameter"

    def test_non_numeric_camera_id(self, client, device):
        response = client.get("/upload_camera_setting?camera_id=abc")

        assert response.status_code == 400
        assert response.get_data(as_text=True) == "Invalid camera_id parameter"
        device.upload_camera_setting.assert_not_called()

    def test_missing_brightness_value(self, client):
        response = client.get("/change_brightness?camera_id=1")

        assert response.status_code == 400
        assert response.get_data(as_text=True) == "Missing or invalid parameters"

    def test_unparseable_coordinate(self, client, device):
        response = client.get("/change_af_area_position?camera_id=1&x=1&y=abc")

        assert response.status_code == 400
        device.change_af_area_position.assert_not_called()

    def test_oversized_camera_id_is_rejected(self, client, device):
        response = client.get("/switch_to_p_mode?camera_id=" + "1" * 5000)

        assert response.status_code == 400
        assert response.get_data(as_text=True) == "Invalid camera_id parameter"
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        device.switch_to_p_mode.assert_not_called()

    def test_oversized_brightness_value_is_rejected(self, client, device):
        response = client.get("/change_brightness?camera_id=1&brightness_value=" + "9" * 5000)

        assert response.status_code == 400
        assert response.get_data(as_text=True) == "Missing or invalid parameters"
        device.change_brightness.assert_not_called()


class TestUnavailableDevice:
    def test_commands_fail_without_device(self):
        app = create_web_interface(None)
        with app.test_client() as client:
            response = client.get("/switch_to_m_mode?camera_id=0")

        assert response.status_code == 500
        assert response.get_json() == {"error": "Failed to switch to M mode"}

    def test_indicator_still_answers_without_device(self):
        app = create_web_interface(None)
        with app.test_client() as client:
            response = client.get("/")

        assert response.status_code == 200


class TestErrorBoundaries:
    def test_unclassified_error_still_responds(self, client):
        with patch.object(camera_service, "run_command", side_effect=KeyError("boom")):
            response = client.get("/switch_to_p_mode?camera_id=1")

        assert response.status_code == 500
        assert response.get_json() == {"error": "Internal server error"}
        assert response.headers["Access-Control-Allow-Origin"] == "*"

    def test_unknown_path_uses_default_not_found(self, client):
        response = client.get("/does_not_exist")

        assert response.status_code == 404
        assert response.headers["Access-Control-Allow-Origin"] == "*"

    def test_other_verbs_are_not_allowed(self, client):
        response = client.post("/switch_to_p_mode?camera_id=1")

        assert response.status_code == 405

    def test_custom_cors_origin(self, device):
        app = create_web_interface(device, cors_allow_origin="https://console.example")
        with app.test_client() as client:
            response = client.get("/")

        assert response.headers["Access-Control-Allow-Origin"] == "https://console.example"
