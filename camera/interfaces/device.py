"""
Camera Device Interface - Remote Camera Control.

Defines the contract for the hardware-facing command layer the control
server forwards requests to. Concrete implementations wrap a vendor SDK
and are supplied at startup; none ships with the server.
"""

from abc import ABC, abstractmethod


class CameraDeviceInterface(ABC):
    """
    Interface for remote camera commands, keyed by camera id.

    Every command returns True on success and False when the device
    rejected or failed the operation. Implementations are shared across
    request threads and must serialize their own device access.
    """

    @abstractmethod
    def switch_to_p_mode(self, camera_id: int) -> bool:
        """Sets the exposure program to P (program auto) mode."""
        pass

    @abstractmethod
    def switch_to_m_mode(self, camera_id: int) -> bool:
        """Sets the exposure program to M (manual) mode."""
        pass

    @abstractmethod
    def change_brightness(self, camera_id: int, value: int) -> bool:
        """
        Changes the brightness (exposure compensation) value.

        Args:
            camera_id: Target camera.
            value: Raw brightness value, passed through unmodified.
        """
        pass

    @abstractmethod
    def change_af_area_position(self, camera_id: int, x: int, y: int) -> bool:
        """
        Moves the autofocus area to the given position.

        Args:
            camera_id: Target camera.
            x: Horizontal position in device coordinates.
            y: Vertical position in device coordinates.
        """
        pass

    @abstractmethod
    def get_camera_mode(self, camera_id: int) -> bool:
        """Queries the current exposure program mode from the device."""
        pass

    @abstractmethod
    def get_camera_mode_str(self, camera_id: int) -> str:
        """
        Returns a display string for the mode read by get_camera_mode().

        Only meaningful after a successful get_camera_mode() call.
        """
        pass

    @abstractmethod
    def upload_camera_setting(self, camera_id: int) -> bool:
        """Uploads the stored camera setting file to the device."""
        pass
