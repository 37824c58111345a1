"""
Camera Interfaces.

Abstract contracts for hardware the control server talks to. The server
only depends on these; vendor-specific implementations are injected.
"""

from camera.interfaces.device import CameraDeviceInterface

__all__ = [
    "CameraDeviceInterface",
]
