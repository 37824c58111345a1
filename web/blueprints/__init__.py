"""
Camera Control Web Blueprints Package.

This package contains Flask Blueprints for modular route organization.
"""

from web.blueprints.camera_control import camera_control_bp

__all__ = ["camera_control_bp"]
