"""
Camera Control Services Package.

This package contains service layer modules that bind Flask request state
to core business logic, keeping routes thin and testable.

ARCHITECTURE RULE:
- Services may ONLY import from core/* modules
- Services MUST NOT import directly from camera/ or utils/
"""

from web.services import camera_service

__all__ = [
    "camera_service",
]
