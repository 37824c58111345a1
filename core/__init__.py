"""
Camera Control Core Package.

This package contains the core business logic of the control server,
separated from the web layer. Parameter validation, command dispatch to
the camera device and response envelopes live here.

ARCHITECTURE RULES:
- core/ modules may only import from:
  - Python standard library
  - camera/ (for the device interface)
  - config (for global configuration)

- core/ modules MUST NOT import from:
  - web/ (no Flask dependencies)
  - flask, werkzeug, requests, or any web-specific packages
"""

__all__ = [
    "camera_control_core",
    "envelope",
    "validation",
]
