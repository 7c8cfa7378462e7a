"""QR Attendance portal package.

Organized by feature modules (session, users, attendance) with a thin Flask
controller layer over service/repository layers.
"""
from __future__ import annotations

from .main import create_app

__all__ = ["create_app"]
