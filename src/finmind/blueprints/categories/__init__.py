"""Categories blueprint package."""

from __future__ import annotations

from flask import Blueprint

from ...security import require_auth

bp = Blueprint("categories", __name__, url_prefix="/categories")
bp.before_request(require_auth)

from . import routes  # noqa: E402,F401 - ensure routes get registered

__all__ = ["bp"]
