"""Health blueprint: liveness and exchange-rate readiness."""

from __future__ import annotations

from flask_smorest import Blueprint

blp = Blueprint("Health", __name__, description="Liveness and rate readiness checks")

from . import routes  # noqa: E402,F401
