"""Conversion blueprint: catalog, picker selection, conversion and refresh."""

from __future__ import annotations

from flask_smorest import Blueprint

blp = Blueprint("Conversion", __name__, description="Currency conversion endpoints")

from . import routes  # noqa: E402,F401
