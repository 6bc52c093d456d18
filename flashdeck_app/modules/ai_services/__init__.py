# File: flashdeck_app/modules/ai_services/__init__.py
# Blueprint for AI card generation.

from flask import Blueprint

ai_services_bp = Blueprint('ai_services', __name__)

from . import routes  # noqa: E402,F401
