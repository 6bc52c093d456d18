# File: flashdeck_app/modules/study/__init__.py
from flask import Blueprint

# Study page
study_bp = Blueprint('study', __name__)
# Study session JSON API, mounted at /api/study
study_api_bp = Blueprint('study_api', __name__)

from .routes import api, views  # noqa: E402,F401
