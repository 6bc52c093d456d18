# File: flashdeck_app/modules/decks/__init__.py
from flask import Blueprint

# HTML pages (dashboard, deck detail)
decks_bp = Blueprint('decks', __name__)
# JSON API, mounted at /api/decks
decks_api_bp = Blueprint('decks_api', __name__)

from .routes import api, views  # noqa: E402,F401
