import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from flashdeck_app import create_app
from flashdeck_app.config import Config
from flashdeck_app.db_instance import db
from flashdeck_app.models import Card, Deck, User


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'connect_args': {'check_same_thread': False}
    }
    WTF_CSRF_ENABLED = False
    LOG_TO_FILE = False
    GEMINI_API_KEY = None
    QUOTA_LIMIT_DECKS_FREE = None


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


def make_user(username, plan_role=User.ROLE_FREE):
    user = User(username=username, email=f'{username}@example.com', plan_role=plan_role)
    user.set_password('password123')
    db.session.add(user)
    db.session.commit()
    return user


def make_deck(user, name='Spanish basics', description='Common Spanish words', cards=0):
    deck = Deck(user_id=user.user_id, name=name, description=description)
    db.session.add(deck)
    db.session.flush()
    for i in range(cards):
        db.session.add(Card(deck_id=deck.id, front=f'Front {i + 1}', back=f'Back {i + 1}'))
    db.session.commit()
    return deck


def login(client, user_id):
    with client.session_transaction() as session:
        session['_user_id'] = str(user_id)
        session['_fresh'] = True


@pytest.fixture
def free_user(app):
    return make_user('free_user')


@pytest.fixture
def pro_user(app):
    return make_user('pro_user', User.ROLE_PRO)


@pytest.fixture
def other_user(app):
    return make_user('other_user')
