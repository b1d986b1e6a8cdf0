import os
import random
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from newquiz import create_app
from newquiz.config import TestingConfig
from newquiz.models import GameSettings
from newquiz.services.content_service import ContentService
from newquiz.services.end_game_service import EndGameService
from newquiz.services.game_service import get_game_service
from newquiz.services.job_scheduler import JobScheduler
from newquiz.services.store import InMemoryStore
from newquiz.services.xp_service import XpConfig


TEST_WORDS = {
    'TEXT': ['ALLOY', 'CRANE'],
    'NUMBER': ['12345'],
    'MATH_FORMULA': ['1+2=3'],
}

TEST_QUESTIONS = [
    {'id': 1, 'description': 'Capital of France?', 'answers': ['Paris', 'Rome', 'Madrid', 'Berlin'],
     'correct_answer': 0, 'category': 'geography', 'difficulty': 'easy'},
    {'id': 2, 'description': '2 + 2?', 'answers': ['3', '4', '5', '22'],
     'correct_answer': 1, 'category': 'math', 'difficulty': 'easy'},
    {'id': 3, 'description': 'Largest planet?', 'answers': ['Mars', 'Venus', 'Jupiter', 'Earth'],
     'correct_answer': 2, 'category': 'science', 'difficulty': 'medium'},
]


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def content():
    return ContentService(word_lists=TEST_WORDS, questions=TEST_QUESTIONS, rng=random.Random(7))


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def scheduler():
    return JobScheduler()


@pytest.fixture
def xp_config():
    return XpConfig()


@pytest.fixture
def end_game(store, scheduler, xp_config):
    return EndGameService(store, scheduler, xp_config)


@pytest.fixture
def settings():
    return GameSettings()


@pytest.fixture
def app(tmp_path, clock):
    class TestConfig(TestingConfig):
        LOG_DIR = str(tmp_path / 'logs')

    app, _socketio = create_app(TestConfig, clock=clock)
    game_service = get_game_service()
    game_service.content_service = ContentService(word_lists=TEST_WORDS, questions=TEST_QUESTIONS, rng=random.Random(7))
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def game_service(app):
    return get_game_service()


@pytest.fixture
def socket_client(app):
    client = app.socketio.test_client(app)
    yield client
    if client.is_connected():
        client.disconnect()
