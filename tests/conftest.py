"""Shared fixtures: an in-memory tag store, a fixed clock, and a Flask app
backed by a throwaway SQLite file."""

from datetime import datetime, timezone

import pytest

from db import get_session
from main import create_app
from tagging.models import TaggingSettings

FIXED_NOW = datetime(2024, 3, 15, 10, 30, 0, 123000, tzinfo=timezone.utc)


class FakeStore:
    """TagStore double that counts every call it receives."""

    def __init__(self, settings=None, next_number=1, existing=(), all_taken=False,
                 increment_error=None, exists_error=None):
        self.settings = settings if settings is not None else TaggingSettings()
        self.next_number = next_number
        self.existing = set(existing)
        self.all_taken = all_taken
        self.increment_error = increment_error
        self.exists_error = exists_error
        self.settings_calls = 0
        self.increments = 0
        self.exists_calls = 0
        self.checked: list[str] = []

    def get_tagging_settings(self, farm_id):
        self.settings_calls += 1
        return self.settings

    def increment_sequence(self, farm_id):
        self.increments += 1
        if self.increment_error is not None:
            raise self.increment_error
        value = self.next_number
        self.next_number += 1
        return value

    def tag_exists(self, farm_id, tag_number):
        self.exists_calls += 1
        self.checked.append(tag_number)
        if self.exists_error is not None:
            raise self.exists_error
        return self.all_taken or tag_number in self.existing


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def app(tmp_path):
    app = create_app(f"sqlite:///{tmp_path / 'herdtag-test.sqlite'}")
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    s = get_session()
    yield s
    s.close()
