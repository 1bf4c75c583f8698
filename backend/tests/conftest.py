"""Shared fixtures: an in-memory store, row factories and a fake scheduler."""

from datetime import datetime

import pytest
import pytz
from apscheduler.jobstores.base import JobLookupError

from habitquest.core.dependencies import set_session_manager, set_store
from habitquest.services.sessions import SessionManager
from habitquest.store import MemoryStore

USER_ID = "user-1"
OTHER_USER_ID = "user-2"
TOKEN = "token-user-1"
OTHER_TOKEN = "token-user-2"

# Fixed instant used wherever a test needs "now"
NOW = datetime(2024, 3, 15, 12, 0, tzinfo=pytz.utc)


class FlakyStore(MemoryStore):
    """MemoryStore that raises on chosen (operation, collection) pairs."""

    def __init__(self):
        super().__init__()
        self.fail_on = set()

    def _maybe_fail(self, operation, collection):
        if (operation, collection) in self.fail_on:
            raise RuntimeError(f"{operation} on {collection} refused")

    def query(self, collection, filters=None, order=None, desc=False, limit=None):
        self._maybe_fail("query", collection)
        return super().query(collection, filters, order, desc, limit)

    def insert(self, collection, record):
        self._maybe_fail("insert", collection)
        return super().insert(collection, record)

    def update(self, collection, filters, patch):
        self._maybe_fail("update", collection)
        return super().update(collection, filters, patch)

    def delete(self, collection, filters):
        self._maybe_fail("delete", collection)
        return super().delete(collection, filters)


class FakeScheduler:
    """Records jobs the way BackgroundScheduler would, without running them."""

    def __init__(self):
        self.jobs = {}
        self.removed = []

    def add_job(self, func, trigger=None, args=None, id=None, name=None, replace_existing=False):
        if id in self.jobs and not replace_existing:
            raise ValueError(f"Job {id} already exists")
        self.jobs[id] = {"func": func, "trigger": trigger, "args": args or [], "name": name}

    def remove_job(self, job_id):
        if job_id not in self.jobs:
            raise JobLookupError(job_id)
        del self.jobs[job_id]
        self.removed.append(job_id)

    def fire(self, job_id):
        job = self.jobs[job_id]
        return job["func"](*job["args"])


@pytest.fixture
def store():
    store = FlakyStore()
    store.register_token(TOKEN, USER_ID)
    store.register_token(OTHER_TOKEN, OTHER_USER_ID)
    set_store(store)
    yield store
    set_store(None)


@pytest.fixture
def make_profile(store):
    def _make(user_id=USER_ID, coins=0, xp=0, level=1, **extra):
        return store.insert("profiles", {
            "id": user_id,
            "username": extra.pop("username", user_id),
            "display_name": extra.pop("display_name", None),
            "avatar_url": None,
            "xp": xp,
            "level": level,
            "coins": coins,
            **extra,
        })
    return _make


@pytest.fixture
def make_habit(store):
    def _make(user_id=USER_ID, **overrides):
        habit = {
            "user_id": user_id,
            "title": "Morning Workout",
            "description": None,
            "category": None,
            "priority": 1,
            "scheduled_time": None,
            "duration_minutes": 30,
            "frequency": "daily",
            "streak": 0,
            "last_completion_date": None,
            "total_completions": 0,
            "streak_breaks_count": 0,
            "coin_reward": 10,
            "streak_recovery_cost": 50,
        }
        habit.update(overrides)
        return store.insert("habits", habit)
    return _make


@pytest.fixture
def make_goal(store):
    def _make(user_id=USER_ID, category="fitness", description=None, target=None):
        return store.insert("user_goals", {
            "user_id": user_id,
            "category": category,
            "description": description,
            "target": target,
        })
    return _make


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def manager(store, scheduler):
    manager = SessionManager(scheduler=scheduler)
    set_session_manager(manager)
    yield manager
    set_session_manager(None)


def get_row(store, collection, row_id):
    rows = store.query(collection, {"id": row_id})
    return rows[0] if rows else None
