import threading
import time

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app.core import dependencies
from app.db import session as db_session_module
from app.services.notification import ComplaintNotifier


@pytest.fixture
def fresh_engine_state(monkeypatch):
    monkeypatch.setattr(db_session_module, "_engine", None)
    monkeypatch.setattr(db_session_module, "_session_factory", None)


def sqlite_engine():
    return create_engine("sqlite://", poolclass=StaticPool)


def test_concurrent_first_callers_share_one_engine(monkeypatch, fresh_engine_state):
    built = []

    def slow_build(url):
        time.sleep(0.05)
        engine = sqlite_engine()
        built.append(engine)
        return engine

    monkeypatch.setattr(db_session_module, "_build_engine", slow_build)

    start = threading.Barrier(8)
    seen = []

    def first_call():
        start.wait()
        seen.append(db_session_module.get_engine())

    threads = [threading.Thread(target=first_call) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(built) == 1
    assert len(seen) == 8
    assert all(engine is built[0] for engine in seen)


def test_session_factory_is_bound_to_the_shared_engine(monkeypatch, fresh_engine_state):
    monkeypatch.setattr(db_session_module, "_build_engine", lambda url: sqlite_engine())

    engine = db_session_module.get_engine()
    factory = db_session_module.get_session_factory()

    assert db_session_module.get_engine() is engine
    assert factory.kw["bind"] is engine


def test_configure_engine_replaces_the_shared_engine(fresh_engine_state):
    engine = sqlite_engine()

    db_session_module.configure_engine(engine)

    assert db_session_module.get_engine() is engine
    with db_session_module.get_session_factory()() as session:
        assert session.get_bind() is engine


def test_notifier_is_built_once_for_concurrent_first_callers(monkeypatch):
    monkeypatch.setattr(dependencies, "_notifier", None)
    built = []

    def slow_from_settings(cls, settings=None):
        time.sleep(0.05)
        notifier = ComplaintNotifier(email_config=None)
        built.append(notifier)
        return notifier

    monkeypatch.setattr(ComplaintNotifier, "from_settings", classmethod(slow_from_settings))

    start = threading.Barrier(8)
    seen = []

    def first_call():
        start.wait()
        seen.append(dependencies.get_notifier())

    threads = [threading.Thread(target=first_call) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(built) == 1
    assert all(notifier is built[0] for notifier in seen)
