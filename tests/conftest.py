import os
import tempfile

import pytest

# Must be set before main/config are imported by the test modules
os.environ["FLASK_ENV"] = "testing"
os.environ.setdefault("DB", os.path.join(tempfile.mkdtemp(), "db.json"))

import main  # noqa: E402
from order_store import OrderStore  # noqa: E402


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "db.json")


@pytest.fixture
def store(db_path, monkeypatch):
    order_store = OrderStore(db_path)
    order_store.bootstrap()
    monkeypatch.setattr(main, "order_store", order_store)
    return order_store


@pytest.fixture
def client(store):
    main.limiter.reset()
    with main.app.test_client() as client:
        yield client
    main.limiter.reset()
