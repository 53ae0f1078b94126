"""
Shared pytest fixtures — in‑memory SQLite + FastAPI TestClient with fake clients.
"""
import os
import tempfile
from datetime import date

_TMP = tempfile.mkdtemp(prefix="ledger-test-")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DATA_DIR", _TMP)
os.environ.setdefault("RECEIPTS_DIR", os.path.join(_TMP, "receipts"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.clients import NarrativeError, ReceiptImageStore  # noqa: E402
from app.database import Base, enable_sqlite_foreign_keys, get_db  # noqa: E402
from app.deps import get_image_store, get_narrator, get_ocr_client, get_today  # noqa: E402
from app.main import app  # noqa: E402

# A Wednesday
TODAY = date(2025, 3, 19)

# StaticPool ensures all connections share the same in-memory database
_ENGINE = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(_ENGINE)
_Session = sessionmaker(autocommit=False, autoflush=False, bind=_ENGINE)


class FakeOCR:
    def __init__(self):
        self.result = {"images": [{"fields": []}]}
        self.error = None
        self.calls = []

    def recognize(self, filename, content, content_type=None):
        self.calls.append((filename, content, content_type))
        if self.error is not None:
            raise self.error
        return self.result

    def set_lines(self, lines):
        self.result = {"images": [{"fields": [{"inferText": line} for line in lines]}]}


class FakeNarrator:
    def __init__(self):
        self.text = "## 분석 결과"
        self.fail = False
        self.requests = []

    def analyze(self, req):
        self.requests.append(req)
        if self.fail:
            raise NarrativeError("upstream down")
        return self.text


@pytest.fixture(autouse=True)
def _reset_tables():
    Base.metadata.create_all(bind=_ENGINE)
    yield
    Base.metadata.drop_all(bind=_ENGINE)


@pytest.fixture()
def db():
    session = _Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def fake_ocr():
    return FakeOCR()


@pytest.fixture()
def fake_narrator():
    return FakeNarrator()


@pytest.fixture()
def image_store(tmp_path):
    return ReceiptImageStore(str(tmp_path), "http://testserver")


@pytest.fixture()
def client(db, fake_ocr, fake_narrator, image_store):
    def _override():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = _override
    app.dependency_overrides[get_today] = lambda: TODAY
    app.dependency_overrides[get_ocr_client] = lambda: fake_ocr
    app.dependency_overrides[get_narrator] = lambda: fake_narrator
    app.dependency_overrides[get_image_store] = lambda: image_store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()

