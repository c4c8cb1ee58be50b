import os
import tempfile
from pathlib import Path

# Point the service at a throwaway database before any firwatch import
_TMP_DIR = Path(tempfile.mkdtemp(prefix="firwatch-tests-"))
os.environ.setdefault("FIRWATCH_DB_URL", f"sqlite:///{_TMP_DIR}/firwatch.db")
os.environ.setdefault("FIRWATCH_REFRESH_ENABLED", "false")
os.environ.setdefault("FIRWATCH_DATA_DIR", str(_TMP_DIR / "data"))

import pytest  # noqa: E402

from firwatch.db import SessionLocal, init_db  # noqa: E402
from firwatch.db_models import StoredValue  # noqa: E402


@pytest.fixture
def db_session():
    init_db()
    session = SessionLocal()
    session.query(StoredValue).delete()
    session.commit()
    try:
        yield session
    finally:
        session.query(StoredValue).delete()
        session.commit()
        session.close()
