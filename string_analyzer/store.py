import logging
import threading
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from string_analyzer.database import init_db, make_engine, make_session_factory
from string_analyzer.models import StringAnalysis

logger = logging.getLogger(__name__)


class InMemoryStringStore:
    """Records kept in an insertion-ordered dict for the lifetime of the process"""

    def __init__(self):
        self._records: Dict[str, Dict] = {}
        self._lock = threading.Lock()

    def save(self, string_id: str, record: Dict) -> None:
        with self._lock:
            self._records[string_id] = record

    def get(self, string_id: str) -> Optional[Dict]:
        with self._lock:
            return self._records.get(string_id)

    def list_all(self) -> List[Dict]:
        # copy so a filter pass never sees a concurrent save or delete
        with self._lock:
            return list(self._records.values())

    def exists(self, string_id: str) -> bool:
        with self._lock:
            return string_id in self._records

    def delete(self, string_id: str) -> bool:
        with self._lock:
            return self._records.pop(string_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


class SQLStringStore:
    """Records persisted in the string_analyses table through SQLAlchemy"""

    def __init__(self, database_url: str):
        self.engine = make_engine(database_url)
        self.SessionLocal = make_session_factory(self.engine)
        init_db(self.engine)

    def _session(self) -> Session:
        return self.SessionLocal()

    def save(self, string_id: str, record: Dict) -> None:
        db = self._session()
        try:
            db_string = StringAnalysis.from_record({**record, "id": string_id})
            db.add(db_string)
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def get(self, string_id: str) -> Optional[Dict]:
        db = self._session()
        try:
            db_string = db.query(StringAnalysis).filter(StringAnalysis.id == string_id).first()
            return db_string.to_record() if db_string else None
        finally:
            db.close()

    def list_all(self) -> List[Dict]:
        db = self._session()
        try:
            return [s.to_record() for s in db.query(StringAnalysis).order_by(StringAnalysis.pk).all()]
        finally:
            db.close()

    def exists(self, string_id: str) -> bool:
        db = self._session()
        try:
            return db.query(StringAnalysis.pk).filter(StringAnalysis.id == string_id).first() is not None
        finally:
            db.close()

    def delete(self, string_id: str) -> bool:
        db = self._session()
        try:
            deleted = db.query(StringAnalysis).filter(StringAnalysis.id == string_id).delete()
            db.commit()
            return deleted > 0
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def clear(self) -> None:
        db = self._session()
        try:
            db.query(StringAnalysis).delete()
            db.commit()
        finally:
            db.close()


def create_store(backend: str, database_url: Optional[str] = None):
    """Build the store selected by configuration"""
    if backend == "memory":
        logger.info("Using in-memory string store")
        return InMemoryStringStore()
    if backend == "sql":
        if not database_url:
            raise ValueError("DATABASE_URL is required for the sql store backend")
        logger.info("Using SQL string store")
        return SQLStringStore(database_url)
    raise ValueError(f"Unknown store backend: {backend!r}")
