# moviesense/db.py
import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Optional

from sqlalchemy import create_engine, Column, DateTime, Integer, String, Text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from config import settings, SentimentConfig
from moviesense.errors import PersistenceError
from moviesense.review_analysis.models import SentimentRecord

logger = logging.getLogger(__name__)

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReviewRow(Base):
    __tablename__ = "reviews"
    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    text = Column(Text, nullable=False)
    sentiment = Column(String(16), nullable=False)  # Positive|Negative|Neutral
    explanation = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    def to_record(self) -> SentimentRecord:
        return SentimentRecord(
            id=self.id,
            text=self.text,
            sentiment=self.sentiment,
            explanation=self.explanation,
            created_at=self.created_at,
        )


class ReviewStore:
    """Append-only store of analysed reviews. Rows are never updated or deleted."""

    def __init__(self, database_url: str):
        # sessions are opened from the threadpool, not the thread that built the engine
        connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
        self.engine = create_engine(database_url, echo=False, future=True, connect_args=connect_args)
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, autocommit=False)
        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Initialized ReviewStore on {self.engine.url.render_as_string(hide_password=True)}")

    def create(self, text: str, sentiment: str, explanation: str) -> SentimentRecord:
        session = self.SessionLocal()
        try:
            row = ReviewRow(text=text, sentiment=sentiment, explanation=explanation)
            session.add(row)
            session.commit()
            session.refresh(row)
            logger.info(f"Stored review {row.id} ({row.sentiment})")
            return row.to_record()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Failed to store review: {e}")
            raise PersistenceError(str(e)) from e
        finally:
            session.close()

    def get(self, record_id: int) -> Optional[SentimentRecord]:
        session = self.SessionLocal()
        try:
            row = session.get(ReviewRow, record_id)
            return row.to_record() if row else None
        except SQLAlchemyError as e:
            logger.error(f"Failed to load review {record_id}: {e}")
            raise PersistenceError(str(e), message=SentimentConfig.MSG_LOAD_FAILED) from e
        finally:
            session.close()


@lru_cache(maxsize=1)
def get_store() -> ReviewStore:
    return ReviewStore(settings.DATABASE_URL)
