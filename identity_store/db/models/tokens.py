from sqlalchemy import Column, String, ForeignKey, Integer, Index, UniqueConstraint
from .base import Base, now_utc
from identity_store.db.types import UTCDateTime


class ValidationToken(Base):
    __tablename__ = 'validation_tokens'

    id = Column(Integer, primary_key=True, autoincrement=True)
    validation_token = Column(String(128), nullable=False)
    user_id = Column(String(36), ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False)
    created_at = Column(UTCDateTime(), default=now_utc, nullable=False)
    # Seconds after created_at; evaluated by callers, never swept here
    expires_in = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint('validation_token', 'user_id', name='uq_validation_tokens_token_user'),
        Index('idx_validation_tokens_user_id', 'user_id'),
    )
