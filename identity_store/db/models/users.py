from sqlalchemy import Column, String, Boolean, Text
from identity_store.db.types import UTCDateTime
from .base import Base, now_utc


class User(Base):
    __tablename__ = 'users'
    # Stored lower-cased; identity is case-insensitive
    user_id = Column(String(36), primary_key=True)
    name = Column(String, nullable=False, default='')
    email = Column(String, nullable=False, unique=True)
    password = Column(Text, nullable=False, default='')
    validated_at = Column(UTCDateTime(), nullable=True)
    admin = Column(Boolean, nullable=False, default=False)
    created_at = Column(UTCDateTime(), default=now_utc, nullable=False)
    updated_at = Column(UTCDateTime(), default=now_utc, nullable=False)
