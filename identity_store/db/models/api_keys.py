from sqlalchemy import Column, String, ForeignKey, UniqueConstraint
from .base import Base


class APIKey(Base):
    __tablename__ = 'users_api_keys'

    key = Column(String(128), primary_key=True)
    user_id = Column(String(36), ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False)
    key_name = Column(String(100), nullable=False)

    __table_args__ = (
        UniqueConstraint('user_id', 'key_name', name='uq_users_api_keys_user_name'),
    )


class APIKeyRight(Base):
    __tablename__ = 'users_api_keys_rights'

    key = Column(String(128), ForeignKey('users_api_keys.key', ondelete='CASCADE'), primary_key=True)
    right = Column(String(64), primary_key=True)
