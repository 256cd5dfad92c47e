from sqlalchemy import Column, String
from sqlalchemy.dialects.postgresql import JSONB
from .base import Base


class ExtraAttribute(Base):
    """One named extension value for an entity, namespaced by entity kind."""

    __tablename__ = 'extra_attributes'

    entity_kind = Column(String(32), primary_key=True)
    entity_id = Column(String(36), primary_key=True)
    name = Column(String(128), primary_key=True)
    value = Column(JSONB, nullable=True)
