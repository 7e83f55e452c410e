"""
Declarative base and shared column mixins for all ORM models.
"""

import uuid

from sqlalchemy import Column, DateTime, String, func
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def new_id() -> str:
    """Store-assigned opaque identifier."""
    return uuid.uuid4().hex


class IdMixin:
    id = Column(String(32), primary_key=True, default=new_id)


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
