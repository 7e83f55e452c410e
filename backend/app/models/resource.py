"""
Bookable resource (room, machine, ...) belonging to an institution.
"""

from sqlalchemy import Column, String

from app.db.base import Base, IdMixin, TimestampMixin


class Resource(Base, IdMixin, TimestampMixin):
    __tablename__ = "resources"

    name = Column(String(255), nullable=False)
    description = Column(String(2000), nullable=True)
    image_url = Column(String(1000), nullable=True)
    institution_id = Column(String(32), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Resource(id={self.id}, name={self.name}, institution={self.institution_id})>"
