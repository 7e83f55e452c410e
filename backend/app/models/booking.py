"""
Booking model representing a user's reservation of a resource for a time slot.

Key design decisions:
- `date` is a calendar date; every range comparison works at day granularity
- start_time/end_time are "HH:MM[:SS]" strings, validated on the way in
- No foreign keys: owning resource/institution/user are referenced by id only
  and cleanup is done by the lifecycle cascade, not the database
"""

from sqlalchemy import Boolean, Column, Date, Index, String

from app.db.base import Base, IdMixin, TimestampMixin


class Booking(Base, IdMixin, TimestampMixin):
    __tablename__ = "bookings"

    institution_id = Column(String(32), nullable=False, index=True)
    user_id = Column(String(32), nullable=False, index=True)
    resource_id = Column(String(32), nullable=False, index=True)
    date = Column(Date, nullable=False)
    start_time = Column(String(8), nullable=False)
    end_time = Column(String(8), nullable=False)
    active = Column(Boolean, nullable=True)

    __table_args__ = (
        # Same-day occupancy lookups and future-booking purges
        Index("ix_bookings_resource_date", "resource_id", "date"),
        # Admin statistics by date range
        Index("ix_bookings_institution_date", "institution_id", "date"),
        # Pending bookings for a user
        Index("ix_bookings_user_date", "user_id", "date"),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, resource={self.resource_id}, "
            f"date={self.date}, {self.start_time}-{self.end_time})>"
        )
