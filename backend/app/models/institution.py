"""
Institution owning resources, with opening hours and slot granularity.
"""

from sqlalchemy import Column, Integer, String, CheckConstraint

from app.db.base import Base, IdMixin, TimestampMixin


class Institution(Base, IdMixin, TimestampMixin):
    __tablename__ = "institutions"

    name = Column(String(255), nullable=False)
    image_url = Column(String(1000), nullable=True)
    open_time = Column(String(8), nullable=False)
    close_time = Column(String(8), nullable=False)
    booking_interval = Column(Integer, nullable=False, default=60)  # minutes

    __table_args__ = (
        CheckConstraint("booking_interval > 0", name="check_booking_interval_positive"),
    )

    def __repr__(self) -> str:
        return f"<Institution(id={self.id}, name={self.name}, hours={self.open_time}-{self.close_time})>"
