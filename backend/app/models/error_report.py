"""
Error report filed by a user against a faulty resource.

A report is active while `resolved` is false. Reports are resolved one at a
time through an update, or all at once when their resource is deleted.
"""

from sqlalchemy import Boolean, Column, DateTime, Index, String, Text, func

from app.db.base import Base, IdMixin, TimestampMixin


class ErrorReport(Base, IdMixin, TimestampMixin):
    __tablename__ = "error_reports"

    resource_id = Column(String(32), nullable=False, index=True)
    user_id = Column(String(32), nullable=False, index=True)
    created_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    description = Column(Text, nullable=True)
    resolved = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("ix_error_reports_resource_resolved", "resource_id", "resolved"),
    )

    def __repr__(self) -> str:
        return f"<ErrorReport(id={self.id}, resource={self.resource_id}, resolved={self.resolved})>"
