from app.models.user import User
from app.models.institution import Institution
from app.models.resource import Resource
from app.models.booking import Booking
from app.models.error_report import ErrorReport

__all__ = ["User", "Institution", "Resource", "Booking", "ErrorReport"]
