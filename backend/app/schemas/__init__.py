from app.schemas.user import UserCreate, UserUpdate, UserResponse, UserLogin, LoginResponse
from app.schemas.institution import InstitutionCreate, InstitutionUpdate, InstitutionResponse
from app.schemas.resource import ResourceCreate, ResourceUpdate, ResourceResponse, ResourceHealth
from app.schemas.booking import BookingCreate, BookingUpdate, BookingResponse
from app.schemas.error_report import (
    ErrorReportCreate, ErrorReportUpdate, ErrorReportResponse, ResolveResponse,
)
from app.schemas.image import ImageUploadResponse

__all__ = [
    "UserCreate", "UserUpdate", "UserResponse", "UserLogin", "LoginResponse",
    "InstitutionCreate", "InstitutionUpdate", "InstitutionResponse",
    "ResourceCreate", "ResourceUpdate", "ResourceResponse", "ResourceHealth",
    "BookingCreate", "BookingUpdate", "BookingResponse",
    "ErrorReportCreate", "ErrorReportUpdate", "ErrorReportResponse", "ResolveResponse",
    "ImageUploadResponse",
]
