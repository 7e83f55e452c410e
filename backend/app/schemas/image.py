"""
Pydantic schemas for image upload responses.
"""

from pydantic import BaseModel


class ImageUploadResponse(BaseModel):
    url: str
