"""
Schemas for the application and MTP server registries
"""
from pydantic import BaseModel
from typing import Optional


class ApplicationCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class ApplicationOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    created_at: str  # ISO string


class MtpServerCreate(BaseModel):
    name: Optional[str] = None
    url: Optional[str] = None


class MtpServerOut(BaseModel):
    id: int
    name: str
    url: str
    created_at: str  # ISO string
