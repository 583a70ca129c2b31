"""
Mooder Common Schemas
공통 스키마
"""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """에러 응답"""
    error: str
