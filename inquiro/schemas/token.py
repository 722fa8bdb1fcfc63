"""Survey token schemas."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from inquiro.schemas.base import BaseSchema


class TokenCreate(BaseModel):
    expires_at: Optional[datetime] = None
    max_uses: Optional[int] = Field(default=None, ge=1)


class SurveyTokenOut(BaseSchema):
    id: int
    token: str
    is_active: bool
    expires_at: Optional[datetime] = None
    max_uses: Optional[int] = None
    current_uses: int
    survey_id: int
    created_at: datetime
    updated_at: datetime
