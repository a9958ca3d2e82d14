from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class CommentCreate(BaseModel):
    body: str = Field(min_length=1, max_length=2000)


class CommentResponse(BaseModel):
    id: str
    body: str
    created_at: datetime
    user_id: str
    display_name: str
    image_url: Optional[str] = None
