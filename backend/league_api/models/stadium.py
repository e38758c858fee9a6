from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class Stadium(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True)
    city: Optional[str] = None
    capacity: Optional[int] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
