from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class Season(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    created_at: datetime = Field(default_factory=datetime.utcnow)
