from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional


class LoginEventRecord(BaseModel):
    id: int
    username: str
    ip_address: Optional[str] = None
    event_type: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
