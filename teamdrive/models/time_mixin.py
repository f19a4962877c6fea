from datetime import datetime
from pydantic import BaseModel, Field


class TimeMixin(BaseModel):
    created_at: datetime = Field(
        default_factory=datetime.utcnow, description="Creation timestamp")
    last_modified_time: datetime = Field(
        default_factory=datetime.utcnow, description="Last modification timestamp")
