from typing import Annotated
from beanie import Document, Indexed
from pydantic import EmailStr, Field

from teamdrive.models.time_mixin import TimeMixin


class User(TimeMixin, Document):
    clerk_id: Annotated[str, Indexed(unique=True)] = Field(..., description="Id from the identity provider")
    primary_email: Annotated[EmailStr, Indexed(unique=True)] = Field(..., description="Primary email address")
    username: Annotated[str, Indexed(unique=True)] = Field(..., min_length=3, max_length=50, description="Unique username")
    first_name: str = Field(..., description="First Name")
    last_name: str = Field(..., description="Last Name")

    class Settings:
        name = "users"
