"""Login request/response models for POST /api/ValidateLogin."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LoginValues(BaseModel):
    # repr=False keeps the password out of logs and tracebacks
    username: str = Field(min_length=1, max_length=150)
    password: str = Field(min_length=1, max_length=256, repr=False)


class LoginResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    username: str
    full_name: Optional[str] = Field(default=None, alias="fullName")
