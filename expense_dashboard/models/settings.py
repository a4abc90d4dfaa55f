from typing import Literal, Optional

from pydantic import BaseModel, Field

Theme = Literal["light", "dark", "system"]


class UserSettings(BaseModel):
    budget: float = Field(..., ge=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    theme: Theme = "system"
    notifications: bool = True


class UserSettingsUpdate(BaseModel):
    budget: Optional[float] = Field(default=None, ge=0)
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    theme: Optional[Theme] = None
    notifications: Optional[bool] = None
