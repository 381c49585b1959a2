from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    token: str
    username: str
    demo_mode: Optional[bool] = Field(default=None, alias="demoMode")


class HealthResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    demo_mode: bool = Field(alias="demoMode")
