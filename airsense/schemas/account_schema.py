from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from airsense.schemas.profile_schema import HealthData, Preferences, UserOut


class SignupRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class TempLoginRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    health_data: Optional[HealthData] = Field(default=None, alias="healthData")
    preferences: Optional[Preferences] = None


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserOut


class MeResponse(BaseModel):
    user: UserOut
