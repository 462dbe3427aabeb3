from pydantic import Field
from typing import Optional
from airsense.models.enums import AlertThreshold, HealthCondition, Sensitivity
from airsense.schemas.air_quality_schema import CamelModel


class Location(CamelModel):
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


class HealthData(CamelModel):
    age: Optional[int] = Field(default=None, ge=0, le=120)
    conditions: list[HealthCondition] = []
    sensitivity: Sensitivity = Sensitivity.MEDIUM


class Preferences(CamelModel):
    alerts_enabled: bool = True
    alert_threshold: AlertThreshold = AlertThreshold.UNHEALTHY_SENSITIVE
    location: Optional[Location] = None


class UserProfile(CamelModel):
    name: Optional[str] = None
    health_data: HealthData = HealthData()
    preferences: Preferences = Preferences()


class ProfileUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=50)
    health_data: Optional[HealthData] = None
    preferences: Optional[Preferences] = None


class CurrentUser(CamelModel):
    id: str
    name: str
    email: str
    profile: UserProfile = UserProfile()

    @property
    def location(self) -> Optional[Location]:
        return self.profile.preferences.location


class UserOut(CamelModel):
    id: str
    name: str
    email: str
    health_data: HealthData
    preferences: Preferences


class ProfileUpdateResponse(CamelModel):
    message: str
    user: UserOut
