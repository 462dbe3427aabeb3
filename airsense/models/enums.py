import enum


class Parameter(str, enum.Enum):
    PM25 = "pm25"
    PM10 = "pm10"
    O3 = "o3"
    NO2 = "no2"
    SO2 = "so2"
    CO = "co"


class AqiCategory(str, enum.Enum):
    GOOD = "Good"
    MODERATE = "Moderate"
    UNHEALTHY_SENSITIVE = "Unhealthy for Sensitive Groups"
    UNHEALTHY = "Unhealthy"
    VERY_UNHEALTHY = "Very Unhealthy"
    HAZARDOUS = "Hazardous"
    UNKNOWN = "Unknown"


class Sensitivity(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class HealthCondition(str, enum.Enum):
    ASTHMA = "asthma"
    COPD = "copd"
    HEART_DISEASE = "heart_disease"
    DIABETES = "diabetes"
    ALLERGIES = "allergies"
    OTHER = "other"


class AlertThreshold(str, enum.Enum):
    MODERATE = "moderate"
    UNHEALTHY_SENSITIVE = "unhealthy_sensitive"
    UNHEALTHY = "unhealthy"
    VERY_UNHEALTHY = "very_unhealthy"
    HAZARDOUS = "hazardous"


class DataSource(str, enum.Enum):
    SAMPLE_FALLBACK = "sample_fallback"
    SAMPLE_EMPTY = "sample_empty"
