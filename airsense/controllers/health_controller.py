from datetime import datetime, timezone
from airsense.core.config import get_settings


def read_health() -> dict[str, str]:
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": get_settings().environment,
    }
