from datetime import datetime
from pytz import timezone

from afl_edge.config import APP_TIMEZONE

# Season timezone (AFL fixtures are scheduled in Melbourne time)
APP_TZ = timezone(APP_TIMEZONE)

def get_current_time() -> datetime:
    """Get current time in the application timezone."""
    return datetime.now(APP_TZ)
