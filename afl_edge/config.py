"""
Application Configuration
Settings for the API and use cases, read from the environment.

Engine numerics (weights, thresholds, league-average fallbacks) are not
environment-driven; see ``EngineConfig`` in the domain value objects.
"""
import os
from typing import List
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Logging Configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

# Server
PORT = int(os.getenv("PORT", "8000"))
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "Australia/Melbourne")

# Aggregation windows (completed games)
TEAM_FORM_WINDOW = int(os.getenv("TEAM_FORM_WINDOW", "6"))
H2H_WINDOW = int(os.getenv("H2H_WINDOW", "10"))
PLAYER_HISTORY_WINDOW = int(os.getenv("PLAYER_HISTORY_WINDOW", "10"))

# Player props board
MIN_PLAYER_HISTORY = int(os.getenv("MIN_PLAYER_HISTORY", "3"))
TOP_PROPS_PER_STAT = int(os.getenv("TOP_PROPS_PER_STAT", "5"))
MAX_PROP_PLAYERS = int(os.getenv("MAX_PROP_PLAYERS", "30"))
PROP_STAT_CODES: List[str] = [
    code.strip().upper()
    for code in os.getenv("PROP_STAT_CODES", "DISPOSAL,GOAL,TACKLE,MARK").split(",")
    if code.strip()
]

# Performance Settings
MAX_WORKERS = int(os.getenv("MAX_WORKERS", "4"))  # Parallel round predictions
