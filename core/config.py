"""Environment-driven settings for the meal plan service.

Values are read once at import time. Every setting can be overridden via an
environment variable of the same name.
"""

import os

# Read/Write partitioning pattern
# For SQLite/demo both URLs point at the same file.
WRITE_DATABASE_URL = os.getenv("WRITE_DATABASE_URL", "sqlite:///meal_plans.db")
READ_DATABASE_URL = os.getenv("READ_DATABASE_URL", WRITE_DATABASE_URL)

# LLM provider
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")
OPENAI_TIMEOUT = float(os.getenv("OPENAI_TIMEOUT", "120"))
MAX_TOOL_ROUNDS = int(os.getenv("MAX_TOOL_ROUNDS", "8"))

# TheMealDB recipe search
MEALDB_BASE_URL = os.getenv("MEALDB_BASE_URL", "https://www.themealdb.com/api/json/v1/1/")
MEALDB_TIMEOUT = float(os.getenv("MEALDB_TIMEOUT", "20"))
MAX_SEARCH_RESULTS = int(os.getenv("MAX_SEARCH_RESULTS", "5"))

# Firebase identity verification. Application Default Credentials are used
# when FIREBASE_CREDENTIALS is not set.
FIREBASE_CREDENTIALS = os.getenv("FIREBASE_CREDENTIALS")
FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID")
AUTH_CHECK_REVOKED = os.getenv("AUTH_CHECK_REVOKED", "false").lower() in ("1", "true", "yes")

# Logging
LOG_DIR = os.getenv("LOG_DIR", os.path.join(os.path.dirname(__file__), "..", "logs"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
