import os

# Database configuration
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./events.db")

# Uploaded images live in <STORAGE_ROOT>/event-image
STORAGE_ROOT = os.getenv("STORAGE_ROOT", ".")
IMAGE_DIR = "event-image"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Client side
EVENTS_API_URL = os.getenv("EVENTS_API_URL", "http://localhost:8000/events")


def get_database_url():
    return DATABASE_URL


def get_storage_root():
    return STORAGE_ROOT
