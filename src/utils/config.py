"""Application configuration read from environment variables."""

import os


class AppConfig:
    """Service-level settings."""

    SERVICE_NAME = os.environ.get("SERVICE_NAME", "taskboard-backend")
    SERVICE_VERSION = os.environ.get("SERVICE_VERSION", "0.1.0")
    SEED_SAMPLE_DATA = os.environ.get("TASKS_SEED_SAMPLE_DATA", "true").lower() == "true"

    # Local development server (python -m api.tasks)
    DEV_SERVER_HOST = os.environ.get("DEV_SERVER_HOST", "127.0.0.1")
    DEV_SERVER_PORT = int(os.environ.get("DEV_SERVER_PORT", "8000"))
