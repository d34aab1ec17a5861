"""Per-process application context handed to request handlers."""

from dataclasses import dataclass, field

from src.services.task_store import TaskStore
from src.utils.config import AppConfig
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


@dataclass
class AppContext:
    """Owns the task store for the lifetime of the process."""
    store: TaskStore = field(default_factory=TaskStore)


def create_app_context(seed_sample_data: bool = AppConfig.SEED_SAMPLE_DATA) -> AppContext:
    """Build the context once at process start, optionally with sample tasks."""
    context = AppContext()
    if seed_sample_data:
        context.store.initialize_sample_data()
    logger.info("Application context ready", task_count=len(context.store), seeded=seed_sample_data)
    return context
