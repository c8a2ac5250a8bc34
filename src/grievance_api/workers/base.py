"""Base worker classes for the Grievance API background jobs."""

import logging

from collections.abc import Callable
from typing import Any

from arq.connections import RedisSettings
from arq.cron import CronJob

from grievance_api.config.redis import get_redis_settings
from grievance_api.database.connection import close_database
from grievance_api.database.connection import get_db_connection
from grievance_api.database.connection import init_database

logger = logging.getLogger(__name__)


class BaseWorker:
    """Base class for all grievance workers."""

    functions: list[Callable] = []
    cron_jobs: list[CronJob] = []
    max_jobs: int = 10
    job_timeout: int = 300

    def __init__(self):
        self.redis_settings = self._get_arq_redis_settings()

    def _get_arq_redis_settings(self) -> RedisSettings:
        """Convert Redis settings to Arq format."""
        settings = get_redis_settings()
        return RedisSettings(
            host=settings.host,
            port=settings.port,
            database=settings.database,
            password=settings.password,
            max_connections=settings.max_connections,
        )

    async def startup(self, ctx: dict[str, Any]) -> None:
        """Worker startup hook."""
        logger.info(f"Starting {self.__class__.__name__}")
        await init_database()
        # Jobs open their own connections from the shared pool
        ctx["get_db_connection"] = get_db_connection

    async def shutdown(self, ctx: dict[str, Any]) -> None:
        """Worker shutdown hook."""
        logger.info(f"Shutting down {self.__class__.__name__}")
        await close_database()

    def worker_options(self) -> dict[str, Any]:
        """Keyword arguments for ``arq.worker.Worker``."""
        return {
            "functions": list(self.functions),
            "cron_jobs": list(self.cron_jobs),
            "redis_settings": self.redis_settings,
            "on_startup": self.startup,
            "on_shutdown": self.shutdown,
            "max_jobs": self.max_jobs,
            "job_timeout": self.job_timeout,
        }


def create_worker_class(
    functions: list[Callable],
    cron_jobs: list[CronJob] | None = None,
    max_jobs: int = 10,
    job_timeout: int = 300,
) -> type[BaseWorker]:
    """Create a worker class with the specified functions."""

    class DynamicWorker(BaseWorker):
        pass

    # Set class attributes after class definition
    DynamicWorker.functions = list(functions)
    DynamicWorker.cron_jobs = list(cron_jobs or [])
    DynamicWorker.max_jobs = max_jobs
    DynamicWorker.job_timeout = job_timeout

    return DynamicWorker
