#!/usr/bin/env python3
"""
Worker startup script for the Grievance API.

This script starts the Arq worker that escalates complaints whose
resolution deadline has passed.
"""

import asyncio
import logging
import signal
import sys

from pathlib import Path

# Add the src directory to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from arq.worker import Worker

from grievance_api.workers.escalation_worker import EscalationWorker

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


class WorkerManager:
    """Runs the escalation worker until a shutdown signal arrives."""

    def __init__(self):
        self.worker: Worker | None = None
        self.task: asyncio.Task | None = None
        self.shutdown_event = asyncio.Event()

    async def start(self):
        """Start the worker."""
        try:
            options = EscalationWorker().worker_options()
            self.worker = Worker(
                queue_name="escalations",
                keep_result=3600,  # Keep results for 1 hour
                handle_signals=False,
                **options,
            )

            self.task = asyncio.create_task(self._run_worker(self.worker))
            logger.info("Started escalation worker")

            # Wait for shutdown signal
            await self.shutdown_event.wait()

        except Exception as e:
            logger.exception(f"Failed to start worker: {e}")
            raise
        finally:
            await self.cleanup()

    async def _run_worker(self, worker: Worker):
        """Run the worker with error handling."""
        try:
            await worker.async_run()
        except Exception as e:
            logger.exception(f"Escalation worker failed: {e}")
            self.shutdown_event.set()

    async def cleanup(self):
        """Clean up resources."""
        logger.info("Shutting down worker...")

        if self.worker is not None:
            try:
                await self.worker.close()
            except Exception as e:
                logger.error(f"Error closing worker: {e}")

        if self.task is not None and not self.task.done():
            self.task.cancel()

        logger.info("Cleanup complete")

    def handle_shutdown(self, signum, frame):
        """Handle shutdown signals."""
        logger.info(f"Received signal {signum}, initiating shutdown...")
        self.shutdown_event.set()


async def main():
    """Main entry point."""
    manager = WorkerManager()

    # Set up signal handlers
    signal.signal(signal.SIGINT, manager.handle_shutdown)
    signal.signal(signal.SIGTERM, manager.handle_shutdown)

    try:
        await manager.start()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt")
    except Exception as e:
        logger.exception(f"Worker manager failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
