"""Base orchestrator for pipeline execution.

Provides common infrastructure for pipeline orchestrators:
- Settings and logger held on the instance
- Timing of the whole run
- Common run() interface

Usage:
    class MyOrchestrator(BaseOrchestrator):
        async def _run_pipeline(self, channel_id, delete):
            # Implementation
            pass

        def _log_summary(self, elapsed):
            # Log final statistics
            pass
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from discord_pins.config.settings import ArchiveSettings
    from discord_pins.utils.pipeline_logger import BasePipelineLogger


class BaseOrchestrator(ABC):
    """Abstract base class for pipeline orchestrators.

    Subclasses must implement:
    - _run_pipeline(): The actual pipeline logic
    - _log_summary(): Log final statistics
    """

    def __init__(self, settings: ArchiveSettings, logger: BasePipelineLogger) -> None:
        """Initialize the orchestrator.

        Args:
            settings: Validated settings for this run.
            logger: Pipeline logger shared with every component.
        """
        self.settings = settings
        self.logger = logger
        self.start_time: float = 0.0

    async def run(self, channel_id: str, delete: bool = False) -> None:
        """Run the pipeline.

        Args:
            channel_id: Channel whose pins are archived.
            delete: Unpin each message once everything is archived.
        """
        self.start_time = time.time()

        await self._run_pipeline(channel_id=channel_id, delete=delete)

        elapsed = time.time() - self.start_time
        self._log_summary(elapsed)

    @abstractmethod
    async def _run_pipeline(self, channel_id: str, delete: bool = False) -> None:
        """Execute the pipeline logic."""
        ...

    @abstractmethod
    def _log_summary(self, elapsed: float) -> None:
        """Log the final summary statistics.

        Args:
            elapsed: Total time elapsed in seconds.
        """
        ...
