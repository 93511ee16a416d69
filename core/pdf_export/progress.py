"""
Progress Tracking

Single-slot progress sink for PDF exports.
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Awaitable, Callable, Optional, Union


logger = logging.getLogger(__name__)


class ExportStage(str, Enum):
    """Export stages, in the order they are reported"""
    PREPARING = "preparing"
    RENDERING = "rendering"
    ENCODING = "encoding"
    COMPLETE = "complete"

    @property
    def order(self) -> int:
        return list(ExportStage).index(self)


@dataclass
class ExportProgress:
    """A single progress update"""
    stage: ExportStage
    pages_done: Optional[int] = None
    pages_total: Optional[int] = None
    percentage: float = 0.0
    message: str = ""
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "stage": self.stage.value,
            "pages_done": self.pages_done,
            "pages_total": self.pages_total,
            "percentage": self.percentage,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


ProgressCallback = Callable[[ExportProgress], Union[None, Awaitable[None]]]


class ProgressSink:
    """
    Holds at most one progress callback.

    Registering a new callback replaces the old one. Callback failures
    are logged and never interrupt the export.
    """

    def __init__(self, callback: Optional[ProgressCallback] = None):
        self.callback = callback

    def set_callback(self, callback: Optional[ProgressCallback]):
        self.callback = callback

    async def emit(self, update: ExportProgress):
        if self.callback is None:
            return
        try:
            result = self.callback(update)
            if asyncio.iscoroutine(result):
                await result
        except Exception as e:
            logger.warning(f"Progress callback error: {e}")
