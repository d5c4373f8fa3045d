"""
Pipeline configuration
======================

One dataclass holds the knobs of a run. The CLI fills it from command line
flags; library users construct it directly.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .eras import FIRST_RECORD_YEAR


class UnclassifiedPolicy(Enum):
    """How loudly to report records dropped for an unmapped event label.

    The audit always counts them; the policy only controls logging.
    """
    SILENT = "silent"
    COUNT = "count"
    WARN = "warn"


@dataclass
class PipelineConfig:
    # Rows per ranked table
    top_n: int = 10
    unclassified_policy: UnclassifiedPolicy = UnclassifiedPolicy.COUNT
    first_year: int = FIRST_RECORD_YEAR
    # workers > 1 normalizes chunks of the input on a thread pool
    workers: int = 1
    chunk_size: int = 50_000
    # Optional JSON file replacing the built-in vocabulary
    vocabulary_path: Optional[str] = None

    def validate(self) -> "PipelineConfig":
        if self.top_n < 0:
            raise ValueError("top_n must be >= 0")
        if self.workers < 1:
            raise ValueError("workers must be >= 1")
        if self.chunk_size < 1:
            raise ValueError("chunk_size must be >= 1")
        return self
