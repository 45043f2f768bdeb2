"""
app/domain/product_ingestion.py

Domain models used by the CSV product ingestion flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

# Header name -> whitespace-trimmed cell value, in header order.
RawRow = dict[str, str]

IngestionStage = Literal["parse", "validate", "insert"]


class IngestionStages:
    PARSE = "parse"
    VALIDATE = "validate"
    INSERT = "insert"


@dataclass(frozen=True)
class IngestionError:
    """
    One pipeline-level failure, tagged with the stage that produced it.
    """

    stage: IngestionStage
    detail: str


@dataclass(frozen=True)
class IngestionReport:
    """
    Outcome of one ingest run.

    Always satisfies total_inserted <= total_valid <= total_parsed.
    """

    total_parsed: int = 0
    total_valid: int = 0
    total_inserted: int = 0
    errors: list[IngestionError] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not 0 <= self.total_inserted <= self.total_valid <= self.total_parsed:
            raise ValueError(
                "IngestionReport counts must satisfy "
                "0 <= total_inserted <= total_valid <= total_parsed "
                f"(got parsed={self.total_parsed} valid={self.total_valid} "
                f"inserted={self.total_inserted})."
            )

    @property
    def failed_stage(self) -> IngestionStage | None:
        return self.errors[0].stage if self.errors else None

    @property
    def succeeded(self) -> bool:
        return not self.errors
