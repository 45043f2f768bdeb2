"""
app/services/product_ingestion_service.py

Bulk product import: parse an uploaded CSV buffer, keep the rows that carry
every required field, and hand them to the store as one batch.

Failure handling:
- a parse error is fatal; nothing is validated or inserted and the report
  carries one "parse" error with all counts at zero;
- rows failing the existence check are dropped, not reported;
- a store failure leaves the whole batch unpersisted and adds one "insert"
  error. The pipeline never retries.

Ingesting the same buffer twice inserts duplicate products, since the
products table has no uniqueness constraint.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator

from app.config import get_product_ingestion_settings
from app.domain.product_ingestion import IngestionError, IngestionReport, IngestionStages, RawRow
from app.parsers.csv_stream import CSVParseError, iter_csv_rows
from app.repositories.product_repository import ProductStore, ProductStoreError
from app.validators.product_row_validator import ProductRowValidator

logger = logging.getLogger(__name__)

RowParser = Callable[[bytes], Iterator[RawRow]]


class ProductIngestionService:
    """
    Coordinates CSV parsing, row filtering, and the batched store insert.
    """

    def __init__(
        self,
        *,
        store: ProductStore,
        log_rejected_rows: bool = True,
        validator: ProductRowValidator | None = None,
        parser: RowParser | None = None,
    ) -> None:
        self._store = store
        self._log_rejected_rows = log_rejected_rows
        self._validator = validator or ProductRowValidator()
        self._parser = parser or iter_csv_rows

    def ingest(self, buffer: bytes) -> IngestionReport:
        """
        Run one upload through parse, validate and insert.

        Never raises for malformed input or store failures; the outcome is
        always described by the returned report.
        """

        try:
            rows = list(self._parser(buffer))
        except CSVParseError as exc:
            logger.warning("Product CSV parse failed: %s", exc)
            return IngestionReport(
                errors=[IngestionError(stage=IngestionStages.PARSE, detail=str(exc))],
            )

        valid_rows = self._filter_valid(rows)
        total_parsed = len(rows)
        total_valid = len(valid_rows)

        if not valid_rows:
            logger.info("Product CSV had no qualifying rows parsed=%d", total_parsed)
            return IngestionReport(total_parsed=total_parsed)

        try:
            inserted = self._store.insert_many(valid_rows)
        except ProductStoreError as exc:
            logger.error(
                "Product bulk insert failed parsed=%d valid=%d: %s",
                total_parsed,
                total_valid,
                exc,
            )
            return IngestionReport(
                total_parsed=total_parsed,
                total_valid=total_valid,
                errors=[IngestionError(stage=IngestionStages.INSERT, detail=str(exc))],
            )

        # A store may report fewer rows than it was given, never more.
        total_inserted = min(len(inserted), total_valid)
        logger.info(
            "Product CSV ingested parsed=%d valid=%d inserted=%d",
            total_parsed,
            total_valid,
            total_inserted,
        )
        return IngestionReport(
            total_parsed=total_parsed,
            total_valid=total_valid,
            total_inserted=total_inserted,
        )

    def _filter_valid(self, rows: Iterable[RawRow]) -> list[RawRow]:
        valid_rows: list[RawRow] = []
        for row_number, row in enumerate(rows, start=1):
            if self._validator.is_valid(row):
                valid_rows.append(row)
            elif self._log_rejected_rows:
                logger.warning(
                    "Skipping product row=%d missing=%s",
                    row_number,
                    ",".join(self._validator.missing_fields(row)),
                )
        return valid_rows


def build_product_ingestion_service(store: ProductStore) -> ProductIngestionService:
    """
    Build an ingestion service around ``store`` with env-driven settings.
    """
    settings = get_product_ingestion_settings()
    return ProductIngestionService(
        store=store,
        log_rejected_rows=settings.log_rejected_rows,
    )
