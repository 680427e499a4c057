"""
Lead importer - header row plus data rows in, admitted leads appended to the collection.
"""
import logging
from typing import Iterable, List, NamedTuple, Optional

from leadtracker.core.exceptions import ImportStructureError
from leadtracker.ingestion.assembler import LeadDraft, assemble_lead, cell_text
from leadtracker.ingestion.headers import LeadField, classify_header
from leadtracker.ingestion.tabular import CancellationToken, Row
from leadtracker.models.lead import Lead
from leadtracker.repositories.lead_repo import LeadRepository

logger = logging.getLogger(__name__)


class ImportSummary(NamedTuple):
    total_rows: int
    imported: int
    skipped: int


def is_blank_row(row: Row) -> bool:
    return all(not cell_text(cell) for cell in row)


def is_admissible(lead: Lead) -> bool:
    """Both identity fields are required; either alone is not enough."""
    return bool(lead.kva.strip()) and bool(lead.consumer_number.strip())


class LeadImporter:
    """
    Best-effort row ingestion. Rows missing kva or consumer number are skipped,
    everything else is admitted with defaults. Structural problems and
    cancellation abort the whole import before anything is appended.
    """

    def __init__(self, lead_repo: LeadRepository):
        self.lead_repo = lead_repo

    def classify_columns(self, header_row: Row) -> List[Optional[LeadField]]:
        columns = [classify_header(header) for header in header_row]
        mapped = sum(1 for column in columns if column is not None)
        logger.debug(f"Mapped {mapped} of {len(columns)} columns")
        return columns

    def build_lead(self, columns: List[Optional[LeadField]], row: Row) -> Lead:
        draft = LeadDraft()
        for field, value in zip(columns, row):
            if field is not None:
                draft.apply(field, value)
        return assemble_lead(draft)

    def process(
        self,
        rows: Iterable[Row],
        cancel_token: Optional[CancellationToken] = None,
    ) -> ImportSummary:
        """Read every row, then append all admitted leads in one step."""
        iterator = iter(rows)
        header_row = next(iterator, None)
        if header_row is None or is_blank_row(header_row):
            raise ImportStructureError("No header row found")

        columns = self.classify_columns(header_row)
        admitted: List[Lead] = []
        total = 0

        for row_num, row in enumerate(iterator, start=2):  # start=2 because of header
            if cancel_token is not None:
                cancel_token.raise_if_cancelled(total)
            total += 1

            if is_blank_row(row):
                logger.debug(f"Row {row_num} skipped: blank")
                continue

            lead = self.build_lead(columns, row)
            if not is_admissible(lead):
                logger.debug(f"Row {row_num} skipped: missing kva or consumer number")
                continue
            admitted.append(lead)

        if total == 0:
            raise ImportStructureError("No data rows found")

        if cancel_token is not None:
            cancel_token.raise_if_cancelled(total)

        self.lead_repo.extend(admitted)
        summary = ImportSummary(total_rows=total, imported=len(admitted), skipped=total - len(admitted))
        logger.info(
            f"Imported {summary.imported} leads ({summary.skipped} of {summary.total_rows} rows skipped), "
            f"collection now holds {self.lead_repo.count()}"
        )
        return summary

    def import_rows(self, rows: Iterable[Row], cancel_token: Optional[CancellationToken] = None) -> int:
        """Import a table and return the number of admitted leads."""
        return self.process(rows, cancel_token).imported
