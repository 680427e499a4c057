"""
Lead service - lead lifecycle, import/export and the dashboard views.
"""
import hmac
import logging
from datetime import date
from typing import Optional, List

from leadtracker.config import settings
from leadtracker.core.exceptions import (
    NotFoundError, ForbiddenError, ImportStructureError,
)
from leadtracker.ingestion.assembler import extract_address
from leadtracker.ingestion.contacts import clean_number
from leadtracker.ingestion.dates import normalize_date, today_string
from leadtracker.ingestion.importer import LeadImporter
from leadtracker.ingestion.tabular import CancellationToken, iter_table_rows
from leadtracker.models.lead import Lead, Activity, MobileNumber
from leadtracker.repositories.lead_repo import LeadRepository
from leadtracker.schemas.lead import (
    LeadCreate, LeadUpdate, LeadFilters, LeadImportResponse, LeadStats,
)
from leadtracker.services import export_service
from leadtracker.services.filter_engine import (
    FeedContext, FilterEngine, mandate_leads, status_counts, summarize, upcoming_leads,
)

logger = logging.getLogger(__name__)

DATE_FIELDS = ("connection_date", "follow_up_date")


def normalize_contacts(contacts: List[MobileNumber]) -> List[MobileNumber]:
    """Digits-only numbers, stable slot ids, exactly one main flag."""
    cleaned = [
        MobileNumber(
            id=contact.id,
            number=clean_number(contact.number),
            name=contact.name.strip(),
            is_main=contact.is_main,
        )
        for contact in contacts[:3]
    ]
    if cleaned and not any(contact.is_main for contact in cleaned):
        cleaned[0].is_main = True
    return cleaned


class LeadService:
    """Service for lead operations."""

    def __init__(self, lead_repo: LeadRepository):
        self.lead_repo = lead_repo
        self.importer = LeadImporter(lead_repo)
        self.engine = FilterEngine(lead_repo)

    def _touch(self, lead: Lead, today: Optional[date] = None) -> None:
        lead.last_activity_date = today_string(today)

    def _sync_contacts(self, lead: Lead) -> None:
        if lead.mobile_numbers:
            lead.sync_main_number()
        else:
            lead.mobile_number = clean_number(lead.mobile_number)
            if lead.mobile_number:
                lead.mobile_numbers = [
                    MobileNumber(id="1", number=lead.mobile_number, name=lead.client_name, is_main=True)
                ]

    def create_lead(self, lead_data: LeadCreate) -> Lead:
        """Create a lead by manual entry."""
        data = lead_data.model_dump(exclude={"mobile_numbers"})
        for field in DATE_FIELDS:
            data[field] = normalize_date(data[field])

        if not data["company_location"]:
            address, notes = extract_address(data["notes"])
            if address:
                data["company_location"], data["notes"] = address, notes

        lead = Lead(**data, mobile_numbers=normalize_contacts(lead_data.mobile_numbers))
        self._sync_contacts(lead)
        self._touch(lead)
        lead.is_updated = False

        self.lead_repo.append(lead)
        logger.info(f"Lead {lead.id} created for consumer {lead.consumer_number}")
        return lead

    def get_lead(self, lead_id: str) -> Lead:
        """Get a lead by ID."""
        lead = self.lead_repo.get(lead_id)
        if not lead:
            raise NotFoundError("Lead", lead_id)
        return lead

    def update_lead(self, lead_id: str, lead_data: LeadUpdate) -> Lead:
        """Apply changes; the lead leaves the main feed until reset."""
        lead = self.get_lead(lead_id)

        changes = {field: getattr(lead_data, field) for field in lead_data.model_fields_set}
        for field in DATE_FIELDS:
            if changes.get(field) is not None:
                changes[field] = normalize_date(changes[field])
        if changes.get("mobile_numbers") is not None:
            changes["mobile_numbers"] = normalize_contacts(changes["mobile_numbers"])

        self.lead_repo.update(lead_id, changes)
        lead.mobile_number = clean_number(lead.mobile_number)
        if "mobile_numbers" in changes:
            lead.sync_main_number()
        else:
            self._sync_contacts(lead)
        lead.is_updated = True
        self._touch(lead)
        self.lead_repo.save(lead)
        return lead

    def delete_lead(self, lead_id: str) -> Lead:
        """Soft delete; the record stays in the archive view."""
        lead = self.get_lead(lead_id)
        lead.is_deleted = True
        self._touch(lead)
        self.lead_repo.save(lead)
        logger.info(f"Lead {lead_id} deleted")
        return lead

    def mark_done(self, lead_id: str) -> Lead:
        lead = self.get_lead(lead_id)
        lead.is_done = True
        self._touch(lead)
        self.lead_repo.save(lead)
        return lead

    def add_activity(self, lead_id: str, description: str) -> Activity:
        """Append to the lead's audit trail."""
        lead = self.get_lead(lead_id)
        activity = Activity(lead_id=lead_id, description=description)
        lead.activities.append(activity)
        self._touch(lead)
        self.lead_repo.save(lead)
        return activity

    def restore_leads(self, lead_ids: List[str]) -> int:
        return self.lead_repo.restore(lead_ids)

    def reset_updated_leads(self) -> int:
        return self.lead_repo.reset_updated()

    def purge_leads(self, lead_ids: List[str], password: str) -> int:
        """Permanently remove leads. Requires the purge password."""
        if not hmac.compare_digest(password.encode(), settings.PURGE_PASSWORD.encode()):
            logger.warning(f"Rejected purge of {len(lead_ids)} leads: wrong password")
            raise ForbiddenError("Incorrect password")
        removed = self.lead_repo.remove_many(lead_ids)
        logger.info(f"Purged {removed} leads")
        return removed

    def import_file(
        self,
        content: bytes,
        filename: str,
        cancel_token: Optional[CancellationToken] = None,
    ) -> LeadImportResponse:
        """Import leads from an uploaded CSV or workbook."""
        if len(content) > settings.MAX_IMPORT_BYTES:
            raise ImportStructureError(
                f"File is larger than {settings.MAX_IMPORT_BYTES} bytes"
            )
        try:
            rows = iter_table_rows(content, filename)
            summary = self.importer.process(rows, cancel_token)
        except ImportStructureError as e:
            logger.warning(f"Import of {filename!r} failed: {e.message}")
            raise

        return LeadImportResponse(
            total_rows=summary.total_rows,
            imported=summary.imported,
            skipped=summary.skipped,
        )

    def feed(self, filters: Optional[LeadFilters] = None) -> List[Lead]:
        """Main dashboard feed."""
        return self.engine.query(filters, FeedContext.MAIN)

    def search(self, filters: Optional[LeadFilters] = None) -> List[Lead]:
        return self.engine.query(filters, FeedContext.GENERIC)

    def archive(self, search_term: Optional[str] = None) -> List[Lead]:
        """Every lead, deleted and done included."""
        return self.engine.query(LeadFilters(search_term=search_term), FeedContext.ARCHIVE)

    def upcoming(self, today: Optional[date] = None, discom: Optional[str] = None) -> List[Lead]:
        return upcoming_leads(
            self.lead_repo.list(),
            today or date.today(),
            settings.UPCOMING_WINDOW_DAYS,
            discom,
        )

    def mandates(self, search_term: Optional[str] = None) -> List[Lead]:
        return mandate_leads(self.lead_repo.list(), search_term)

    def get_stats(self, filters: Optional[LeadFilters] = None, today: Optional[date] = None) -> LeadStats:
        """Follow-up counters and per-status counts."""
        leads = self.lead_repo.list()
        return LeadStats(
            summary=summarize(leads, today or date.today(), settings.UPCOMING_WINDOW_DAYS),
            by_status=status_counts(leads, filters),
        )

    def export_csv(self) -> str:
        return export_service.export_csv(self.archive())

    def export_xlsx(self) -> bytes:
        return export_service.export_xlsx(self.archive())

    def export_rows(self) -> List[List[str]]:
        return export_service.export_rows(self.archive())
