"""
Filter engine - visibility rules and fuzzy search over the lead collection.

Visibility, in order:
1. deleted leads never appear outside the archive view
2. without a status filter, done leads are hidden, and the main feed also
   hides updated leads (it only shows fresh items)
3. with a status filter, any non-deleted lead in those statuses is shown
The archive view applies no visibility rule and sorts deleted, then done,
then most recent activity first.
"""
import logging
import math
import re
from datetime import date, timedelta
from enum import Enum
from typing import Dict, Iterable, List, Optional

from leadtracker.ingestion.dates import DD_MM_YYYY, parse_activity_date, parse_canonical_date
from leadtracker.models.lead import Lead, LeadStatus
from leadtracker.repositories.lead_repo import LeadRepository
from leadtracker.schemas.lead import LeadFilters, LeadSummary

logger = logging.getLogger(__name__)

DIGITS_ONLY = re.compile(r"^[0-9]+$")
NON_DIGITS = re.compile(r"[^0-9]")

MANDATE_STATUSES = (LeadStatus.MANDATE_SENT, LeadStatus.DOCUMENTATION)


class FeedContext(str, Enum):
    MAIN = "main"        # default dashboard feed, fresh items only
    GENERIC = "generic"  # any other filtered view
    ARCHIVE = "archive"  # full collection, nothing hidden


def is_canonical(value: Optional[str]) -> bool:
    return bool(value) and DD_MM_YYYY.match(value.strip()) is not None


def in_date_range(value: str, start: Optional[str], end: Optional[str]) -> bool:
    """
    Inclusive range check on DD-MM-YYYY strings, compared as text.

    Bounds are not normalized. If the lead date or a given bound is not
    exactly DD-MM-YYYY the lead never matches.
    """
    if not start and not end:
        return True
    if not is_canonical(value):
        return False
    current = value.strip()
    if start and (not is_canonical(start) or current < start.strip()):
        return False
    if end and (not is_canonical(end) or current > end.strip()):
        return False
    return True


def same_discom(lead: Lead, discom: Optional[str]) -> bool:
    if not discom or not discom.strip():
        return True
    return lead.discom.strip().upper() == discom.strip().upper()


def searchable_text(lead: Lead) -> List[str]:
    fields = [
        lead.client_name,
        lead.company,
        *lead.phone_numbers(),
        *(m.name for m in lead.mobile_numbers),
        lead.consumer_number,
        lead.kva,
        lead.discom,
        lead.company_location,
        lead.notes,
        lead.final_conclusion,
    ]
    return [field.casefold() for field in fields if field]


def matches_search(lead: Lead, term: Optional[str]) -> bool:
    """Digit-only terms also match phone numbers ignoring formatting; any field match wins."""
    if not term or not term.strip():
        return True
    term = term.strip()

    if DIGITS_ONLY.match(term):
        for number in lead.phone_numbers():
            if term in NON_DIGITS.sub("", number):
                return True

    needle = term.casefold()
    return any(needle in field for field in searchable_text(lead))


def is_visible(lead: Lead, filters: LeadFilters, context: FeedContext) -> bool:
    if context == FeedContext.ARCHIVE:
        return True
    if lead.is_deleted:
        return False
    if filters.status:
        return True
    if lead.is_done:
        return False
    if context == FeedContext.MAIN and lead.is_updated:
        return False
    return True


def matches(lead: Lead, filters: LeadFilters, context: FeedContext) -> bool:
    if not is_visible(lead, filters, context):
        return False
    if filters.status and lead.status not in filters.status:
        return False
    if not in_date_range(lead.follow_up_date, filters.follow_up_date_start, filters.follow_up_date_end):
        return False
    if not same_discom(lead, filters.discom):
        return False
    return matches_search(lead, filters.search_term)


def archive_sort_key(lead: Lead):
    activity = parse_activity_date(lead.last_activity_date)
    recency = -activity.toordinal() if activity else math.inf
    return (not lead.is_deleted, not lead.is_done, recency)


def sort_archive(leads: Iterable[Lead]) -> List[Lead]:
    """Deleted first, then done, then most recent activity; unparsable dates sort oldest."""
    return sorted(leads, key=archive_sort_key)


class FilterEngine:
    """Evaluates LeadFilters against the collection held by a LeadRepository."""

    def __init__(self, lead_repo: Optional[LeadRepository] = None):
        self.lead_repo = lead_repo

    def filter(
        self,
        leads: Iterable[Lead],
        filters: Optional[LeadFilters] = None,
        context: FeedContext = FeedContext.MAIN,
    ) -> List[Lead]:
        filters = filters or LeadFilters()
        result = [lead for lead in leads if matches(lead, filters, context)]
        if context == FeedContext.ARCHIVE:
            result = sort_archive(result)
        logger.debug(f"{context.value} view matched {len(result)} leads")
        return result

    def query(self, filters: Optional[LeadFilters] = None, context: FeedContext = FeedContext.MAIN) -> List[Lead]:
        return self.filter(self.lead_repo.list(), filters, context)


def is_active(lead: Lead) -> bool:
    return not lead.is_deleted and not lead.is_done


def follow_up_on(lead: Lead) -> Optional[date]:
    if not is_active(lead):
        return None
    return parse_canonical_date(lead.follow_up_date)


def upcoming_leads(
    leads: Iterable[Lead],
    today: date,
    window_days: int = 7,
    discom: Optional[str] = None,
) -> List[Lead]:
    """Active leads with a follow-up after today and within the window."""
    horizon = today + timedelta(days=window_days)
    result = []
    for lead in leads:
        when = follow_up_on(lead)
        if when and today < when <= horizon and same_discom(lead, discom):
            result.append(lead)
    return sorted(result, key=lambda lead: parse_canonical_date(lead.follow_up_date))


def due_today_leads(leads: Iterable[Lead], today: date) -> List[Lead]:
    return [lead for lead in leads if follow_up_on(lead) == today]


def overdue_leads(leads: Iterable[Lead], today: date) -> List[Lead]:
    result = []
    for lead in leads:
        when = follow_up_on(lead)
        if when and when < today:
            result.append(lead)
    return result


def mandate_leads(leads: Iterable[Lead], search_term: Optional[str] = None) -> List[Lead]:
    """Active leads whose mandate is out or in documentation."""
    filters = LeadFilters(status=list(MANDATE_STATUSES), search_term=search_term)
    return [
        lead for lead in leads
        if not lead.is_done and matches(lead, filters, FeedContext.GENERIC)
    ]


def summarize(leads: Iterable[Lead], today: date, window_days: int = 7) -> LeadSummary:
    leads = list(leads)
    active = [lead for lead in leads if is_active(lead)]
    return LeadSummary(
        total_leads=len(active),
        due_today=len(due_today_leads(active, today)),
        upcoming=len(upcoming_leads(active, today, window_days)),
        overdue=len(overdue_leads(active, today)),
        follow_up_mandate=sum(1 for lead in active if lead.status in MANDATE_STATUSES),
    )


def status_counts(leads: Iterable[Lead], filters: Optional[LeadFilters] = None) -> Dict[str, int]:
    """Per-status counts over active leads, with every filter except status applied."""
    base = (filters or LeadFilters()).model_copy(update={"status": None})
    counts = {status.value: 0 for status in LeadStatus}
    for lead in leads:
        if is_active(lead) and matches(lead, base, FeedContext.GENERIC):
            counts[lead.status.value] += 1
    return counts
