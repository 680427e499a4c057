"""
Status canonicalization - free text to one LeadStatus, in fixed stages.

Stage order and the keyword order inside KEYWORD_RULES are a contract:
reordering them changes which status an imported row gets. "new" is checked
last, so mixed text such as "new - follow up" resolves to the more specific
status (Follow-up) and only text naming no other status becomes New.
"""
import re
from enum import Enum
from typing import Dict, Optional, Tuple, Type, TypeVar

from leadtracker.models.lead import LeadStatus, UnitType, MandateStatus, DocumentStatus

E = TypeVar("E", bound=Enum)

SEPARATOR_RUNS = re.compile(r"[\s_\-]+")

# Stage 2a: exact synonyms, compared after collapsing spaces, "_" and "-"
STATUS_SYNONYMS: Dict[str, LeadStatus] = {
    "follow up": LeadStatus.FOLLOW_UP,
    "followup": LeadStatus.FOLLOW_UP,
    "deal close": LeadStatus.DEAL_CLOSE,
    "dealclose": LeadStatus.DEAL_CLOSE,
    "deal closed": LeadStatus.DEAL_CLOSE,
    "work alloted": LeadStatus.WORK_ALLOTED,
    "workalloted": LeadStatus.WORK_ALLOTED,
    "work allotted": LeadStatus.WORK_ALLOTED,
    "hot lead": LeadStatus.HOTLEAD,
    "hotlead": LeadStatus.HOTLEAD,
    "mandatesent": LeadStatus.MANDATE_SENT,
    "call not received": LeadStatus.CNR,
    "call not receive": LeadStatus.CNR,
}

# Stage 2b: phrase synonyms, first containing phrase wins
STATUS_PHRASES: Tuple[Tuple[str, LeadStatus], ...] = (
    ("mandate sent", LeadStatus.MANDATE_SENT),
    ("documentation", LeadStatus.DOCUMENTATION),
)

# Stage 3: keyword heuristic, first rule with any keyword present wins.
# "mandate"/"sent" precede "document"; "deal"/"close" precede "follow" and "work".
KEYWORD_RULES: Tuple[Tuple[Tuple[str, ...], LeadStatus], ...] = (
    (("mandate", "sent"), LeadStatus.MANDATE_SENT),
    (("document",), LeadStatus.DOCUMENTATION),
    (("deal", "close"), LeadStatus.DEAL_CLOSE),
    (("hot",), LeadStatus.HOTLEAD),
    (("follow",), LeadStatus.FOLLOW_UP),
    (("work", "allot"), LeadStatus.WORK_ALLOTED),
    (("cnr",), LeadStatus.CNR),
    (("busy",), LeadStatus.BUSY),
    (("new",), LeadStatus.NEW),
)


def normalize_label(text) -> str:
    if text is None:
        return ""
    return SEPARATOR_RUNS.sub(" ", str(text).lower()).strip()


def canonicalize_status(text) -> LeadStatus:
    """
    Resolve free text to a LeadStatus:
    1. exact label (case-insensitive)
    2. synonym table, then "mandate sent" / "documentation" phrases
    3. keyword heuristic in KEYWORD_RULES order
    4. LeadStatus.NEW
    """
    raw = "" if text is None else " ".join(str(text).lower().split())
    if not raw:
        return LeadStatus.NEW

    for status in LeadStatus:
        if raw == status.value.lower():
            return status

    key = normalize_label(raw)
    if key in STATUS_SYNONYMS:
        return STATUS_SYNONYMS[key]
    for phrase, status in STATUS_PHRASES:
        if phrase in key:
            return status

    for keywords, status in KEYWORD_RULES:
        if any(keyword in key for keyword in keywords):
            return status

    return LeadStatus.NEW


def match_choice(text, enum_cls: Type[E], default: E, synonyms: Optional[Dict[str, E]] = None) -> E:
    """Case-insensitive match against an enum's labels, ignoring "_"/"-" vs space."""
    key = normalize_label(text)
    if not key:
        return default
    for member in enum_cls:
        if key == normalize_label(member.value):
            return member
    if synonyms and key in synonyms:
        return synonyms[key]
    return default


def canonicalize_unit_type(text) -> UnitType:
    return match_choice(text, UnitType, UnitType.NEW, {"others": UnitType.OTHER})


def canonicalize_mandate_status(text) -> MandateStatus:
    return match_choice(text, MandateStatus, MandateStatus.PENDING, {"inprogress": MandateStatus.IN_PROGRESS})


def canonicalize_document_status(text) -> DocumentStatus:
    return match_choice(text, DocumentStatus, DocumentStatus.PENDING_DOCUMENTS)
