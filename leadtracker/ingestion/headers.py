"""
Header classification - maps a raw column header to a canonical lead field.

Resolution order is part of the import contract:
1. PRIORITY_RULES (substring rules that win over everything else)
2. HEADER_ALIASES (exact match on the lower-cased, trimmed header)
3. FALLBACK_RULES (substring rules for loosely spelled contact columns)
Anything else is unmapped and ignored.
"""
import logging
from enum import Enum
from typing import Dict, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)


class LeadField(str, Enum):
    CONSUMER_NUMBER = "consumer_number"
    KVA = "kva"
    CONNECTION_DATE = "connection_date"
    COMPANY = "company"
    COMPANY_LOCATION = "company_location"
    CLIENT_NAME = "client_name"
    DISCOM = "discom"
    GIDC = "gidc"
    GST_NUMBER = "gst_number"
    MOBILE_NUMBER = "mobile_number"
    MOBILE_NUMBER_2 = "mobile_number_2"
    MOBILE_NUMBER_3 = "mobile_number_3"
    CONTACT_NAME_2 = "contact_name_2"
    CONTACT_NAME_3 = "contact_name_3"
    STATUS = "status"
    UNIT_TYPE = "unit_type"
    MANDATE_STATUS = "mandate_status"
    DOCUMENT_STATUS = "document_status"
    FOLLOW_UP_DATE = "follow_up_date"
    LAST_ACTIVITY_DATE = "last_activity_date"
    NOTES = "notes"
    FINAL_CONCLUSION = "final_conclusion"


class SubstringRule(NamedTuple):
    """Matches when every `required` fragment is present and no `forbidden` one is."""
    field: LeadField
    required: Tuple[str, ...]
    forbidden: Tuple[str, ...] = ()

    def matches(self, header: str) -> bool:
        return (
            all(fragment in header for fragment in self.required)
            and not any(fragment in header for fragment in self.forbidden)
        )


# Discom spellings vary too much for an alias table ("DISCOM", "Discom Name", "discom/area")
PRIORITY_RULES: Tuple[SubstringRule, ...] = (
    SubstringRule(LeadField.DISCOM, ("discom",)),
)


def _aliases(field: LeadField, *spellings: str) -> Dict[str, LeadField]:
    return {spelling: field for spelling in spellings}


HEADER_ALIASES: Dict[str, LeadField] = {
    **_aliases(
        LeadField.CONSUMER_NUMBER,
        "con.no", "con.no.", "con no", "connection number", "consumer number",
        "consumernumber", "consumer_number", "consumer no", "consumer no.",
    ),
    **_aliases(LeadField.KVA, "kva", "load", "load (kva)", "kva load"),
    **_aliases(LeadField.CONNECTION_DATE, "connection date", "connectiondate", "connection_date"),
    **_aliases(LeadField.COMPANY, "company", "company name", "companyname", "organization", "firm"),
    **_aliases(
        LeadField.COMPANY_LOCATION,
        "company location", "companylocation", "company_location", "location", "address",
    ),
    **_aliases(LeadField.CLIENT_NAME, "client name", "clientname", "client_name", "client"),
    **_aliases(LeadField.GIDC, "gidc"),
    **_aliases(LeadField.GST_NUMBER, "gst number", "gstnumber", "gst_number", "gst", "gst no", "gstin"),
    **_aliases(
        LeadField.MOBILE_NUMBER,
        "mo.no", "mo.no.", "mo .no", "mo .no.", "mobile number", "mobilenumber", "mobile",
        "phone", "phone number", "contact phone", "telephone", "main mobile number",
    ),
    **_aliases(
        LeadField.MOBILE_NUMBER_2,
        "mobile number 2", "mobile number2", "mobile2", "mobile 2", "mobile no 2", "mobile no. 2",
        "mobile no2", "phone 2", "phone2", "phone no 2", "phone no. 2", "contact number 2",
        "contact no 2", "tel 2", "tel2", "telephone 2", "telephone2",
    ),
    **_aliases(
        LeadField.MOBILE_NUMBER_3,
        "mobile number 3", "mobile number3", "mobile3", "mobile 3", "mobile no 3", "mobile no. 3",
        "mobile no3", "phone 3", "phone3", "contact number 3", "contact no 3",
    ),
    **_aliases(
        LeadField.CONTACT_NAME_2,
        "contact name 2", "contact name2", "contact2", "contact 2", "name 2", "name2",
        "contact person 2", "contact person2", "person name 2", "person 2", "person2",
        "contact person name 2", "contact person name2",
    ),
    **_aliases(
        LeadField.CONTACT_NAME_3,
        "contact name 3", "contact name3", "contact3", "contact 3", "name 3", "name3",
        "contact person 3", "contact person3", "person name 3",
    ),
    **_aliases(
        LeadField.STATUS,
        "lead status", "leadstatus", "status", "current status", "lead_status", "lead-status",
    ),
    **_aliases(LeadField.UNIT_TYPE, "unit type", "unittype", "unit_type", "type"),
    **_aliases(LeadField.MANDATE_STATUS, "mandate status", "mandatestatus", "mandate_status"),
    **_aliases(
        LeadField.DOCUMENT_STATUS,
        "document status", "documentstatus", "document_status", "documents status",
    ),
    **_aliases(
        LeadField.FOLLOW_UP_DATE,
        "follow-up date", "followup date", "follow up date", "follow_up_date", "followupdate",
        "followup_date", "follow-up", "followup", "follow_up", "next follow-up", "next followup",
        "next follow up", "next_follow_up", "nextfollowup", "next follow-up date",
        "next followup date", "next follow up date", "next_follow_up_date", "nextfollowupdate",
        "next_followup", "nextfollowup_date",
    ),
    **_aliases(
        LeadField.LAST_ACTIVITY_DATE,
        "last activity date", "lastactivitydate", "last_activity_date", "last activity",
        "lastactivity", "last_activity", "activity date", "activitydate", "activity_date",
        "last call date", "lastcalldate", "last_call_date", "last contact date",
        "lastcontactdate", "last_contact_date",
    ),
    **_aliases(
        LeadField.NOTES,
        "notes", "note", "discussion", "last discussion", "lastdiscussion", "last_discussion",
        "last-discussion", "call notes", "comments", "comment", "remarks", "description",
    ),
    **_aliases(
        LeadField.FINAL_CONCLUSION,
        "final conclusion", "finalconclusion", "final_conclusion", "conclusion",
    ),
}

FALLBACK_RULES: Tuple[SubstringRule, ...] = (
    SubstringRule(LeadField.MOBILE_NUMBER_2, ("mobile", "2"), ("name",)),
    SubstringRule(LeadField.MOBILE_NUMBER_3, ("mobile", "3"), ("name",)),
    SubstringRule(LeadField.CONTACT_NAME_2, ("contact", "name", "2")),
    SubstringRule(LeadField.CONTACT_NAME_3, ("contact", "name", "3")),
)


def normalize_header(header) -> str:
    if header is None:
        return ""
    return " ".join(str(header).lower().split())


def classify_header(header) -> Optional[LeadField]:
    """Map one raw header to a canonical field, or None when unmapped."""
    key = normalize_header(header)
    if not key:
        return None

    for rule in PRIORITY_RULES:
        if rule.matches(key):
            return rule.field

    field = HEADER_ALIASES.get(key)
    if field is not None:
        return field

    for rule in FALLBACK_RULES:
        if rule.matches(key):
            return rule.field

    logger.debug(f"Unmapped header: {header!r}")
    return None
