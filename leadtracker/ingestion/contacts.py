"""
Contact list parsing - one free-text cell holding up to three phone contacts.

    "Mobile: 98765 43210 (Raj), 91234-56780"  ->  [9876543210/Raj, 9123456780/"", empty]
"""
import re
from typing import List, NamedTuple, Optional

from leadtracker.models.lead import MobileNumber

CONTACT_SLOTS = 3
MAX_DIGITS = 10

LABEL_PREFIX = re.compile(
    r"^\s*(?:main\s+)?(?:mobile|mob|mo\s*\.?\s*no|phone|ph|tel|telephone|contact)"
    r"\s*(?:no\.?|number|numbers|nos\.?)?\s*[:\-]\s*",
    re.IGNORECASE,
)
SEPARATORS = re.compile(r"[,;|\n/]|\s{2,}")
NAMED_TOKEN = re.compile(r"^(.*?)\s*\(([^()]*)\)\s*$")
NON_DIGITS = re.compile(r"\D")


class ParsedContact(NamedTuple):
    number: str
    name: str

    @property
    def is_empty(self) -> bool:
        return not self.number and not self.name


def clean_number(raw) -> str:
    """Digits only, truncated to ten."""
    if raw is None:
        return ""
    return NON_DIGITS.sub("", str(raw))[:MAX_DIGITS]


def parse_token(token: str) -> ParsedContact:
    match = NAMED_TOKEN.match(token)
    if match:
        number, name = match.groups()
        return ParsedContact(clean_number(number), name.strip())
    return ParsedContact(clean_number(token), "")


def parse_contacts(raw, fallback_name: Optional[str] = None) -> List[ParsedContact]:
    """
    Parse a contact cell into exactly three slots.

    Tokens are split on `, ; | / newline` or runs of two or more spaces;
    a `number (name)` token carries its own name. Only the first three
    non-empty tokens are kept. The fallback name fills slot 0 only.
    """
    text = "" if raw is None else str(raw)
    text = LABEL_PREFIX.sub("", text, count=1)

    parsed: List[ParsedContact] = []
    for token in SEPARATORS.split(text):
        token = token.strip()
        if not token:
            continue
        contact = parse_token(token)
        if contact.is_empty:
            continue
        parsed.append(contact)
        if len(parsed) == CONTACT_SLOTS:
            break

    while len(parsed) < CONTACT_SLOTS:
        parsed.append(ParsedContact("", ""))

    first = parsed[0]
    if first.number and not first.name and fallback_name and fallback_name.strip():
        parsed[0] = ParsedContact(first.number, fallback_name.strip())

    return parsed


def to_mobile_numbers(slots: List[ParsedContact]) -> List[MobileNumber]:
    """
    Turn parsed slots into stored contacts. Slot positions are kept, trailing
    empty slots dropped, and slot 0 carries the main flag.
    """
    last = max((i for i, slot in enumerate(slots) if not slot.is_empty), default=-1)
    return [
        MobileNumber(id=str(i + 1), number=slot.number, name=slot.name, is_main=(i == 0))
        for i, slot in enumerate(slots[:last + 1])
    ]


def format_contact(contact: Optional[MobileNumber]) -> str:
    """Render a contact the way the import side parses it back."""
    if contact is None or not contact.number:
        return ""
    if contact.name:
        return f"{contact.number} ({contact.name})"
    return contact.number
