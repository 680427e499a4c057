# Models package - lead records and the key-value store table
from leadtracker.models.lead import (
    Lead, MobileNumber, Activity,
    LeadStatus, UnitType, MandateStatus, DocumentStatus,
)
from leadtracker.models.store import StoreEntry
