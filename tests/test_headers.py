"""
Tests for header classification.
"""
import pytest

from leadtracker.ingestion.headers import LeadField, classify_header


@pytest.mark.parametrize("header, field", [
    ("con.no", LeadField.CONSUMER_NUMBER),
    ("Consumer Number", LeadField.CONSUMER_NUMBER),
    ("KVA", LeadField.KVA),
    ("  Company   Name ", LeadField.COMPANY),
    ("Address", LeadField.COMPANY_LOCATION),
    ("Mo.No", LeadField.MOBILE_NUMBER),
    ("Main Mobile Number", LeadField.MOBILE_NUMBER),
    ("Lead Status", LeadField.STATUS),
    ("Last Discussion", LeadField.NOTES),
    ("Next Follow-up Date", LeadField.FOLLOW_UP_DATE),
    ("GSTIN", LeadField.GST_NUMBER),
    ("Final Conclusion", LeadField.FINAL_CONCLUSION),
])
def test_exact_aliases(header, field):
    assert classify_header(header) == field


@pytest.mark.parametrize("header", ["DISCOM", "Discom Name", "discom/area"])
def test_discom_substring_wins(header):
    assert classify_header(header) == LeadField.DISCOM


@pytest.mark.parametrize("header, field", [
    ("Alt Mobile 2", LeadField.MOBILE_NUMBER_2),
    ("Secondary Mobile No 3", LeadField.MOBILE_NUMBER_3),
    ("Contact Person Name 2", LeadField.CONTACT_NAME_2),
    ("Other Contact Name 3", LeadField.CONTACT_NAME_3),
])
def test_fallback_rules_for_extra_contacts(header, field):
    assert classify_header(header) == field


def test_mobile_name_header_is_not_a_number_column():
    assert classify_header("Mobile 2 Name") is None


@pytest.mark.parametrize("header", [None, "", "Serial", "Sr. No."])
def test_unmapped_headers(header):
    assert classify_header(header) is None
