"""
Tests for the field codec
"""
from datetime import date, datetime, time
import pytest
from clinic_records.codec import (
    decode_medications,
    encode_medications,
    escape_for_storage,
    format_date,
    format_time,
    parse_medications,
)

@pytest.mark.parametrize("meds", [
    [],
    ["ibuprofen"],
    ["ibuprofen", "vitamin-d"],
    ["amoxicillin 500mg", "paracetamol", "O'Neil's syrup"],
])
def test_medications_round_trip(meds):
    assert decode_medications(encode_medications(meds)) == meds

def test_encode_appends_delimiter_after_every_item():
    assert encode_medications(["ibuprofen", "vitamin-d"]) == "ibuprofen;vitamin-d;"

def test_encode_trims_and_drops_empty_items():
    assert encode_medications(["  ibuprofen ", "", "   ", "zinc"]) == "ibuprofen;zinc;"

def test_decode_skips_empty_segments():
    assert decode_medications(";;a;;b") == ["a", "b"]
    assert decode_medications("") == []
    assert decode_medications(None) == []

def test_delimiter_inside_item_splits_it():
    # known limitation: ';' is not escaped inside a medication name
    assert decode_medications(encode_medications(["a;b"])) == ["a", "b"]

def test_parse_medications_from_free_text():
    assert parse_medications(" ibuprofen ; vitamin-d;; ") == ["ibuprofen", "vitamin-d"]
    assert parse_medications("") == []

def test_escape_for_storage_doubles_quotes():
    assert escape_for_storage("O'Brien") == "O''Brien"
    assert escape_for_storage("no quotes") == "no quotes"
    assert escape_for_storage(None) == ""

def test_format_date_and_time():
    assert format_date(date(2024, 3, 1)) == "2024-03-01"
    assert format_date(datetime(2024, 3, 1, 9, 30)) == "2024-03-01"
    assert format_date("2024-03-01") == "2024-03-01"
    assert format_time(time(9, 0)) == "09:00"
    assert format_time(datetime(2024, 3, 1, 14, 5, 59)) == "14:05"
    assert format_time("09:00") == "09:00"

def test_encode_plain_string_as_free_text():
    assert encode_medications("ibuprofen") == "ibuprofen;"
    assert encode_medications("ibuprofen; vitamin-d") == "ibuprofen;vitamin-d;"
    assert encode_medications("") == ""
    assert encode_medications(None) == ""
