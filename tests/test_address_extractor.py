import pytest

from aadhaar_ocr.extractors import (
    AddressBlockAssembler,
    AddressExtractor,
    clean_address_line,
    is_person_name_pattern,
)

from scenarios import FULL_CARD, SCENARIO_A, lines_of


@pytest.fixture
def address():
    return AddressExtractor()


def test_block_ending_at_region_line(address):
    assert address.extract(lines_of(SCENARIO_A)) == "123 MG Road, Pune, Maharashtra, 411001"


def test_repeated_city_kept_once(address):
    assert address.extract(lines_of(FULL_CARD)) == (
        "Flat 12 Shanti Apartment, Nehru Nagar East, Mumbai, Maharashtra, 400024"
    )


def test_region_abbreviation_displayed_upper_case(address):
    lines = ["House 4 Civil Lines", "Lucknow UP 226001"]
    assert address.extract(lines) == "House 4 Civil Lines, Lucknow, UP, 226001"


def test_region_without_postal_code_is_not_an_anchor(address):
    assembler = AddressBlockAssembler(["12 Lake Road", "Kerala"])
    assert assembler.locate_anchor() is None
    assert address.extract(["12 Lake Road", "Kerala"]) == ""


def test_section_between_gender_and_uid(address):
    lines = ["Gender: Male", "Near Old Temple", "Ward Seven Colony", "1234 5678 9012"]
    assert address.from_region_block(lines) == ""
    assert address.extract(lines) == "Near Old Temple, Ward Seven Colony"


def test_no_address(address):
    assert address.extract(["Rohit Sharma", "Pune"]) == ""


def test_format_prefers_longest_city_line():
    block = ["Mumbai", "Andheri West Mumbai"]
    assert AddressBlockAssembler.format(block, "maharashtra", "400053") == (
        "Andheri West Mumbai, Maharashtra, 400053"
    )


def test_format_empty_block():
    assert AddressBlockAssembler.format([], "maharashtra", "400053") == ""


def test_person_name_pattern():
    assert is_person_name_pattern("W/O Suresh Gupta")
    assert not is_person_name_pattern("Nehru Nagar East")
    assert not is_person_name_pattern("12 MG Road")


def test_clean_address_line():
    assert clean_address_line("12, MG Road; #4") == "12, MG Road 4"


def test_street_line_with_repeated_digits_kept(address):
    lines = ["Flat 1111 Shanti Apartment", "Nehru Nagar East", "Mumbai Maharashtra 400024"]
    assert address.extract(lines) == "Flat 1111 Shanti Apartment, Nehru Nagar East, Mumbai, Maharashtra, 400024"
