import pytest

from aadhaar_ocr.extractors import BirthDateExtractor, GenderExtractor, UIDExtractor, format_uid

from scenarios import SCENARIO_A, SCENARIO_C, lines_of


# Gender

@pytest.fixture
def gender():
    return GenderExtractor()


@pytest.mark.parametrize("line,expected", [
    ("Gender: F", "F"),
    ("Gender M", "M"),
    ("Sex: M", "M"),
    ("लिंग: F", "F"),
    ("Male", "M"),
    ("महिला / Female", "F"),
])
def test_gender_labels(gender, line, expected):
    assert gender.extract([line]) == expected


def test_gender_from_scenario(gender):
    assert gender.extract(lines_of(SCENARIO_A)) == "M"


def test_gender_first_matching_line_wins(gender):
    assert gender.extract(["Male", "Gender: F"]) == "M"


def test_standalone_letter_next_to_date(gender):
    assert gender.extract(["Rohit Sharma", "15/08/1990", "m"]) == "M"
    assert gender.extract(["f", "15/08/1990"]) == "F"


def test_standalone_letter_without_date_is_ignored(gender):
    assert gender.extract(["m", "Rohit Sharma"]) == ""


def test_female_checked_before_male(gender):
    # neither word stands alone, so only the substring search applies
    assert gender.from_label(["femaleness"]) == ""
    assert gender.extract(["femaleness"]) == "F"
    assert gender.extract(["malefemale"]) == "F"
    assert gender.extract(["malevolent"]) == "M"


def test_no_gender(gender):
    assert gender.extract(["Rohit Sharma", "1234 5678 9012"]) == ""


# Birth date

@pytest.fixture
def birth_date():
    return BirthDateExtractor()


def test_labelled_date(birth_date):
    assert birth_date.extract(lines_of(SCENARIO_A)) == "1990-08-15"


def test_labelled_date_preferred_over_first_date(birth_date):
    lines = ["Issued: 01/01/2020", "DOB: 15/08/1990"]
    assert birth_date.first_date(lines) == "2020-01-01"
    assert birth_date.extract(lines) == "1990-08-15"


def test_slash_and_dash_separators(birth_date):
    assert birth_date.extract(["DOB: 01/02/1985"]) == "1985-02-01"
    assert birth_date.extract(["DOB: 01-02-1985"]) == "1985-02-01"


def test_invalid_calendar_date_falls_through(birth_date):
    lines = ["DOB: 31/02/1990", "Year of Birth: 1985"]
    assert birth_date.labelled_date(lines) == ""
    assert birth_date.extract(lines) == "1985-01-01"


def test_labelled_year_out_of_range(birth_date):
    assert birth_date.extract(["YOB: 1925"]) == ""


def test_single_standalone_year(birth_date):
    assert birth_date.extract(["Rohit Kumar Sharma", "1985", "Male"]) == "1985-01-01"


def test_two_standalone_years_give_nothing(birth_date):
    assert birth_date.extract(["Rohit Kumar Sharma", "1985", "2001"]) == ""


def test_uid_groups_are_not_years(birth_date):
    assert birth_date.extract(["Rohit Kumar", "1985", "1234 1990 5678"]) == "1985-01-01"


def test_labelled_year_out_of_range_not_reused(birth_date):
    assert birth_date.extract(["Rohit Kumar Sharma", "Year of Birth: 2012", "Male"]) == ""


def test_unparseable_labelled_date_not_turned_into_year(birth_date):
    assert birth_date.extract(["Rohit Kumar Sharma", "DOB: 31/02/1990", "Male"]) == ""


# UID

@pytest.mark.parametrize("raw,expected", [
    ("123456789012", "1234 5678 9012"),
    ("1234 5678 9012", "1234 5678 9012"),
    ("1234 56789012", "1234 5678 9012"),
    ("1234\t5678 9012", "1234 5678 9012"),
    ("12345", "12345"),
])
def test_format_uid(raw, expected):
    assert format_uid(raw) == expected


def test_format_uid_is_idempotent():
    once = format_uid("987654321098")
    assert format_uid(once) == once


@pytest.fixture
def uid():
    return UIDExtractor()


def test_labelled_uid_on_next_line(uid):
    lines = ["Your Aadhaar No.", "1111 2222 3333", "Rohit Sharma", "4444 5555 6666"]
    assert uid.extract(lines) == "1111 2222 3333"


def test_labelled_uid_on_same_line(uid):
    assert uid.extract(["Aadhaar No: 9999 8888 7777", "1111 2222 3333"]) == "9999 8888 7777"


def test_bottom_uid_skips_conflicting_lines(uid):
    lines = ["4444 5555 6666", "Rohit Sharma", "Mobile: 9876 5432 1098"]
    assert uid.extract(lines) == "4444 5555 6666"


def test_uid_anywhere_fallback(uid):
    lines = ["1212 3434 5656", "Rohit Sharma", "Male", "Pune", "Maharashtra"]
    assert uid.bottom_lines(lines) == ""
    assert uid.extract(lines) == "1212 3434 5656"


def test_unspaced_uid_reformatted(uid):
    assert uid.extract(lines_of(SCENARIO_C)) == "9876 5432 1098"


def test_longer_digit_runs_are_not_uids(uid):
    assert uid.extract(["Account 12345678901234"]) == ""
