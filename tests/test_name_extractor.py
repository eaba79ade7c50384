import pytest

from aadhaar_ocr.extractors import NameExtractor, is_not_name, is_valid_name, score_name_candidate

from scenarios import SCENARIO_A, lines_of


@pytest.fixture
def extractor():
    return NameExtractor()


def test_name_after_authority_heading(extractor):
    assert extractor.extract(lines_of(SCENARIO_A)) == "Rohit Kumar Sharma"


def test_heading_name_beats_label(extractor):
    lines = lines_of("""Government of India
Priya Singh
DOB: 01/01/1990
Female
1234 5678 9012
Maharashtra
400001
Name: Meena Kumari""")
    assert extractor.from_label(lines) == "Meena Kumari"
    assert extractor.extract(lines) == "Priya Singh"


def test_label_used_without_heading(extractor):
    lines = lines_of("""Name: Arjun Reddy
DOB: 05/06/1979""")
    assert extractor.extract(lines) == "Arjun Reddy"


def test_first_plausible_line_fallback(extractor):
    lines = lines_of("""Kavita Rao
DOB: 12/12/1992""")
    assert extractor.extract(lines) == "Kavita Rao"


def test_first_plausible_line_skips_headers_and_numbers(extractor):
    lines = lines_of("""Government of India
12/12/1992
Kavita Rao""")
    assert extractor.first_plausible_line(lines) == "Kavita Rao"


def test_heading_candidates_cleaned_to_letters(extractor):
    lines = lines_of("""Government of India
Suresh_ Patil.
Male""")
    assert extractor.extract(lines) == "Suresh Patil"


def test_no_name_found(extractor):
    assert extractor.extract(lines_of("Government of India\nRam")) == ""
    assert extractor.extract(()) == ""


def test_is_not_name():
    assert is_not_name("1234 5678 9012")
    assert is_not_name("DOB: 15-08-1990")
    assert is_not_name("Pin 411001")
    assert is_not_name("Female")
    assert is_not_name("Pune Maharashtra")
    assert is_not_name("Al")
    assert not is_not_name("Rohit Kumar Sharma")


def test_is_valid_name():
    assert is_valid_name("Rohit Sharma")
    assert not is_valid_name("Rohit")
    assert not is_valid_name("A Sharma")
    assert not is_valid_name("Unique Card Holder")
    assert not is_valid_name("Ab " * 20)


def test_score_three_word_name():
    # 3 words (50) + length 18 (30) + surname root (15) + word lengths (10)
    assert score_name_candidate("Rohit Kumar Sharma") == 105


def test_score_two_word_name():
    assert score_name_candidate("Kavita Rao") == 80


def test_score_institutional_text_penalized():
    assert score_name_candidate("Unique Identification Authority of India") == 20


def test_score_single_letter_words_penalized():
    assert score_name_candidate("A B") == 10


def test_score_floored_at_zero():
    assert score_name_candidate("x") == 0
    assert score_name_candidate("") == 0
