from aadhaar_ocr.text.sanitizer import (
    filter_devanagari_lines,
    is_garbage_line,
    sanitize_line,
    sanitize_lines,
)


def test_gender_markers_always_kept():
    for marker in ["M", "F", "Male", "female"]:
        assert sanitize_line(marker) == marker


def test_whitespace_collapsed():
    assert sanitize_line("  123   MG    Road ") == "123 MG Road"


def test_repeated_character_line_dropped():
    assert is_garbage_line("oooo")
    assert sanitize_line("llllll") is None


def test_repeated_digits_inside_line_kept():
    assert not is_garbage_line("H No 2222 Gandhi Road")
    assert sanitize_line("H No 2222 Gandhi Road") == "H No 2222 Gandhi Road"


def test_symbol_soup_dropped():
    assert sanitize_line("Ram @#$% Singh") is None


def test_misread_conjuncts_dropped():
    assert sanitize_line("fft rff tft") is None


def test_fragmented_letters_dropped():
    assert sanitize_line("a b c road") is None


def test_uncommon_bigrams_dropped():
    assert sanitize_line("qxab wzcd") is None


def test_meaningful_lines_kept():
    assert sanitize_line("DOB: 15/08/1990") == "DOB: 15/08/1990"
    assert sanitize_line("Government of India") == "Government of India"
    assert sanitize_line("Priya Patel") == "Priya Patel"


def test_short_noise_dropped():
    assert sanitize_line("x") is None
    assert sanitize_line("") is None


def test_sanitize_lines_keeps_order():
    lines = ["Government of India", "fft rrr", "Rohit Kumar Sharma"]
    assert sanitize_lines(lines) == ["Government of India", "Rohit Kumar Sharma"]


def test_filter_devanagari_lines():
    lines = ["भारत सरकार", "Government of India", "नाम Rohit Kumar Sharma", "", "जन्म तिथि / DOB"]
    assert filter_devanagari_lines(lines) == ["भारत सरकार", "जन्म तिथि / DOB"]
