from aadhaar_ocr.models import Script
from aadhaar_ocr.text.script_classifier import artifact_score, classify_line, tag_transcript


def test_plain_english_line_is_latin():
    tag = classify_line("Aadhaar Card")
    assert tag.script == Script.LATIN
    assert tag.confidence == 1.0


def test_devanagari_line():
    tag = classify_line("भारत सरकार")
    assert tag.script == Script.DEVANAGARI
    assert tag.confidence == 1.0


def test_mixed_line():
    tag = classify_line("नाम Name")
    assert tag.script == Script.MIXED
    assert tag.confidence >= 0.5


def test_digits_only_line_has_no_majority_script():
    tag = classify_line("1234 5678 9012")
    # digits count toward the total but belong to neither script
    assert tag.script == Script.UNKNOWN
    assert tag.confidence == 0.5


def test_symbols_only_line_is_unknown():
    tag = classify_line("-- ::")
    assert tag.script == Script.UNKNOWN
    assert tag.confidence == 0.0


def test_transliterated_hindi_is_tagged_devanagari():
    tag = classify_line("bharat sarkar")
    assert tag.script == Script.DEVANAGARI
    assert tag.confidence > 0.5


def test_artifact_score_is_capped():
    assert artifact_score("bhrt srkr ddd ph kh gh bharat sarkar") == 1.0


def test_tag_transcript_prefixes_each_line():
    tagged = tag_transcript(["Rohit Kumar Sharma", "भारत सरकार"])
    assert tagged.splitlines() == ["[EN] Rohit Kumar Sharma", "[HI] भारत सरकार"]
