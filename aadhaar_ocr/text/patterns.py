"""
Fixed keyword tables and regular expressions shared by the validator and
the field extractors.

These tables are the engine's only "configuration": they are deliberately
not exposed through environment variables.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

# 12-digit identifier: three groups of 4 digits, optional single spaces,
# not embedded in a longer digit run
UID_RE = re.compile(r"(?<!\d)\d{4} ?\d{4} ?\d{4}(?!\d)")

# DD/MM/YYYY or DD-MM-YYYY
DATE_RE = re.compile(r"\d{2}[/-]\d{2}[/-]\d{4}")

# 6-digit postal code
PIN_RE = re.compile(r"\b(\d{6})\b")

# Any 4-digit year in [1900, 2099]
ANY_YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")

# Devanagari Unicode block
DEVANAGARI_RANGE = ("\u0900", "\u097f")

REGION_ABBREVIATIONS = ("up", "mp", "hp", "ap", "tn", "wb", "ncr")

# Indian states, union territories and common abbreviations
REGION_NAMES = [
    # States
    "andhra pradesh", "arunachal pradesh", "assam", "bihar", "chhattisgarh",
    "goa", "gujarat", "haryana", "himachal pradesh", "jharkhand", "karnataka",
    "kerala", "madhya pradesh", "maharashtra", "manipur", "meghalaya",
    "mizoram", "nagaland", "odisha", "punjab", "rajasthan", "sikkim",
    "tamil nadu", "telangana", "tripura", "uttar pradesh", "uttarakhand", "west bengal",

    # Union territories
    "andaman and nicobar islands", "chandigarh", "dadra and nagar haveli and daman and diu",
    "delhi", "jammu and kashmir", "ladakh", "lakshadweep", "puducherry",

    # Abbreviations
    *REGION_ABBREVIATIONS,
]

_REGION_RES = [(name, re.compile(rf"\b{re.escape(name)}\b")) for name in REGION_NAMES]

KNOWN_CITIES = ["mumbai", "delhi", "bangalore", "kolkata", "chennai", "hyderabad", "pune", "ahmedabad"]

# Lines carrying these are card furniture, not personal data
HEADER_KEYWORDS = ["uidai", "government", "unique", "identification", "authority", "india", "भारत"]

# Issuing-authority headings that precede the holder's name
AUTHORITY_HEADINGS = [
    "government of india", "govt of india", "government of", "govt of",
    "authority", "uidai", "भारत सरकार",
]

# Positive evidence of an Aadhaar card
AUTHENTICITY_KEYWORDS = [
    "uidai", "unique identification authority", "government of india",
    "govt of india", "aadhaar", "aadhar", "भारत सरकार", "यूआईडीएआई",
]

# Evidence of some other document type
FOREIGN_DOCUMENT_KEYWORDS = [
    "passport", "driving license", "pan card", "voter id", "voter card",
    "birth certificate", "marksheet", "diploma", "degree", "invoice",
    "receipt", "bill", "statement", "bank", "atm", "debit", "credit",
]

GENDER_TOKENS = ["male", "female", "gender"]
GENDER_LABEL_RE = re.compile(r"gender:\s*[mf]", re.IGNORECASE)
GENDER_ONLY_RE = re.compile(r"^(male|female|m|f|पुरुष|महिला)\s*$", re.IGNORECASE)
GENDER_MARKERS = ["m", "f", "male", "female"]

NAME_LABEL_RE = re.compile(r"(?:name|नाम)\s*:?\s*([a-z\s]+)", re.IGNORECASE)
NAME_LABELS = ["name:", "नाम:"]
NAME_STOP_WORDS = ["authority", "government", "unique", "identification", "card"]

DOB_LABELS = ["dob", "date of birth", "birth", "born", "जन्म"]
YOB_LABELS = ["yob", "year of birth", "birth year", "जन्म वर्ष"]

UID_LABELS = [
    "your aadhaar no", "aadhaar no", "aadhar no", "aadhaar number",
    "aadhar number", "uid no", "unique id", "आधार संख्या", "आधार नंबर",
]
# A numeric run on a line with these is probably not the UID
UID_CONFLICT_KEYWORDS = ["date", "dob", "gender", "phone", "mobile"]

STREET_KEYWORDS = ["road", "street", "lane", "plot", "house", "building", "apartment", "flat"]
ADDRESS_KEYWORDS = STREET_KEYWORDS + [
    "east", "west", "north", "south", "nagar", "colony", "society", "area",
    "district", "pin", "pincode",
]


def find_region(text: str) -> Optional[str]:
    """First known region name (table order) appearing as a whole word in text."""
    lowered = text.lower()
    for name, pattern in _REGION_RES:
        if pattern.search(lowered):
            return name
    return None


def contains_any(text: str, keywords) -> bool:
    lowered = text.lower()
    return any(k in lowered for k in keywords)


def matching_keywords(text: str, keywords) -> Tuple[str, ...]:
    lowered = text.lower()
    return tuple(k for k in keywords if k.lower() in lowered)


def display_region(name: str) -> str:
    """Presentation form of a region table entry ("tamil nadu" -> "Tamil Nadu", "up" -> "UP")."""
    if name in REGION_ABBREVIATIONS:
        return name.upper()
    return title_case(name)


def title_case(text: str) -> str:
    """Upper-case the first letter of each word, leave the rest alone."""
    return " ".join(w[:1].upper() + w[1:] for w in text.split(" "))
