from __future__ import annotations

import re
import unicodedata

_MULTISPACE_RE = re.compile(r"\s+")
_MANUFACTURER_PREFIX_RE = re.compile(
    r"^(teva|pfizer|novartis|roche|merck|gsk|abbott|bayer|sanofi|astrazeneca)-?",
    re.IGNORECASE,
)
_DOSAGE_FORM_SUFFIX_RE = re.compile(
    r"-(tablets?|capsules?|injection|syrup|suspension|solution|cream|ointment|gel|drops?|spray|"
    r"inhaler|patch|suppository|powder|granules|sachets?|vials?|ampoules?|prefilled|pen|"
    r"auto-injector|extended|release|controlled|immediate|delayed|enteric|coated|chewable|"
    r"dispersible|effervescent|sublingual|buccal|transdermal|topical|ophthalmic|otic|nasal|"
    r"rectal|vaginal|oral|intravenous|intramuscular|subcutaneous)$",
    re.IGNORECASE,
)
_TRAILING_UNIT_RE = re.compile(r"\s+(mg|mcg|g|ml|l|units?|iu|%|\d+)\s*$", re.IGNORECASE)
_TRAILING_STRENGTH_RE = re.compile(r"\s*\d+\s*(mg|mcg|g|ml|l|units?|iu|%)\s*$", re.IGNORECASE)


def strip_accents(text: str) -> str:
    normalized = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in normalized if not unicodedata.combining(ch))


def normalize_text(value: str | None) -> str:
    text = strip_accents((value or "").strip().lower())
    return _MULTISPACE_RE.sub(" ", text)


def contains(haystack: str | None, needle: str) -> bool:
    """Case- and accent-insensitive substring test; empty needle never matches."""
    normalized_needle = normalize_text(needle)
    if not normalized_needle:
        return False
    return normalized_needle in normalize_text(haystack)


def extract_generic_name(drug_name: str | None) -> str:
    """Best-effort generic name from a registry package name.

    Drops a leading manufacturer, a trailing dosage form and strength, then
    keeps the first word: ``"Pfizer-Amlodipine 5 mg"`` -> ``"amlodipine"``.
    """
    if not drug_name:
        return ""

    cleaned = _MULTISPACE_RE.sub(" ", drug_name.lower()).strip()
    cleaned = _MANUFACTURER_PREFIX_RE.sub("", cleaned)
    cleaned = _DOSAGE_FORM_SUFFIX_RE.sub("", cleaned)
    cleaned = _TRAILING_UNIT_RE.sub("", cleaned)
    cleaned = _TRAILING_STRENGTH_RE.sub("", cleaned)
    cleaned = cleaned.strip()

    words = cleaned.split()
    return words[0] if words else drug_name
