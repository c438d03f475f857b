"""
Fuzzy matching of free-text pest/disease names.

Field history records carry whatever the grower typed ("Aphid", "early
blight on lower leaves") while catalog entries carry short keywords
("aphids", "blight").  Two names match when either one contains the other,
ignoring case and surrounding whitespace.  Empty names never match.

A ``pest`` issue is only compared against a crop's ``common_pests`` and a
``disease`` issue against its ``common_diseases``.
"""

from __future__ import annotations

from typing import Iterable

from crop_planner.models.crop import Crop
from crop_planner.models.field import PestDiseaseRecord
from crop_planner.taxonomy.crop_taxonomy import IssueType


def names_match(a: str, b: str) -> bool:
    """Case-insensitive bidirectional substring containment."""
    left = a.strip().lower()
    right = b.strip().lower()
    if not left or not right:
        return False
    return left in right or right in left


def matches_any(name: str, candidates: Iterable[str]) -> bool:
    """Return ``True`` if ``name`` matches at least one of ``candidates``."""
    return any(names_match(name, c) for c in candidates)


def issue_affects_crop(issue: PestDiseaseRecord, crop: Crop) -> bool:
    """Return ``True`` if ``crop`` is susceptible to ``issue``."""
    if issue.type == IssueType.PEST:
        return matches_any(issue.name, crop.common_pests)
    return matches_any(issue.name, crop.common_diseases)


def matching_issues(
    crop: Crop,
    issues: Iterable[PestDiseaseRecord],
) -> list[PestDiseaseRecord]:
    """Issues from ``issues`` that affect ``crop``, in input order."""
    return [issue for issue in issues if issue_affects_crop(issue, crop)]


def contains_any(text: str | None, keywords: Iterable[str]) -> bool:
    """One-directional check: does ``text`` contain any keyword (case-insensitive)?

    Used for soil types and crop-name keyword groups, where only the longer
    free-text side is searched.  ``None`` or empty ``text`` returns ``False``.
    """
    if not text:
        return False
    haystack = text.lower()
    return any(k and k.lower() in haystack for k in keywords)
