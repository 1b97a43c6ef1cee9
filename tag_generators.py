"""
Tag Pattern Generators for the YouTube Tag Generator.
Each generator turns one slice of the input into candidate tags with priorities.
"""

import re
from typing import List, Optional

from models import TagCandidate, TagCategory

# ===================== CONSTANTS =====================
BROAD_PATTERNS = ["tutorial", "guide", "how to", "tips", "learn"]
TRENDING_PATTERNS = ["new", "latest", "updated", "best"]

# Applied one at a time to the original word, never chained
MISSPELLING_PATTERNS = [
    (re.compile(r"ie"), "ei"),
    (re.compile(r"ei"), "ie"),
    (re.compile(r"tion"), "sion"),
    (re.compile(r"sion"), "tion"),
    (re.compile(r"([aeiou])\1"), r"\1"),  # doubled vowels
    (re.compile(r"([^aeiou])\1"), r"\1"),  # doubled consonants
]
MAX_MISSPELLINGS = 3

MAX_SECONDARY_KEYWORDS = 5
MAX_LONG_TAIL_KEYWORDS = 5
MAX_LONG_TAIL_LENGTH = 30

MAX_TITLE_TAG_LENGTH = 30
MIN_PHRASE_LENGTH = 5
MAX_PHRASE_LENGTH = 30

_PUNCTUATION = re.compile(r"[^\w\s]", re.ASCII)


def strip_punctuation(text: str) -> str:
    """Remove every character that isn't a word character or whitespace."""
    return _PUNCTUATION.sub("", text)


def generate_exact_match_tags(
    concept: str,
    title: Optional[str] = None,
    primary_keywords: Optional[List[str]] = None
) -> List[TagCandidate]:
    """
    Generate exact-match tags from the concept, the title and primary keywords.

    Args:
        concept: The video concept/topic
        title: The video title
        primary_keywords: Primary keywords, best first

    Returns:
        List of exact-match tag candidates
    """
    tags = [TagCandidate(
        tag=concept.lower(),
        category=TagCategory.EXACT,
        priority=100,
        reason="Main video concept"
    )]

    if title:
        # Full title (if not too long)
        if len(title) <= MAX_TITLE_TAG_LENGTH:
            tags.append(TagCandidate(
                tag=title.lower(),
                category=TagCategory.EXACT,
                priority=95,
                reason="Video title"
            ))

        # Key phrases from title (adjacent word pairs)
        title_words = [w for w in strip_punctuation(title.lower()).split() if len(w) > 2]
        for i in range(len(title_words) - 1):
            phrase = " ".join(title_words[i:i + 2])
            if MIN_PHRASE_LENGTH <= len(phrase) <= MAX_PHRASE_LENGTH:
                tags.append(TagCandidate(
                    tag=phrase,
                    category=TagCategory.EXACT,
                    priority=85,
                    reason="Title phrase"
                ))

    for index, keyword in enumerate(primary_keywords or []):
        tags.append(TagCandidate(
            tag=keyword.lower(),
            category=TagCategory.EXACT,
            priority=90 - index * 5,
            reason="Primary keyword"
        ))

    return tags


def generate_broad_tags(concept: str, niche: Optional[str] = None) -> List[TagCandidate]:
    """Generate broad topic tags from concept words, the niche and common patterns."""
    tags = []
    concept_lower = concept.lower()

    concept_words = [w for w in concept_lower.split() if len(w) > 3]
    for index, word in enumerate(concept_words):
        tags.append(TagCandidate(
            tag=word,
            category=TagCategory.BROAD,
            priority=60 - index * 2,
            reason="Concept word"
        ))

    if niche:
        niche_lower = niche.lower()
        tags.append(TagCandidate(
            tag=niche_lower,
            category=TagCategory.BROAD,
            priority=65,
            reason="Content niche"
        ))
        tags.append(TagCandidate(
            tag=f"{niche_lower} video",
            category=TagCategory.BROAD,
            priority=55,
            reason="Niche + video"
        ))

    for index, pattern in enumerate(BROAD_PATTERNS):
        tags.append(TagCandidate(
            tag=f"{concept_lower} {pattern}",
            category=TagCategory.BROAD,
            priority=50 - index * 2,
            reason="Broad pattern"
        ))

    return tags


def generate_related_tags(
    secondary_keywords: Optional[List[str]] = None,
    long_tail_keywords: Optional[List[str]] = None
) -> List[TagCandidate]:
    """
    Generate related tags from secondary and long-tail keywords.

    Both lists are expected to be ranked already; only the top few are used.
    """
    tags = []

    for index, keyword in enumerate((secondary_keywords or [])[:MAX_SECONDARY_KEYWORDS]):
        tags.append(TagCandidate(
            tag=keyword.lower(),
            category=TagCategory.RELATED,
            priority=70 - index * 3,
            reason="Secondary keyword"
        ))

    # Long-tail keywords often make great tags, if they fit
    for index, keyword in enumerate((long_tail_keywords or [])[:MAX_LONG_TAIL_KEYWORDS]):
        tag = keyword.lower()
        if len(tag) <= MAX_LONG_TAIL_LENGTH:
            tags.append(TagCandidate(
                tag=tag,
                category=TagCategory.RELATED,
                priority=65 - index * 3,
                reason="Long-tail keyword"
            ))

    return tags


def generate_trending_tags(concept: str, year: int) -> List[TagCandidate]:
    """
    Generate timely tags for the given year.

    Args:
        concept: The video concept/topic
        year: Calendar year to stamp on the tags

    Returns:
        List of trending tag candidates
    """
    concept_lower = concept.lower()
    tags = [
        TagCandidate(
            tag=f"{concept_lower} {year}",
            category=TagCategory.TRENDING,
            priority=75,
            reason="Current year tag"
        ),
        TagCandidate(
            tag=f"{concept_lower} tutorial {year}",
            category=TagCategory.TRENDING,
            priority=70,
            reason="Year + tutorial"
        ),
    ]

    for index, pattern in enumerate(TRENDING_PATTERNS):
        tags.append(TagCandidate(
            tag=f"{pattern} {concept_lower}",
            category=TagCategory.TRENDING,
            priority=55 - index * 3,
            reason="Trending pattern"
        ))

    return tags


def generate_branded_tags(channel_name: str, concept: str) -> List[TagCandidate]:
    """Generate channel/brand tags."""
    clean_channel = strip_punctuation(channel_name.lower())
    concept_words = concept.lower().split()
    first_word = concept_words[0] if concept_words else ""

    return [
        TagCandidate(
            tag=clean_channel,
            category=TagCategory.BRANDED,
            priority=80,
            reason="Channel name"
        ),
        TagCandidate(
            tag=f"{clean_channel} {first_word}",
            category=TagCategory.BRANDED,
            priority=75,
            reason="Channel + topic"
        ),
    ]


def generate_misspelling_tags(concept: str) -> List[TagCandidate]:
    """
    Generate common misspellings of the longer concept words.

    Only the first few misspellings are kept, so earlier words win.
    """
    tags = []

    for word in concept.lower().split():
        if len(word) <= 4:
            continue
        for index, (pattern, replacement) in enumerate(MISSPELLING_PATTERNS):
            misspelled = pattern.sub(replacement, word)
            if misspelled != word and len(misspelled) > 3:
                tags.append(TagCandidate(
                    tag=misspelled,
                    category=TagCategory.MISSPELLINGS,
                    priority=30 - index * 2,
                    reason="Common misspelling"
                ))

    return tags[:MAX_MISSPELLINGS]
