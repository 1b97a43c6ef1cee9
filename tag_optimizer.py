"""
Tag Optimizer for the YouTube Tag Generator.
Runs the generators, then deduplicates, ranks, validates and packages the tags.
"""

import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Dict, List, Optional

from errors import InvalidInputError
from models import (
    DEFAULT_CONSTRAINTS,
    KeywordInput,
    TagCandidate,
    TagCategory,
    TagConstraints,
)
from tag_generators import (
    generate_branded_tags,
    generate_broad_tags,
    generate_exact_match_tags,
    generate_misspelling_tags,
    generate_related_tags,
    generate_trending_tags,
)

logger = logging.getLogger(__name__)

# ===================== CONSTANTS =====================
GENERATOR_STAGES = (
    TagCategory.EXACT,
    TagCategory.BROAD,
    TagCategory.RELATED,
    TagCategory.TRENDING,
    TagCategory.BRANDED,
    TagCategory.MISSPELLINGS,
)

STOP_WORDS = {"the", "a", "an", "and", "or", "but", "is", "are", "was", "were"}

DEFAULT_MAX_TAGS = 15

TAG_TIPS = [
    "Put your most important tags first - YouTube gives them more weight",
    "Use a mix of broad and specific tags",
    "Include your channel name as a tag",
    "Use 2-3 word phrases, not just single words",
    "Check competitor videos for tag ideas",
]


def aggregate_candidates(
    concept: str,
    title: Optional[str] = None,
    keywords: Optional[KeywordInput] = None,
    channel_name: Optional[str] = None,
    niche: Optional[str] = None,
    include_misspellings: bool = True,
    year: Optional[int] = None
) -> List[TagCandidate]:
    """
    Run every generator stage in GENERATOR_STAGES order and concatenate the output.

    Branded tags need a channel name; misspellings can be switched off.
    """
    keywords = keywords or KeywordInput()
    year = year if year is not None else datetime.now(timezone.utc).year

    stages = {
        TagCategory.EXACT: lambda: generate_exact_match_tags(
            concept, title, keywords.primary_keywords
        ),
        TagCategory.BROAD: lambda: generate_broad_tags(concept, niche),
        TagCategory.RELATED: lambda: generate_related_tags(
            keywords.secondary_keywords, keywords.long_tail_keywords
        ),
        TagCategory.TRENDING: lambda: generate_trending_tags(concept, year),
        TagCategory.BRANDED: lambda: (
            generate_branded_tags(channel_name, concept) if channel_name else []
        ),
        TagCategory.MISSPELLINGS: lambda: (
            generate_misspelling_tags(concept) if include_misspellings else []
        ),
    }

    all_tags = []
    for stage in GENERATOR_STAGES:
        all_tags.extend(stages[stage]())
    return all_tags


def normalize_tag(tag: str) -> str:
    """Lower-cased, trimmed form of a tag. Used as the duplicate key."""
    return tag.lower().strip()


def deduplicate_and_filter(
    candidates: List[TagCandidate],
    constraints: TagConstraints = DEFAULT_CONSTRAINTS
) -> List[TagCandidate]:
    """
    Drop duplicates, out-of-range lengths and stop words.

    The first occurrence of a tag wins, even over a later one with a higher
    priority. Survivors carry the normalized tag.
    """
    seen = set()
    unique_tags = []

    for candidate in candidates:
        normalized = normalize_tag(candidate.tag)

        if normalized in seen:
            continue
        seen.add(normalized)

        if not constraints.optimal_min_length <= len(normalized) <= constraints.optimal_max_length:
            continue
        if normalized in STOP_WORDS:
            continue

        if normalized != candidate.tag:
            candidate = candidate.model_copy(update={"tag": normalized})
        unique_tags.append(candidate)

    return unique_tags


def rank_and_select(candidates: List[TagCandidate], max_tags: int = DEFAULT_MAX_TAGS) -> List[TagCandidate]:
    """Sort by priority (highest first, stable) and keep the top max_tags."""
    ranked = sorted(candidates, key=lambda t: t.priority, reverse=True)
    return ranked[:max(max_tags, 0)]


def count_by_category(tags: List[TagCandidate]) -> Dict[str, int]:
    """Count tags per category, in order of first appearance."""
    return dict(Counter(t.category for t in tags))


def validate_tags(tags: List[TagCandidate], constraints: TagConstraints = DEFAULT_CONSTRAINTS) -> Dict:
    """
    Check selected tags against YouTube's limits.

    Only errors make the result invalid; warnings are advisory.

    Returns:
        Dict with valid flag, issues and character budget
    """
    issues = []
    total_chars = sum(len(t.tag) for t in tags)

    if len(tags) < constraints.recommended_min_tags:
        issues.append({
            "type": "warning",
            "message": (
                f"Only {len(tags)} tags - consider adding more "
                f"(recommended: {constraints.recommended_min_tags}-{constraints.recommended_max_tags})"
            )
        })

    if total_chars > constraints.max_total_characters:
        issues.append({
            "type": "error",
            "message": (
                f"Total tag characters ({total_chars}) exceeds YouTube limit "
                f"({constraints.max_total_characters})"
            )
        })

    long_tags = [t for t in tags if len(t.tag) > constraints.optimal_max_length]
    if long_tags:
        issues.append({
            "type": "warning",
            "message": f"{len(long_tags)} tag(s) are longer than {constraints.optimal_max_length} characters"
        })

    return {
        "valid": not any(issue["type"] == "error" for issue in issues),
        "issues": issues,
        "characterCount": total_chars,
        "characterLimit": constraints.max_total_characters,
        "charactersRemaining": constraints.max_total_characters - total_chars
    }


def generate_recommendations(tags: List[TagCandidate], validation: Dict) -> List[str]:
    """Generate actionable recommendations for the selected tags."""
    recommendations = []

    if not validation["valid"]:
        recommendations.append("Fix validation errors before uploading")

    categories = count_by_category(tags)

    if categories.get(TagCategory.EXACT.value, 0) < 3:
        recommendations.append("Add more exact-match tags for your main keywords")

    if not categories.get(TagCategory.TRENDING.value):
        recommendations.append("Include year-based tags for better recency signals")

    if not categories.get(TagCategory.BRANDED.value):
        recommendations.append("Add your channel name as a tag for brand association")

    if validation["charactersRemaining"] > 100:
        recommendations.append(
            f"You have {validation['charactersRemaining']} characters remaining - consider adding more tags"
        )

    if not recommendations:
        recommendations.append("Tags look well-optimized!")

    return recommendations


def _average_length(total_chars: int, count: int) -> int:
    # Rounds half up
    if count == 0:
        return 0
    return int(total_chars / count + 0.5)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC timestamp with milliseconds, e.g. 2025-01-01T12:00:00.000Z."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_result(
    concept: str,
    title: Optional[str],
    selected: List[TagCandidate],
    validation: Dict,
    generated_at: datetime
) -> Dict:
    """Package the selected tags into the generateTags response."""
    tag_list = [t.tag for t in selected]
    total_chars = sum(len(tag) for tag in tag_list)

    return {
        "concept": concept,
        "title": title or "Not specified",
        "generatedAt": format_timestamp(generated_at),
        "tags": [t.model_dump() for t in selected],
        "tagList": tag_list,
        "copyPasteFormat": ", ".join(tag_list),
        "statistics": {
            "totalTags": len(selected),
            "totalCharacters": total_chars,
            "averageTagLength": _average_length(total_chars, len(selected)),
            "byCategory": count_by_category(selected)
        },
        "validation": validation,
        "recommendations": generate_recommendations(selected, validation),
        "tips": list(TAG_TIPS)
    }


def generate_tags(
    concept: Optional[str],
    title: Optional[str] = None,
    keywords: Optional[KeywordInput] = None,
    channel_name: Optional[str] = None,
    niche: Optional[str] = None,
    max_tags: int = DEFAULT_MAX_TAGS,
    include_misspellings: bool = True,
    now: Optional[datetime] = None,
    constraints: TagConstraints = DEFAULT_CONSTRAINTS
) -> Dict:
    """
    Generate optimized YouTube tags for a video.

    Args:
        concept: The video concept/topic (required)
        title: The video title
        keywords: Analyzed keyword lists (primary, secondary, long-tail)
        channel_name: Channel name for branded tags
        niche: Content niche
        max_tags: Maximum number of tags to return
        include_misspellings: Whether to add common misspellings of the concept
        now: Time of generation; drives the year in trending tags
        constraints: YouTube tag limits

    Returns:
        Dict with ranked tags, statistics, validation and recommendations

    Raises:
        InvalidInputError: If the concept is missing or empty
    """
    if not concept:
        raise InvalidInputError("Concept is required")

    now = now or datetime.now(timezone.utc)
    logger.info(f'Generating tags for: "{concept}"')

    all_tags = aggregate_candidates(
        concept,
        title=title,
        keywords=keywords,
        channel_name=channel_name,
        niche=niche,
        include_misspellings=include_misspellings,
        year=now.year
    )
    unique_tags = deduplicate_and_filter(all_tags, constraints)
    selected = rank_and_select(unique_tags, max_tags)
    validation = validate_tags(selected, constraints)

    logger.debug(
        f"{len(all_tags)} candidates, {len(unique_tags)} after filtering, {len(selected)} selected"
    )

    return build_result(concept, title, selected, validation, now)
