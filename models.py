"""
Data models for the YouTube Tag Generator.
Tag candidates, keyword input and the constraints YouTube puts on tags.
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TagCategory(str, Enum):
    """Category a tag was generated for. Used for statistics only."""

    EXACT = "exact"
    BROAD = "broad"
    RELATED = "related"
    TRENDING = "trending"
    BRANDED = "branded"
    MISSPELLINGS = "misspellings"


TAG_CATEGORY_DESCRIPTIONS = {
    TagCategory.EXACT.value: "Exact match keywords",
    TagCategory.BROAD.value: "Broad topic tags",
    TagCategory.RELATED.value: "Related topic tags",
    TagCategory.BRANDED.value: "Channel/brand tags",
    TagCategory.TRENDING.value: "Trending/timely tags",
    TagCategory.MISSPELLINGS.value: "Common misspellings",
}


class TagCandidate(BaseModel):
    """A single generated tag with its ranking priority."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    tag: str
    category: TagCategory
    priority: int
    reason: str


class TagConstraints(BaseModel):
    """YouTube tag limits. Built once and shared read-only."""

    model_config = ConfigDict(frozen=True)

    max_tag_length: int = 500  # per tag
    max_total_characters: int = 500  # all tags combined
    recommended_min_tags: int = 5
    recommended_max_tags: int = 15
    optimal_min_length: int = 2
    optimal_max_length: int = 30


DEFAULT_CONSTRAINTS = TagConstraints()


class KeywordEntry(BaseModel):
    """One analyzed keyword. Analyzer fields beyond `keyword` are kept as-is."""

    model_config = ConfigDict(extra="allow")

    keyword: str


class KeywordInput(BaseModel):
    """
    Ranked keyword lists from an upstream keyword analyzer.

    Accepts both the flat shape ``{"primary": [...], ...}`` and the analyzer's
    ``{"recommended": {"primary": [...], ...}}`` wrapper.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    primary: List[KeywordEntry] = Field(default_factory=list)
    secondary: List[KeywordEntry] = Field(default_factory=list)
    long_tail: List[KeywordEntry] = Field(default_factory=list, alias="longTail")

    @model_validator(mode="before")
    @classmethod
    def unwrap_recommended(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("recommended"), dict):
            return data["recommended"]
        return data

    @field_validator("primary", "secondary", "long_tail", mode="before")
    @classmethod
    def missing_list_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def primary_keywords(self) -> List[str]:
        return [kw.keyword for kw in self.primary]

    @property
    def secondary_keywords(self) -> List[str]:
        return [kw.keyword for kw in self.secondary]

    @property
    def long_tail_keywords(self) -> List[str]:
        return [kw.keyword for kw in self.long_tail]


class GenerateTagsArguments(BaseModel):
    """Arguments of the `generateTags` tool, as sent over the wire."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    concept: Optional[str] = None
    title: Optional[str] = None
    keywords: Optional[KeywordInput] = None
    channel_name: Optional[str] = Field(default=None, alias="channelName")
    niche: Optional[str] = None
    max_tags: int = Field(default=15, alias="maxTags", ge=0)
    include_misspellings: bool = Field(default=True, alias="includeMisspellings")
