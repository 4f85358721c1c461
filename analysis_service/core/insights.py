from datetime import date as date_type
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Theme(BaseModel):
    symbol: str = Field(description="a key symbol from the dream")
    interpretation: str = Field(default="", description="brief meaning of the symbol")


# Structured payload returned by the model (or the rule-based generator)
class Insights(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    summary: str = Field(description="2-3 sentence summary of the dream")
    themes: List[Theme] = Field(default_factory=list)
    mood_tags: List[str] = Field(default_factory=list, alias="moodTags")
    takeaway: List[str] = Field(default_factory=list, description="actionable insights")
    disclaimer: Optional[str] = None

    @field_validator("mood_tags", "takeaway", mode="before")
    @classmethod
    def wrap_single_string(cls, value):
        if isinstance(value, str):
            return [value]
        if value is None:
            return []
        return value

    @field_validator("themes", mode="before")
    @classmethod
    def default_themes(cls, value):
        return [] if value is None else value

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class DreamInput(BaseModel):
    title: str = ""
    body: str = ""
    date: Optional[date_type] = None


class AnalysisResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt_sent: str = Field(alias="promptSent")
    raw_model_response: str = Field(alias="rawModelResponse")
    insights: Insights
    model_used: str = Field(alias="modelUsed")
    fallback_used: bool = Field(default=False, alias="fallbackUsed")
