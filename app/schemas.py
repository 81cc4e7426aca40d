"""Request and response models for the diagnostics API"""
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, model_validator

from environment.tags import EnvironmentTag, GroupTag, Mode, ModeTag, ProfileTag


class TagModel(BaseModel):
    """A single environment tag as sent over the wire"""
    kind: Literal["mode", "profile", "group"]
    value: str = Field(..., min_length=1)
    unless: bool = False

    @model_validator(mode="after")
    def check_mode_value(self):
        if self.kind == "mode":
            Mode.parse(self.value)
        return self

    def to_tag(self) -> EnvironmentTag:
        if self.kind == "mode":
            return ModeTag(Mode.parse(self.value), unless=self.unless)
        if self.kind == "profile":
            return ProfileTag(self.value, unless=self.unless)
        return GroupTag(self.value, unless=self.unless)


class MatchRequest(BaseModel):
    tags: List[TagModel] = Field(default_factory=list)


class TagResult(BaseModel):
    kind: str
    value: str
    unless: bool
    matches: bool


class MatchResponse(BaseModel):
    matches: bool
    results: List[TagResult]


class EnvironmentResponse(BaseModel):
    mode: str
    profile: Optional[str]
    node_group: Optional[str]
    process_id: str
    process_id_strategy: Optional[str]
