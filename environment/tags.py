"""Declarative environment tags attached to registrable components"""
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, FrozenSet, Type, Union


class Mode(Enum):
    """Runtime modes a process can run in"""
    DEV = "dev"
    TEST = "test"
    PROD = "prod"

    @classmethod
    def parse(cls, value: Union["Mode", str]) -> "Mode":
        """Parse a mode from an enum member, name or value (case-insensitive)"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for mode in cls:
                if key in (mode.value, mode.name.lower()):
                    return mode
        raise ValueError(f"Unknown mode: {value!r}")


class EnvironmentTag:
    """Base for environment tags.

    Every tag carries an ``unless`` flag which inverts it: the component is
    active in every environment except the one named by the tag.

    A component should carry at most one tag of each kind, and a ModeTag
    should not be combined with a ProfileTag or GroupTag. This is not
    enforced; every tag present is evaluated.
    """
    kind: ClassVar[str] = ""
    unless: bool


@dataclass(frozen=True)
class ModeTag(EnvironmentTag):
    """Active only in the given mode"""
    kind: ClassVar[str] = "mode"
    mode: Mode
    unless: bool = False

    @property
    def value(self) -> str:
        return self.mode.value


@dataclass(frozen=True)
class ProfileTag(EnvironmentTag):
    """Active only under the given profile"""
    kind: ClassVar[str] = "profile"
    profile: str
    unless: bool = False

    @property
    def value(self) -> str:
        return self.profile


@dataclass(frozen=True)
class GroupTag(EnvironmentTag):
    """Active only on nodes of the given node group"""
    kind: ClassVar[str] = "group"
    group: str
    unless: bool = False

    @property
    def value(self) -> str:
        return self.group


ENVIRONMENT_TAG_TYPES: FrozenSet[Type[EnvironmentTag]] = frozenset({
    ModeTag,
    ProfileTag,
    GroupTag,
})
