"""Environment gating: decide which components are active in the running environment"""
from .tags import Mode, EnvironmentTag, ModeTag, ProfileTag, GroupTag, ENVIRONMENT_TAG_TYPES
from .context import RuntimeContext, EnvironmentContext, runtime_context
from .matching import EnvironmentMatcher, matches, matches_all, is_recognized_tag_type, environment_tags
from .components import ComponentDescriptor, ComponentRegistry

__all__ = [
    'Mode',
    'EnvironmentTag',
    'ModeTag',
    'ProfileTag',
    'GroupTag',
    'ENVIRONMENT_TAG_TYPES',
    'RuntimeContext',
    'EnvironmentContext',
    'runtime_context',
    'EnvironmentMatcher',
    'matches',
    'matches_all',
    'is_recognized_tag_type',
    'environment_tags',
    'ComponentDescriptor',
    'ComponentRegistry',
]
