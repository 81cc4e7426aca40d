"""Evaluate environment tags against the runtime context"""
from typing import Any, Iterable, List, Optional
from .context import RuntimeContext, runtime_context
from .tags import ENVIRONMENT_TAG_TYPES, EnvironmentTag, GroupTag, Mode, ModeTag, ProfileTag


def _labels_equal(current: Optional[str], expected: Optional[str]) -> bool:
    if current is None or expected is None:
        return current is expected
    return current.casefold() == expected.casefold()


def _apply_unless(unless: bool, natural: bool) -> bool:
    return bool(unless) ^ natural


class EnvironmentMatcher:
    """Decides whether tagged components are admissible in a runtime context.

    All operations are pure predicates. When no context is passed, the
    process-wide context from ``runtime_context`` is used.
    """

    @staticmethod
    def _resolve(ctx: Optional[RuntimeContext]) -> RuntimeContext:
        return ctx if ctx is not None else runtime_context.get_runtime_context()

    @classmethod
    def is_recognized_tag_type(cls, t: Any) -> bool:
        """Check whether a tag class or instance is one of the environment tag kinds (or a subclass)"""
        tag_type = t if isinstance(t, type) else type(t)
        return issubclass(tag_type, tuple(ENVIRONMENT_TAG_TYPES))

    @classmethod
    def mode_matches(cls, mode: Mode, unless: bool = False,
                     ctx: Optional[RuntimeContext] = None) -> bool:
        return _apply_unless(unless, cls._resolve(ctx).mode == mode)

    @classmethod
    def profile_matches(cls, profile: str, unless: bool = False,
                        ctx: Optional[RuntimeContext] = None) -> bool:
        return _apply_unless(unless, _labels_equal(cls._resolve(ctx).profile, profile))

    @classmethod
    def group_matches(cls, group: str, unless: bool = False,
                      ctx: Optional[RuntimeContext] = None) -> bool:
        return _apply_unless(unless, _labels_equal(cls._resolve(ctx).node_group, group))

    @classmethod
    def matches(cls, tag: EnvironmentTag, ctx: Optional[RuntimeContext] = None) -> bool:
        """Check a single tag; objects that are not environment tags impose no constraint"""
        if not cls.is_recognized_tag_type(tag):
            return True
        if isinstance(tag, ModeTag):
            return cls.mode_matches(tag.mode, tag.unless, ctx)
        if isinstance(tag, ProfileTag):
            return cls.profile_matches(tag.profile, tag.unless, ctx)
        if isinstance(tag, GroupTag):
            return cls.group_matches(tag.group, tag.unless, ctx)
        return True

    @classmethod
    def matches_all(cls, tags: Iterable[Any], ctx: Optional[RuntimeContext] = None) -> bool:
        """Check that every environment tag matches; no tags means always admissible"""
        env_tags = cls.environment_tags(tags)
        if not env_tags:
            return True
        ctx = cls._resolve(ctx)
        return all(cls.matches(tag, ctx) for tag in env_tags)

    @classmethod
    def environment_tags(cls, metadata: Iterable[Any]) -> List[EnvironmentTag]:
        """Pick the environment tags out of mixed metadata, keeping their order"""
        return [item for item in metadata if cls.is_recognized_tag_type(item)]


matches = EnvironmentMatcher.matches
matches_all = EnvironmentMatcher.matches_all
is_recognized_tag_type = EnvironmentMatcher.is_recognized_tag_type
environment_tags = EnvironmentMatcher.environment_tags
