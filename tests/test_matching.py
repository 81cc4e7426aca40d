"""Tests for environment tag matching"""
import pytest

from environment.context import RuntimeContext, runtime_context
from environment.matching import EnvironmentMatcher, matches, matches_all, is_recognized_tag_type, environment_tags
from environment.tags import GroupTag, Mode, ModeTag, ProfileTag


BLUE_EAST = RuntimeContext(mode=Mode.PROD, profile="blue", node_group="east")
EMPTY = RuntimeContext(mode=Mode.DEV)


class TestSingleTag:
    """Test matching of individual tags"""

    @pytest.mark.parametrize("tag, expected", [
        (ModeTag(Mode.PROD), True),
        (ModeTag(Mode.DEV), False),
        (ProfileTag("blue"), True),
        (ProfileTag("green"), False),
        (GroupTag("east"), True),
        (GroupTag("west"), False),
    ])
    def test_natural_match(self, tag, expected):
        """Test tags without unless match exactly their own value"""
        assert matches(tag, BLUE_EAST) is expected

    @pytest.mark.parametrize("tag", [
        ModeTag(Mode.PROD),
        ModeTag(Mode.TEST),
        ProfileTag("blue"),
        ProfileTag("green"),
        GroupTag("east"),
        GroupTag("west"),
    ])
    def test_unless_negates(self, tag):
        """Test unless inverts the natural match for every tag kind"""
        inverted = type(tag)(tag.mode if isinstance(tag, ModeTag) else tag.value, unless=True)
        assert matches(inverted, BLUE_EAST) is (not matches(tag, BLUE_EAST))

    def test_profile_is_case_insensitive(self):
        """Test profile comparison ignores case"""
        ctx = RuntimeContext(mode=Mode.PROD, profile="PROD")
        assert matches(ProfileTag("Prod"), ctx) is True
        assert matches(ProfileTag("prod", unless=True), ctx) is False

    def test_group_is_case_insensitive(self):
        """Test node group comparison ignores case"""
        assert matches(GroupTag("EAST"), BLUE_EAST) is True
        assert matches(GroupTag("east", unless=True), BLUE_EAST) is False

    def test_mode_is_exact(self):
        """Test a DEV context does not match a PROD tag"""
        ctx = RuntimeContext(mode=Mode.DEV, profile="prod", node_group="prod")
        assert matches(ModeTag(Mode.PROD), ctx) is False
        assert matches(ModeTag(Mode.PROD, unless=True), ctx) is True

    def test_missing_labels_never_match(self):
        """Test a context without profile or group matches no named tag"""
        assert matches(ProfileTag("blue"), EMPTY) is False
        assert matches(GroupTag("east"), EMPTY) is False
        assert matches(ProfileTag("blue", unless=True), EMPTY) is True
        assert matches(GroupTag("", unless=False), EMPTY) is False

    def test_unrecognized_object_is_no_constraint(self):
        """Test objects outside the tag kinds are ignored"""
        assert matches("not a tag", BLUE_EAST) is True


class TestMatchesAll:
    """Test evaluation of tag sequences"""

    def test_empty_sequence_matches(self):
        """Test a component without tags is always admissible"""
        assert matches_all([], BLUE_EAST) is True
        assert matches_all([], EMPTY) is True

    def test_all_matching(self):
        """Test every matching tag admits the component"""
        assert matches_all([ProfileTag("BLUE"), GroupTag("east")], BLUE_EAST) is True

    def test_one_failing_tag_rejects(self):
        """Test AND semantics with one matching and one failing tag"""
        tags = [ModeTag(Mode.PROD), GroupTag("west")]
        assert matches(tags[0], BLUE_EAST) is True
        assert matches(tags[1], BLUE_EAST) is False
        assert matches_all(tags, BLUE_EAST) is False

    def test_mode_combined_with_profile_is_evaluated(self):
        """Test the combination of mode and profile tags is not rejected"""
        assert matches_all([ModeTag(Mode.PROD), ProfileTag("blue")], BLUE_EAST) is True
        assert matches_all([ModeTag(Mode.PROD), ProfileTag("green")], BLUE_EAST) is False

    def test_unrecognized_metadata_ignored(self):
        """Test unrelated metadata mixed with tags does not affect the result"""
        metadata = [object(), "deprecated", GroupTag("east"), {"kind": "group"}]
        assert matches_all(metadata, BLUE_EAST) is True

    def test_accepts_generator(self):
        """Test any iterable of tags is accepted"""
        assert matches_all((t for t in [GroupTag("east"), ProfileTag("blue")]), BLUE_EAST) is True

    def test_uses_process_context_by_default(self):
        """Test the global runtime context is used when none is passed"""
        runtime_context.override(RuntimeContext(mode=Mode.TEST, profile="qa"))
        try:
            assert matches_all([ModeTag(Mode.TEST), ProfileTag("QA")]) is True
            assert EnvironmentMatcher.mode_matches(Mode.PROD) is False
            assert EnvironmentMatcher.profile_matches("qa", unless=True) is False
            assert EnvironmentMatcher.group_matches("east", unless=True) is True
        finally:
            runtime_context.reset()


class TestScenario:
    """Test the blue/east production scenario end to end"""

    def test_scenario(self):
        """Test group tags and a mixed tag list against a PROD/blue/east context"""
        assert matches(GroupTag("EAST", unless=False), BLUE_EAST) is True
        assert matches(GroupTag("east", unless=True), BLUE_EAST) is False
        assert matches_all([ModeTag(Mode.PROD, False), GroupTag("west", False)], BLUE_EAST) is False


class TestTagRecognition:
    """Test recognition of environment tag kinds"""

    def test_recognizes_classes_and_instances(self):
        """Test both tag classes and tag instances are recognized"""
        assert is_recognized_tag_type(ModeTag) is True
        assert is_recognized_tag_type(ProfileTag) is True
        assert is_recognized_tag_type(GroupTag) is True
        assert is_recognized_tag_type(GroupTag("east")) is True

    def test_rejects_other_types(self):
        """Test unrelated types are not recognized"""
        assert is_recognized_tag_type(str) is False
        assert is_recognized_tag_type(object()) is False
        assert is_recognized_tag_type(Mode.DEV) is False

    def test_subclassed_tags_are_recognized(self):
        """Test a subclass of a tag kind is evaluated the same way by matches and matches_all"""
        class StrictProfileTag(ProfileTag):
            pass

        tag = StrictProfileTag("green")

        assert is_recognized_tag_type(StrictProfileTag) is True
        assert is_recognized_tag_type(tag) is True
        assert matches(tag, BLUE_EAST) is False
        assert matches_all([tag], BLUE_EAST) is False
        assert matches_all([StrictProfileTag("BLUE")], BLUE_EAST) is True

    def test_environment_tags_keeps_order(self):
        """Test environment tags are extracted from mixed metadata in order"""
        group, mode = GroupTag("east"), ModeTag(Mode.DEV)
        assert environment_tags([group, "x", 42, mode]) == [group, mode]

    def test_tags_are_hashable_values(self):
        """Test tags compare and hash by value"""
        assert ProfileTag("blue") == ProfileTag("blue")
        assert len({GroupTag("east"), GroupTag("east"), GroupTag("east", unless=True)}) == 2
