"""
Tests for condition_builder.config: builder settings.
"""

import pytest

from condition_builder.config.settings import DEFAULT_SETTINGS, BuilderSettings


class TestBuilderSettings:
    def test_defaults(self):
        settings = BuilderSettings()
        assert settings.leaf_drop_operator == "AND"
        assert settings.group_id_prefix == "group"
        assert settings == DEFAULT_SETTINGS

    def test_invalid_operator(self):
        with pytest.raises(ValueError, match="leaf_drop_operator"):
            BuilderSettings(leaf_drop_operator="XOR")

    def test_empty_prefix(self):
        with pytest.raises(ValueError, match="group_id_prefix"):
            BuilderSettings(group_id_prefix="")

    def test_check_invariants_must_be_bool(self):
        with pytest.raises(TypeError, match="bool"):
            BuilderSettings(check_invariants="yes")

    def test_new_group_id(self):
        settings = BuilderSettings(group_id_prefix="grp")
        first, second = settings.new_group_id(), settings.new_group_id()
        assert first.startswith("grp-")
        assert first != second

    def test_frozen_immutability(self):
        with pytest.raises(AttributeError):
            DEFAULT_SETTINGS.leaf_drop_operator = "OR"


class TestFromEnv:
    def test_empty_environment_keeps_defaults(self):
        assert BuilderSettings.from_env({}) == BuilderSettings()

    def test_overrides(self):
        settings = BuilderSettings.from_env({
            "CONDITION_BUILDER_LEAF_DROP_OPERATOR": " or ",
            "CONDITION_BUILDER_GROUP_ID_PREFIX": "policy-group",
            "CONDITION_BUILDER_CHECK_INVARIANTS": "false",
        })
        assert settings.leaf_drop_operator == "OR"
        assert settings.group_id_prefix == "policy-group"
        assert settings.check_invariants is False

    @pytest.mark.parametrize("raw", ["1", "TRUE", "yes", "On"])
    def test_truthy_values(self, raw):
        settings = BuilderSettings.from_env({"CONDITION_BUILDER_CHECK_INVARIANTS": raw})
        assert settings.check_invariants is True

    def test_bad_boolean(self):
        with pytest.raises(ValueError, match="not a boolean"):
            BuilderSettings.from_env({"CONDITION_BUILDER_CHECK_INVARIANTS": "maybe"})

    def test_bad_operator(self):
        with pytest.raises(ValueError, match="not valid"):
            BuilderSettings.from_env({"CONDITION_BUILDER_LEAF_DROP_OPERATOR": "nand"})

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("CONDITION_BUILDER_GROUP_ID_PREFIX", "env-group")
        assert BuilderSettings.from_env().group_id_prefix == "env-group"
