"""
Tests for the configuration transitions and the Configuration/SavedBuild models.
"""
import dataclasses

import pytest

from domain.enums import ModelKey, TrimSlot
from domain.errors import InvalidKey
from domain.models import Configuration, Principal, SavedBuild
from services.configuration_service import (
    create_default,
    is_savable,
    select_color,
    select_model,
    select_trim,
    snapshot,
)


class TestCreateDefault:
    def test_default_uses_first_model_and_paint(self):
        config = create_default()

        assert config.model_key == ModelKey.SPORTS
        assert config.color_value == "#ff3b30"
        assert dict(config.trim_slots) == {}
        assert config.owner_id == ""
        assert config.record_id is None

    def test_default_trims_read_baselines(self):
        config = create_default()

        assert config.trim(TrimSlot.WHEEL) == "Classic"
        assert config.trim("spoiler") == "None"
        assert config.trim("interior") == "Black"
        assert config.trim("roof_rack") == "None"


class TestSelectColor:
    def test_select_color_changes_only_color(self):
        default = create_default()
        result = select_color(default, "#32D74B")

        assert result.color_value == "#32D74B"
        assert result.model_key == default.model_key
        assert result.trim_slots == default.trim_slots

    def test_select_color_does_not_mutate_input(self):
        default = create_default()
        select_color(default, "#32D74B")
        assert default.color_value == "#ff3b30"

    def test_select_color_normalizes_case(self):
        result = select_color(create_default(), "#007aff")
        assert result.color_value == "#007AFF"

    def test_unknown_color_raises(self):
        default = create_default()
        with pytest.raises(InvalidKey):
            select_color(default, "#000001")
        assert default.color_value == "#ff3b30"


class TestSelectModel:
    @pytest.mark.parametrize("model_key", list(ModelKey))
    def test_select_model_replaces_only_model_key(self, model_key):
        config = Configuration(
            model_key=ModelKey.MUSCLE,
            color_value="#FFD60A",
            trim_slots={"wheel": "Sport", "spoiler": "Wing"},
            owner_id="owner-1",
            record_id="rec-1",
        )

        assert select_model(config, model_key) == dataclasses.replace(config, model_key=model_key)
        assert select_model(config, model_key.value) == dataclasses.replace(config, model_key=model_key)

    def test_select_model_accepts_enum(self):
        result = select_model(create_default(), ModelKey.MUSCLE)
        assert result.model_key == ModelKey.MUSCLE

    def test_unknown_model_raises(self):
        default = create_default()
        with pytest.raises(InvalidKey):
            select_model(default, "hovercraft")
        assert default.model_key == ModelKey.SPORTS


class TestSelectTrim:
    def test_select_trim_sets_and_overwrites(self):
        config = select_trim(create_default(), TrimSlot.SPOILER, "Lip")
        config = select_trim(config, "spoiler", "Wing")

        assert dict(config.trim_slots) == {"spoiler": "Wing"}
        assert config.trim(TrimSlot.SPOILER) == "Wing"

    def test_select_trim_leaves_other_slots(self):
        config = select_trim(create_default(), "wheel", "Turbine")
        config = select_trim(config, "interior", "Tan")

        assert dict(config.trim_slots) == {"wheel": "Turbine", "interior": "Tan"}

    def test_unknown_slot_names_are_allowed(self):
        config = select_trim(create_default(), "roof_rack", "Carbon")
        assert config.trim("roof_rack") == "Carbon"

    def test_empty_slot_name_raises(self):
        default = create_default()
        with pytest.raises(InvalidKey):
            select_trim(default, "", "Sport")
        with pytest.raises(InvalidKey):
            select_trim(default, "   ", "Sport")

    def test_trim_slots_are_read_only(self):
        config = select_trim(create_default(), "wheel", "Sport")
        with pytest.raises(TypeError):
            config.trim_slots["wheel"] = "Classic"


class TestSavability:
    def test_not_savable_without_principal(self):
        assert is_savable(create_default(), None) is False

    def test_savable_with_principal(self):
        assert is_savable(create_default(), Principal("p1")) is True


class TestSnapshot:
    def test_snapshot_is_equal_but_detached(self):
        config = select_trim(create_default(), "wheel", "Sport")
        copy = snapshot(config)

        assert copy == config
        assert copy is not config
        assert copy.trim_slots is not config.trim_slots


class TestDocuments:
    def test_to_document_shape(self):
        config = select_trim(select_color(create_default(), "#1a1a1a"), "wheel", "Sport")

        assert config.to_document("owner-1") == {
            "modelKey": "sports",
            "colorValue": "#1a1a1a",
            "trimSlots": {"wheel": "Sport"},
            "ownerId": "owner-1",
        }

    def test_saved_build_from_document(self):
        build = SavedBuild.from_document(
            "rec-1",
            {"modelKey": "muscle", "colorValue": "#007aff", "trimSlots": {"interior": "Red"}, "ownerId": "o"},
        )

        assert build.record_id == "rec-1"
        assert build.model_key == ModelKey.MUSCLE
        assert build.color_value == "#007AFF"
        assert build.trim("interior") == "Red"

    def test_saved_build_missing_trims_reads_baselines(self):
        build = SavedBuild.from_document("rec-2", {"modelKey": "sports", "colorValue": "#ff3b30", "ownerId": "o"})
        assert dict(build.trim_slots) == {}
        assert build.trim("wheel") == "Classic"

    def test_saved_build_unknown_model_raises(self):
        with pytest.raises(InvalidKey):
            SavedBuild.from_document("rec-3", {"modelKey": "tank", "colorValue": "#ff3b30", "ownerId": "o"})

    def test_saved_build_requires_owner(self):
        with pytest.raises(ValueError):
            SavedBuild.from_document("rec-4", {"modelKey": "sports", "colorValue": "#ff3b30"})


class TestConfigurationInvariants:
    def test_unknown_model_cannot_be_constructed(self):
        with pytest.raises(InvalidKey):
            Configuration("hovercraft", "#ff3b30")

    def test_unknown_color_cannot_be_constructed(self):
        with pytest.raises(InvalidKey):
            Configuration("sports", "#000000")

    def test_string_keys_are_normalized(self):
        config = Configuration("muscle", "#007aff")

        assert config.model_key is ModelKey.MUSCLE
        assert config.color_value == "#007AFF"
        assert config.to_document("o")["modelKey"] == "muscle"
