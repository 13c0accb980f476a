"""
tests/test_catalog.py - Tests for core/catalog.py

Fixed action profiles and the parsing of external action input.
"""

import pytest

from core.catalog import ActionKind, PROFILES, BUTTON_ORDER, profile_for, parse_action


class TestProfiles:
    """The four action profiles are fixed and read-only."""

    def test_every_kind_has_a_profile(self):
        """Each ActionKind maps to exactly one profile."""
        assert set(PROFILES) == set(ActionKind)

    def test_positive_profile_values(self):
        """POSITIVE: wide, fast, short-lived blue ripple."""
        p = profile_for(ActionKind.POSITIVE)
        assert p.max_radius == 400
        assert p.base_amplitude == 1.0
        assert p.damping == 0.95
        assert p.speed == 3.5
        assert p.lifespan_ms == 3000
        assert p.tint == (100, 200, 255, 180)
        assert p.activity_weight == 0.15

    def test_activity_weights(self):
        """Weights drive the activity meter."""
        weights = {k: profile_for(k).activity_weight for k in ActionKind}
        assert weights == {
            ActionKind.POSITIVE: 0.15,
            ActionKind.NEGATIVE: 0.18,
            ActionKind.NOISE_COMMENT: 0.20,
            ActionKind.SILENCE_COMMENT: 0.12,
        }

    def test_lifespans(self):
        """Lifespans in milliseconds."""
        assert profile_for(ActionKind.NEGATIVE).lifespan_ms == 4000
        assert profile_for(ActionKind.NOISE_COMMENT).lifespan_ms == 2500
        assert profile_for(ActionKind.SILENCE_COMMENT).lifespan_ms == 3500

    def test_profiles_mapping_is_read_only(self):
        """The profile table cannot be modified at runtime."""
        with pytest.raises(TypeError):
            PROFILES[ActionKind.POSITIVE] = None

    def test_profile_is_immutable(self):
        """Profile fields cannot be reassigned."""
        with pytest.raises(AttributeError):
            profile_for(ActionKind.POSITIVE).speed = 10

    def test_profile_for_rejects_unknown(self):
        """A value that is not an ActionKind is rejected."""
        with pytest.raises(ValueError):
            profile_for("POSITIVE")
        with pytest.raises(ValueError):
            profile_for(None)

    def test_button_order(self):
        """Buttons go Happy, Sad, Noise, Silence."""
        labels = [profile_for(k).label for k in BUTTON_ORDER]
        assert labels == ["Happy", "Sad", "Noise", "Silence"]


class TestParseAction:
    """parse_action turns external input into an ActionKind."""

    def test_enum_passes_through(self):
        assert parse_action(ActionKind.NEGATIVE) is ActionKind.NEGATIVE

    def test_name_case_insensitive(self):
        assert parse_action("noise_comment") is ActionKind.NOISE_COMMENT
        assert parse_action(" POSITIVE ") is ActionKind.POSITIVE

    def test_label(self):
        assert parse_action("silence") is ActionKind.SILENCE_COMMENT
        assert parse_action("Happy") is ActionKind.POSITIVE

    def test_button_number(self):
        assert parse_action(1) is ActionKind.POSITIVE
        assert parse_action("4") is ActionKind.SILENCE_COMMENT

    def test_rejects_unknown(self):
        for value in ("bogus", "", 0, 5, "9", None, 2.0, True):
            with pytest.raises(ValueError):
                parse_action(value)
