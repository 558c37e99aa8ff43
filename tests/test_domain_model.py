"""Unit tests for the deterministic domain model."""

from datetime import datetime, timedelta, timezone

from bandmatch.domain_model import (
    COMPLEMENTARY_SAME_ROLE,
    INSTRUMENT_ROLES,
    SKILL_LEVELS,
    activity_score,
    are_complementary,
    days_since,
    instrument_role,
    round_half_up,
    skill_level_average,
    skill_level_to_number,
)
from bandmatch.models import InstrumentSkill

NOW = datetime(2026, 1, 11, 12, 0, tzinfo=timezone.utc)


def _skill(level: str) -> InstrumentSkill:
    return InstrumentSkill(id=level, name="guitar", skill_level=level)


class TestInstrumentRoles:
    def test_roles_cover_four_kinds(self):
        assert set(INSTRUMENT_ROLES.values()) == {"rhythm", "harmony", "melody", "support"}

    def test_lookup_is_case_insensitive(self):
        assert instrument_role("Drums") == "rhythm"
        assert instrument_role("LEAD GUITAR") == "melody"

    def test_no_partial_matching(self):
        assert instrument_role("drum") is None
        assert instrument_role("bass guitar") is None

    def test_custom_table(self):
        assert instrument_role("oud", {"oud": "melody"}) == "melody"
        assert instrument_role("drums", {"oud": "melody"}) is None


class TestComplementarity:
    def test_different_roles(self):
        assert are_complementary("guitar", "drums")
        assert are_complementary("vocals", "piano")

    def test_same_role_not_listed(self):
        assert not are_complementary("guitar", "piano")
        assert not are_complementary("violin", "trumpet")

    def test_same_role_exceptions(self):
        assert are_complementary("drums", "bass")
        assert are_complementary("Keyboard", "Piano")

    def test_unknown_role(self):
        assert not are_complementary("kazoo", "drums")
        assert not are_complementary("vocals", "backing vocals")

    def test_exception_list_is_pairs(self):
        assert all(len(pair) == 2 for pair in COMPLEMENTARY_SAME_ROLE)


class TestSkillLevels:
    def test_scale(self):
        assert SKILL_LEVELS == {"beginner": 1, "intermediate": 2, "advanced": 3, "expert": 4}

    def test_unknown_levels_default_to_intermediate(self):
        assert skill_level_to_number("virtuoso") == 2

    def test_professional_counts_as_expert(self):
        profile_skill = InstrumentSkill(id="p", name="drums", skill_level="professional")
        assert skill_level_average([profile_skill]) == 4.0

    def test_average(self):
        assert skill_level_average([_skill("beginner"), _skill("expert")]) == 2.5
        assert skill_level_average([_skill("advanced")]) == 3.0

    def test_average_without_instruments(self):
        assert skill_level_average([]) == 2.0


class TestActivity:
    def test_days_are_floored(self):
        assert days_since(NOW - timedelta(hours=47), NOW) == 1
        assert days_since(NOW - timedelta(days=2), NOW) == 2

    def test_tiers(self):
        assert activity_score(NOW - timedelta(hours=5), NOW) == 100
        assert activity_score(NOW - timedelta(days=5), NOW) == 80
        assert activity_score(NOW - timedelta(days=30), NOW) == 60
        assert activity_score(NOW - timedelta(days=60), NOW) == 40
        assert activity_score(NOW - timedelta(days=200), NOW) == 20

    def test_defaults_to_current_time(self):
        recent = datetime.now(tz=timezone.utc) - timedelta(minutes=5)
        assert activity_score(recent) == 100


class TestRounding:
    def test_half_rounds_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(85.5) == 86

    def test_below_half(self):
        assert round_half_up(2.49) == 2
        assert round_half_up(-0.5) == 0
