"""Unit tests for the static role and skill catalog."""

from pathwise.modules.onboarding.catalog import (
    CURRENT_ROLE_DESCRIPTIONS,
    CURRENT_ROLE_NAMES,
    PREREQUISITE_SKILLS,
    TARGET_ROLE_METADATA,
    TARGET_ROLE_NAMES,
    CurrentRole,
    TargetRole,
    get_all_prerequisite_skill_ids,
    get_available_target_roles,
    get_prerequisite_skill_by_id,
    get_prerequisite_skill_by_slug,
    get_skills_by_category,
    is_target_role_available,
    is_valid_prerequisite_skill_id,
)


class TestRoles:
    """Test role tables."""

    def test_every_role_has_display_text(self):
        for role in CurrentRole:
            assert CURRENT_ROLE_NAMES[role]
            assert CURRENT_ROLE_DESCRIPTIONS[role]
        for role in TargetRole:
            assert TARGET_ROLE_NAMES[role]
            assert role in TARGET_ROLE_METADATA

    def test_wire_values(self):
        assert CurrentRole.BACKEND_DEVELOPER.value == "backend_developer"
        assert CurrentRole.OTHER.value == "other"
        assert TargetRole.ML_ENGINEER.value == "ml_engineer"

    def test_only_ml_engineer_available(self):
        assert get_available_target_roles() == [TargetRole.ML_ENGINEER]
        assert is_target_role_available(TargetRole.AI_ENGINEER) is False

    def test_estimated_hours(self):
        assert TARGET_ROLE_METADATA[TargetRole.ML_ENGINEER].estimated_hours == 300
        assert TARGET_ROLE_METADATA[TargetRole.DATA_SCIENTIST].estimated_hours == 250
        assert TARGET_ROLE_METADATA[TargetRole.MLOPS_ENGINEER].estimated_hours == 280
        assert TARGET_ROLE_METADATA[TargetRole.AI_ENGINEER].estimated_hours == 320


class TestSkills:
    """Test prerequisite skill lookups."""

    def test_seven_unique_skills(self):
        ids = get_all_prerequisite_skill_ids()
        assert len(ids) == 7
        assert len(set(ids)) == 7
        assert len({skill.slug for skill in PREREQUISITE_SKILLS}) == 7

    def test_lookup_by_id(self):
        skill = get_prerequisite_skill_by_id("a1b2c3d4-e5f6-4a7b-8c9d-0e1f2a3b4c5d")
        assert skill is not None
        assert skill.name == "Python Basics"
        assert get_prerequisite_skill_by_id("missing") is None

    def test_lookup_by_slug(self):
        skill = get_prerequisite_skill_by_slug("basic-calculus")
        assert skill is not None
        assert skill.id == "a7b8c9d0-e1f2-4a3b-4c5d-6e7f8a9b0c1d"
        assert get_prerequisite_skill_by_slug("cooking") is None

    def test_categories(self):
        assert [s.name for s in get_skills_by_category("tools")] == ["Git Version Control"]
        assert len(get_skills_by_category("math")) == 3
        assert len(get_skills_by_category("programming")) == 3

    def test_id_validation(self):
        assert is_valid_prerequisite_skill_id(PREREQUISITE_SKILLS[0].id) is True
        assert is_valid_prerequisite_skill_id("nope") is False
