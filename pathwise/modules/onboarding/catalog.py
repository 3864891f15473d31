"""Static role and skill metadata shown during onboarding."""

from dataclasses import dataclass
from enum import Enum
from typing import Literal


class CurrentRole(str, Enum):
    """Roles a user can select as their current position."""

    BACKEND_DEVELOPER = "backend_developer"
    DEVOPS_ENGINEER = "devops_engineer"
    DATA_ANALYST = "data_analyst"
    QA_ENGINEER = "qa_engineer"
    IT_PROFESSIONAL = "it_professional"
    OTHER = "other"


class TargetRole(str, Enum):
    """Career roles a learning path can lead to."""

    ML_ENGINEER = "ml_engineer"
    DATA_SCIENTIST = "data_scientist"
    MLOPS_ENGINEER = "mlops_engineer"
    AI_ENGINEER = "ai_engineer"


SkillCategory = Literal["programming", "math", "tools"]


@dataclass(frozen=True)
class TargetRoleMetadata:
    """Path length and outcomes for a target role."""

    estimated_hours: int
    typical_outcomes: tuple[str, ...]
    is_available: bool


@dataclass(frozen=True)
class PrerequisiteSkill:
    """A foundational skill the user can mark as already known."""

    id: str
    name: str
    slug: str
    description: str
    category: SkillCategory


CURRENT_ROLE_NAMES: dict[CurrentRole, str] = {
    CurrentRole.BACKEND_DEVELOPER: "Backend Developer",
    CurrentRole.DEVOPS_ENGINEER: "DevOps Engineer",
    CurrentRole.DATA_ANALYST: "Data Analyst",
    CurrentRole.QA_ENGINEER: "QA Engineer",
    CurrentRole.IT_PROFESSIONAL: "IT Professional",
    CurrentRole.OTHER: "Other",
}

CURRENT_ROLE_DESCRIPTIONS: dict[CurrentRole, str] = {
    CurrentRole.BACKEND_DEVELOPER: "Building server-side applications and APIs",
    CurrentRole.DEVOPS_ENGINEER: "Managing infrastructure and deployment pipelines",
    CurrentRole.DATA_ANALYST: "Analyzing data and creating insights",
    CurrentRole.QA_ENGINEER: "Ensuring software quality through testing",
    CurrentRole.IT_PROFESSIONAL: "Managing IT systems and infrastructure",
    CurrentRole.OTHER: "A different technical role",
}

TARGET_ROLE_NAMES: dict[TargetRole, str] = {
    TargetRole.ML_ENGINEER: "ML Engineer",
    TargetRole.DATA_SCIENTIST: "Data Scientist",
    TargetRole.MLOPS_ENGINEER: "MLOps Engineer",
    TargetRole.AI_ENGINEER: "AI Engineer",
}

TARGET_ROLE_DESCRIPTIONS: dict[TargetRole, str] = {
    TargetRole.ML_ENGINEER: "Design and deploy machine learning systems at scale",
    TargetRole.DATA_SCIENTIST: "Analyze data and build predictive models",
    TargetRole.MLOPS_ENGINEER: "Operationalize ML models and manage ML infrastructure",
    TargetRole.AI_ENGINEER: "Build AI-powered applications and integrate LLMs",
}

# Only the ML Engineer path is live; the others are listed as "coming soon"
TARGET_ROLE_METADATA: dict[TargetRole, TargetRoleMetadata] = {
    TargetRole.ML_ENGINEER: TargetRoleMetadata(
        estimated_hours=300,
        typical_outcomes=(
            "Design and deploy production ML systems",
            "Build end-to-end ML pipelines",
            "Optimize model performance at scale",
            "Collaborate with cross-functional teams",
        ),
        is_available=True,
    ),
    TargetRole.DATA_SCIENTIST: TargetRoleMetadata(
        estimated_hours=250,
        typical_outcomes=(
            "Analyze complex datasets for insights",
            "Build predictive and statistical models",
            "Communicate findings to stakeholders",
            "Drive data-informed decisions",
        ),
        is_available=False,
    ),
    TargetRole.MLOPS_ENGINEER: TargetRoleMetadata(
        estimated_hours=280,
        typical_outcomes=(
            "Automate ML model deployment",
            "Build CI/CD pipelines for ML",
            "Monitor model performance in production",
            "Manage ML infrastructure at scale",
        ),
        is_available=False,
    ),
    TargetRole.AI_ENGINEER: TargetRoleMetadata(
        estimated_hours=320,
        typical_outcomes=(
            "Build AI-powered applications",
            "Integrate LLMs and foundation models",
            "Design conversational AI systems",
            "Implement responsible AI practices",
        ),
        is_available=False,
    ),
}

SKILL_CATEGORIES: dict[str, dict[str, str]] = {
    "programming": {
        "label": "Programming",
        "description": "Core programming and data skills",
    },
    "math": {
        "label": "Mathematics",
        "description": "Mathematical foundations for ML",
    },
    "tools": {
        "label": "Tools & Workflows",
        "description": "Development tools and practices",
    },
}

# IDs match the backend seed data, keep them stable
PREREQUISITE_SKILLS: tuple[PrerequisiteSkill, ...] = (
    PrerequisiteSkill(
        id="a1b2c3d4-e5f6-4a7b-8c9d-0e1f2a3b4c5d",
        name="Python Basics",
        slug="python-basics",
        description=(
            "Variables, data types, control flow, functions, classes, "
            "and object-oriented programming fundamentals."
        ),
        category="programming",
    ),
    PrerequisiteSkill(
        id="b2c3d4e5-f6a7-4b8c-9d0e-1f2a3b4c5d6e",
        name="Linear Algebra",
        slug="linear-algebra",
        description=(
            "Vectors, matrices, matrix operations, eigenvalues/eigenvectors, "
            "and linear transformations."
        ),
        category="math",
    ),
    PrerequisiteSkill(
        id="c3d4e5f6-a7b8-4c9d-0e1f-2a3b4c5d6e7f",
        name="Statistics & Probability",
        slug="statistics-probability",
        description=(
            "Probability distributions, hypothesis testing, confidence intervals, "
            "and statistical inference."
        ),
        category="math",
    ),
    PrerequisiteSkill(
        id="d4e5f6a7-b8c9-4d0e-1f2a-3b4c5d6e7f8a",
        name="SQL/Databases",
        slug="sql-databases",
        description=(
            "SQL queries, joins, aggregations, database design, "
            "and working with relational databases."
        ),
        category="programming",
    ),
    PrerequisiteSkill(
        id="e5f6a7b8-c9d0-4e1f-2a3b-4c5d6e7f8a9b",
        name="Git Version Control",
        slug="git-version-control",
        description=(
            "Basic git commands, branching, merging, pull requests, "
            "and collaborative development workflows."
        ),
        category="tools",
    ),
    PrerequisiteSkill(
        id="f6a7b8c9-d0e1-4f2a-3b4c-5d6e7f8a9b0c",
        name="Data Manipulation (Pandas/NumPy)",
        slug="data-manipulation",
        description=(
            "DataFrames, data cleaning, transformations, array operations, "
            "and data analysis with Python libraries."
        ),
        category="programming",
    ),
    PrerequisiteSkill(
        id="a7b8c9d0-e1f2-4a3b-4c5d-6e7f8a9b0c1d",
        name="Basic Calculus",
        slug="basic-calculus",
        description=(
            "Derivatives, gradients, partial derivatives, chain rule, "
            "and optimization basics for understanding backpropagation."
        ),
        category="math",
    ),
)

_SKILLS_BY_ID = {skill.id: skill for skill in PREREQUISITE_SKILLS}
_SKILLS_BY_SLUG = {skill.slug: skill for skill in PREREQUISITE_SKILLS}


def is_target_role_available(role: TargetRole) -> bool:
    """Check whether a target role can be selected."""
    metadata = TARGET_ROLE_METADATA.get(role)
    return bool(metadata and metadata.is_available)


def get_available_target_roles() -> list[TargetRole]:
    """Target roles that currently have a learning path."""
    return [role for role in TargetRole if is_target_role_available(role)]


def get_prerequisite_skill_by_id(skill_id: str) -> PrerequisiteSkill | None:
    return _SKILLS_BY_ID.get(skill_id)


def get_prerequisite_skill_by_slug(slug: str) -> PrerequisiteSkill | None:
    return _SKILLS_BY_SLUG.get(slug)


def get_skills_by_category(category: SkillCategory) -> list[PrerequisiteSkill]:
    """Skills belonging to one category, in catalog order."""
    return [skill for skill in PREREQUISITE_SKILLS if skill.category == category]


def get_all_prerequisite_skill_ids() -> list[str]:
    return [skill.id for skill in PREREQUISITE_SKILLS]


def is_valid_prerequisite_skill_id(skill_id: str) -> bool:
    return skill_id in _SKILLS_BY_ID
