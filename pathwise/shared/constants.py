"""Application-wide constants.

This module centralizes magic numbers used by the onboarding wizard.
Values that need to be configurable at runtime should go in config.py
instead.
"""

# ===================
# Wizard Shape
# ===================

# Steps 1-4 collect data, step 5 is the summary
TOTAL_ONBOARDING_STEPS = 5
FIRST_STEP = 1
SUMMARY_STEP = 5


# ===================
# Current Role
# ===================

# Free-text role description when "other" is selected
MIN_CUSTOM_ROLE_LENGTH = 2
MAX_CUSTOM_ROLE_LENGTH = 100


# ===================
# Weekly Hours
# ===================

WEEKLY_HOURS_MIN = 5
WEEKLY_HOURS_MAX = 20
WEEKLY_HOURS_DEFAULT = 10
WEEKLY_HOURS_STEP = 1

# Range highlighted as "recommended" in the time step
WEEKLY_HOURS_RECOMMENDED_MIN = 10
WEEKLY_HOURS_RECOMMENDED_MAX = 15


# ===================
# Completion Estimate
# ===================

# Approximate hours saved for each prerequisite skill the user skips
ASSUMED_HOURS_PER_SKILL = 10

# Adjusted path length never drops below this many hours
MIN_ADJUSTED_TOTAL_HOURS = 50

# Durations of this many weeks or more are shown in months
WEEKS_DISPLAY_THRESHOLD = 8
WEEKS_PER_MONTH = 4


# ===================
# Auto-save
# ===================

DEFAULT_AUTOSAVE_DEBOUNCE_MS = 500


# ===================
# Display Text
# ===================

NOT_SELECTED_TEXT = "Not selected"
UNABLE_TO_CALCULATE_TEXT = "Unable to calculate"
NO_SKILLS_SKIPPED_TEXT = "None selected (all content included)"
EMPTY_DURATION_TEXT = "—"
