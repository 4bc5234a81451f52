# backend/app/core/constants.py
"""
Application-wide constants for the SkillBridge platform.
"""

# Brand
BRAND_NAME = "SkillBridge"

# API
API_TITLE = f"{BRAND_NAME} API"
API_DESCRIPTION = "Skill-tutoring marketplace: courses, bookings, enrollments, payments and reviews"
API_VERSION = "1.0.0"

# Tutor profile defaults used when a profile is created implicitly
DEFAULT_TUTOR_HOURLY_RATE = 25.0
DEFAULT_TUTOR_AVAILABILITY = "Flexible - All days"
DEFAULT_TUTOR_SESSION_DURATION = "1 hour"
DEFAULT_TUTOR_LANGUAGE = "English"
DEFAULT_TUTOR_TIMEZONE = "UTC-08:00 Pacific Time"
DEFAULT_TUTOR_RESPONSE_TIME = "Within 24 hours"
MAX_LISTED_SPECIALTIES = 5

PLACEHOLDER_IMAGE = "/placeholder.svg"
UNCATEGORIZED_LABEL = "Other"

# Bookings
DEFAULT_SESSION_DURATION_MIN = 60

# Reviews
MIN_RATING = 1
MAX_RATING = 5
DEFAULT_REVIEW_REQUEST_MESSAGE = "Please share your feedback about the course!"

# Courses
COURSE_PAGE_DEFAULT = 1
COURSE_LIMIT_DEFAULT = 10
COURSE_LIMIT_MAX = 100
TIME_OF_DAY_PATTERN = r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$"
HTTP_URL_PATTERN = r"^https?://.+"
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

# Session calculation
SESSION_LOOKAHEAD_DAYS = 14

# Zoom
ZOOM_DEFAULT_TOPIC = "My API Meeting"
ZOOM_DEFAULT_DURATION_MIN = 30
ZOOM_MEETING_TYPE_INSTANT = 1
ZOOM_MEETING_TYPE_SCHEDULED = 2
