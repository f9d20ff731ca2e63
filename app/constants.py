"""
Application-wide constants.
Centralizes field limits, enumerations and messages used throughout the codebase.
"""

import re

# =============================================================================
# Feedback Constants
# =============================================================================

FEEDBACK_STATUSES = ("pending", "read", "responded")
DEFAULT_FEEDBACK_STATUS = "pending"

NAME_MAX_LENGTH = 100
MESSAGE_MAX_LENGTH = 1000
EMAIL_MAX_LENGTH = 254

# ASCII word runs joined by a required separator
EMAIL_PATTERN = re.compile(r"^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*(?:\.\w{2,3})+$", re.ASCII)


# =============================================================================
# Chat Session Constants
# =============================================================================

RATING_MIN = 1
RATING_MAX = 5


# =============================================================================
# Pagination Constants
# =============================================================================

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


# =============================================================================
# Response Messages
# =============================================================================

MSG_FEEDBACK_MISSING_FIELDS = "Please provide name, email, and message"
MSG_FEEDBACK_SUBMITTED = "Feedback submitted successfully! We will get back to you soon."
MSG_FEEDBACK_NOT_FOUND = "Feedback not found"
MSG_FEEDBACK_STATUS_UPDATED = "Feedback status updated successfully"
MSG_FEEDBACK_DELETED = "Feedback deleted successfully"
MSG_INVALID_STATUS = "Invalid status. Must be: pending, read, or responded"
MSG_CHAT_INVALID_MESSAGES = "Invalid input: messages array is required"
MSG_CHAT_SAVED = "Chat session and feedback saved successfully"
MSG_ROUTE_NOT_FOUND = "Route not found"
MSG_ORIGIN_REJECTED = "Not allowed by CORS"


# =============================================================================
# Export Constants
# =============================================================================

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"
EXPORT_JSON_INDENT = 2
