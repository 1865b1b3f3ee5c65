"""
Application constants for the chat moderation service.

Centralizes limits, timeouts and table names used across the application.
"""

# Chat messages
MESSAGE_MAX_LENGTH = 1000
MAX_BATCH_SIZE = 50

# External classifier (OpenAI moderation endpoint)
DEFAULT_MODERATION_API_URL = "https://api.openai.com/v1/moderations"
DEFAULT_MODERATION_MODEL = "omni-moderation-latest"
CLASSIFIER_TIMEOUT_SECONDS = 5.0  # Single attempt, no retry

# Rule engine
MAX_PATTERN_GAP = 80  # Max characters between phrase fragments in a rule

# Rate limits (per client)
CHECK_RATE_LIMIT = "60/minute"
BATCH_RATE_LIMIT = "10/minute"

# Audit log
AUDIT_LOG_TABLE = "moderation_logs"
