"""API-related constants."""

# Routing
SUPERHERO_BASE_PATH = "/api/superhero"

# HTTP Headers
CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"
LOCATION_HEADER = "Location"

# Request logging
MAX_USER_AGENT_LENGTH = 200

# Security
DEFAULT_HSTS_MAX_AGE = 31536000  # 1 year in seconds

# Error responses
CONFLICT_MESSAGE = "Cannot create the Id because it already exists."
INVALID_UPDATE_MESSAGE = "Cannot update a non-existing superhero."
