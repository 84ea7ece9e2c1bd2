"""Server-wide constants."""

PROJECT_NAME = "AeroTravel Operations API"
API_V1_STR = "/api/v1"
API_VERSION = "1.0.0"
SCHEMA_VERSION = "v1"

# Role allowed to change a locked vendor price
PRICE_LOCK_ROLE = "super_admin"
USER_ROLE_HEADER = "X-User-Role"
USER_ID_HEADER = "X-User-Id"
