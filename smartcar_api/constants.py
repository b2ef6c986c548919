"""Constants for the Smartcar API client library."""

VERSION = "1.0.0"

# Hosts
CONNECT_BASE_URL = "https://connect.smartcar.com"
AUTH_BASE_URL = "https://auth.smartcar.com"
API_BASE_URL = "https://api.smartcar.com"

CONNECT_PATH = "/oauth/authorize"
TOKEN_PATH = "/oauth/token"

DEFAULT_API_VERSION = "1.0"

# Applied to every request; there is no retry policy
REQUEST_TIMEOUT = 300

# The token endpoint does not report a refresh token lifetime
REFRESH_TOKEN_LIFETIME_DAYS = 60

TOKEN_EXPIRY_GRACE_SECONDS = 10

DEFAULT_COUNTRY = "US"

# Request headers
UNIT_SYSTEM_HEADER = "SC-Unit-System"

# Response headers
DATA_AGE_HEADER = "Sc-Data-Age"
REQUEST_ID_HEADER = "Sc-Request-Id"
RESPONSE_UNIT_SYSTEM_HEADER = "Sc-Unit-System"
