"""Constants shared by the request pipeline and its clients."""

# HTTP status codes
HTTP_STATUS_OK = 200
HTTP_STATUS_BAD_REQUEST = 400
HTTP_STATUS_UNAUTHORIZED = 401
HTTP_STATUS_SERVER_ERROR_MIN = 500

# Status reported when the transport produced no response at all
NO_RESPONSE_STATUS = 500

# Default messages
DEFAULT_SUCCESS_MESSAGE = "Request completed successfully"
DEFAULT_ERROR_MESSAGE = "An error occurred during the request"

# Default timeouts (seconds)
DEFAULT_REST_TIMEOUT_SECONDS = 10.0
DEFAULT_GRAPHQL_TIMEOUT_SECONDS = 30.0

DEFAULT_HEADERS = {"Content-Type": "application/json"}
