"""Fixed values of the Clarifai v2 API."""

DEFAULT_BASE_URL = "https://api.clarifai.com"
DEFAULT_API_VERSION = "v2"

# Maximum number of inputs accepted in one batch.
INPUT_LIMIT = 128

# Clarifai's public "general" recognition model.
PUBLIC_MODEL_GENERAL = "aaa03c23b3724a16a56b629203edc62c"

STATUS_SUCCESS = 10000

RETRYABLE_STATUS = {408, 409, 429, 500, 502, 503, 504}
