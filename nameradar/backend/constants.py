APP_NAME = "NameRadar"
APP_VERSION = "1.0.0"
DEFAULT_CORS_ALLOW_ORIGINS = [
	"http://localhost",
	"http://127.0.0.1",
	"http://localhost:3000",
]
DEFAULT_TRUSTED_HOSTS = [
	"127.0.0.1",
	"localhost",
	"testserver",
]

USER_INPUT_FIELD = "userInput"
CANDIDATES_FIELD = "brandNames"
CALLER_IDENTITY_HEADER = "X-User-ID"

DEFAULT_PROVIDER_BASE_URL = "https://api.fireworks.ai/inference/v1"
DEFAULT_PROVIDER_MODEL = "accounts/fireworks/models/llama-v3p1-70b-instruct"
DEFAULT_PROVIDER_TIMEOUT_S = 60.0
DEFAULT_MAX_INPUT_CHARS = 1000

CANDIDATE_COUNT = 10
GENERATION_TEMPERATURE = 0.8
GENERATION_TOP_P = 0.9
GENERATION_MAX_OUTPUT_TOKENS = 3000
