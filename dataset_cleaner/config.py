"""Configuration constants and settings for the dataset-cleaner pipeline."""

# Output locations
STEPS_DIR = "steps"
LOG_DIR = "logs"
OUT_PREFIX = "cleaned"

# Checkpoint stages, in pipeline order
STAGES = ("raw", "formatted", "cleaning", "cleaned")
CHECKPOINT_FILENAME = "data.json"

# Audit log file names (inside LOG_DIR)
RESPONSES_LOG = "responses.jsonl"
DROPPED_LOG = "dropped.jsonl"
FORMAT_ERRORS_LOG = "format_errors.jsonl"

# Source tables and the column each one is filtered on
TABLE_CHOICES = ["interactions_new", "dataset", "results"]
DEFAULT_TABLE = "interactions_new"
DEFAULT_SOURCE_MODEL = "gpt-4"
MODEL_KEYS = {
    "dataset": "model",
    "results": "provider",
    "interactions_new": "tone",
}
DEFAULT_MODEL_KEY = "model"
PAGE_SIZE = 1000
PAGE_DELAY = 1.0  # Seconds between table pages

# Cleaning configuration
DEFAULT_WORKERS = 4
REQUEST_DELAY = 0.5  # Courtesy delay before every classifier call
MAX_RETRIES = 3  # Retries on remote call failure only, never on bad output
RAW_TEXT_LOG_LIMIT = 2000

# LLM configuration
DEFAULT_CHAT_MODEL = "gpt-3.5-turbo"
DEFAULT_CHAT_BASE_URL = "https://api.pawan.krd/v1"
LLM_MAX_TOKENS = 3000
LLM_TEMPERATURE = 0.3
LLM_TIMEOUT = 120
DEFAULT_PROXY_PORT = 80

# Rejection vocabulary the classifier is instructed to use
REJECTION_REASONS = ("conversational", "images", "irrelevant")
