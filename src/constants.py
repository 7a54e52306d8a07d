"""Constants used in business logic."""

DEFAULT_LANGUAGE = "html"
DEFAULT_MODEL_ID = "Qwen/Qwen3-Coder-480B-A35B-Instruct"

# Language specific style directives injected into the user message
LANGUAGE_DIRECTIVES = {
    "html": (
        "Create modern, responsive HTML with CSS and JavaScript. "
        "Use best practices for accessibility and performance."
    ),
    "typescript": (
        "Write clean, type-safe TypeScript code with proper interfaces "
        "and modern features."
    ),
    "javascript": (
        "Create modern JavaScript using ES6+ features with proper error handling."
    ),
    "python": "Write clean, idiomatic Python code following PEP 8 guidelines.",
    "css": "Create modern CSS with responsive design and proper vendor prefixes.",
    "json": "Generate valid JSON with proper structure and formatting.",
    "markdown": "Create well-formatted Markdown with proper syntax.",
}

# Used for languages without a dedicated directive
GENERIC_LANGUAGE_DIRECTIVE = "Generate clean, well-documented {language} code."

# Default system prompt used only when no other system prompt is specified in
# configuration file
DEFAULT_SYSTEM_PROMPT = (
    "You are an expert {language} developer. Generate clean, modern, "
    "production-ready code. Only return the code without explanations "
    "unless specifically requested."
)

CLOSING_INSTRUCTION = (
    "Please provide only the code without explanations unless specifically "
    "requested. Use modern best practices and ensure the code is production-ready."
)

# Headers of supplementary context blocks, in the order they are appended
REFERENCE_CONTEXT_HEADER = "Reference file content:"
WEBSITE_CONTEXT_HEADER = "Website to redesign:"
SEARCH_CONTEXT_HEADER = "Web search context:"

# Provider request defaults
DEFAULT_MAX_TOKENS = 4000
DEFAULT_TEMPERATURE = 0.7
DEFAULT_ATTEMPT_TIMEOUT = 30.0

# Provider identification used for results produced without any upstream call
OFFLINE_PROVIDER_ID = "offline"

# Context gathering defaults
DEFAULT_CONTEXT_TIMEOUT = 10.0
DEFAULT_WEBSITE_TIMEOUT = 8.0
DEFAULT_SEARCH_TIMEOUT = 8.0
DEFAULT_MAX_WEBSITE_CHARS = 20_000
DEFAULT_MAX_REFERENCE_CHARS = 50_000
DEFAULT_SEARCH_RESULTS = 5
WEBSITE_USER_AGENT = "AnyCoder/1.0 (+code generation service)"

# Generation cache defaults
DEFAULT_CACHE_RETENTION_SECONDS = 5.0
DEFAULT_CACHE_MAX_ENTRIES = 1024

# History constants
DEFAULT_HISTORY_MAX_ENTRIES = 50
HISTORY_STORAGE_NOOP = "noop"
HISTORY_STORAGE_FILE = "file"
HISTORY_STORAGE_SQLITE = "sqlite"

# Environment variable with path to configuration file, shared by uvicorn workers
CONFIGURATION_PATH_ENV_VAR = "ANYCODER_CONFIG_PATH"
