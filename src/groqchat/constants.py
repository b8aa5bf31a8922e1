"""Application-level constants for groqchat.

This module keeps cross-cutting app/file/path constants and the fixed
texts the conversation engine writes into the log.
"""

# ============================================================================
# Application identity
# ============================================================================

APP_NAME = "groqchat"

# ============================================================================
# File extensions
# ============================================================================

STORE_FILE_EXTENSION = ".json"
LOG_FILE_EXTENSION = ".log"
EXPORT_FILE_EXTENSION = ".pdf"
TEXT_EXPORT_EXTENSION = ".txt"

# ============================================================================
# Default directories and paths
# ============================================================================

# User data directory (created in home directory)
USER_DATA_DIR = f"~/.{APP_NAME}"

DEFAULT_STORE_FILE = f"{USER_DATA_DIR}/chat_history{STORE_FILE_EXTENSION}"
DEFAULT_LOGS_DIR = f"{USER_DATA_DIR}/logs"
DEFAULT_EXPORTS_DIR = f"{USER_DATA_DIR}/exports"
DEFAULT_EXPORT_FILENAME = f"chat-conversation{EXPORT_FILE_EXTENSION}"

DATETIME_FORMAT_FILENAME = "%Y-%m-%d_%H-%M-%S"

# ============================================================================
# Remote services
# ============================================================================

GROQ_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama-3.1-8b-instant"
DEFAULT_API_KEY_ENV = "GROQ_API_KEY"

POLLINATIONS_PROMPT_URL = "https://image.pollinations.ai/prompt/"

# ============================================================================
# Conversation texts
# ============================================================================

# Input containing this token (case-insensitive) is an image turn.
IMAGE_TRIGGER_TOKEN = "image"
# Removed (case-insensitive, every occurrence) to derive the image subject.
IMAGE_STRIP_TOKENS = ("generate", "image", "of")

IMAGE_CAPTION_TEMPLATE = "Here’s your image of {subject}:"
ERROR_REPLY_TEMPLATE = "❌ Error: {reason}"
EMPTY_COMPLETION_TEXT = "No response."

# ============================================================================
# Export
# ============================================================================

EXPORT_TITLE = "Chat Conversation Export"
EXPORT_USER_LABEL = "You"
EXPORT_ASSISTANT_LABEL = "AI"
PAGE_BREAK = "\f"

# ============================================================================
# REPL display
# ============================================================================

BORDERLINE_CHAR = "="
BORDERLINE_WIDTH = 80
EMOJI_MODE_EDIT = "✏️"
