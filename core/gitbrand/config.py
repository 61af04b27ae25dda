"""Configuration settings for GitBrand."""

from pathlib import Path

# Paths
DATA_DIR = Path.home() / ".gitbrand"
SETTINGS_FILE = "settings.json"

# Server
HOST = "127.0.0.1"
PORT = 7979

# API
API_PREFIX = "/api"

# GitHub
GITHUB_API_URL = "https://api.github.com"
GITHUB_WEB_URL = "https://github.com"
GITHUB_TIMEOUT = 30.0
README_PATH = "README.md"
DEFAULT_COMMIT_MESSAGE = "Update README via GitBrand Agent"

# Text generation
GROQ_API_URL = "https://api.groq.com/openai/v1/chat/completions"
GROQ_MODEL = "llama-3.3-70b-versatile"
GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models"
GEMINI_MODEL = "gemini-1.5-flash"
LLM_TIMEOUT = 60.0
LLM_TEMPERATURE = 0.8

# Conversation
GREETING = (
    "Hello! I am your GitHub-Branding-Assistant. Ready to update your profile "
    "or optimize your testing narratives?"
)
CLEARED_GREETING = (
    "History cleared. How can I assist you with your professional branding today?"
)
