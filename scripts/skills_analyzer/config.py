#------------------------------------------------------------
#                          config.py
#   Centralizes defaults, env names, and JSON config loading helpers.

import json
import os
from typing import Dict, List, Optional, Set

# Environment variable names for configuration
ENV_GITHUB_USERNAME = "GITHUB_USERNAME"
ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
ENV_TOPCODER_API_URL = "TOPCODER_API_URL"
ENV_OPENAI_API_KEY = "OPENAI_API_KEY"
ENV_AI_ENABLED = "AI_ENABLED"
ENV_EXCLUDE_REPOS = "EXCLUDE_REPOS"

# Default values for configuration parameters
DEFAULT_MAX_REPOS = 20
DEFAULT_MAX_COMMITS_PER_REPO = 50
DEFAULT_MAX_PRS_PER_REPO = 30
DEFAULT_RECOMMENDATION_DISPLAY_LIMIT = 15
DEFAULT_TOPCODER_API_URL = "https://api.topcoder-dev.com/v5"
DEFAULT_OPENAI_API_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"

# Constants for GitHub API interaction
GITHUB_API_ACCEPT_HEADER = "application/vnd.github+json"
GITHUB_API_BASE_URL = "https://api.github.com"
GITHUB_PER_PAGE = 100
GITHUB_MAX_PAGES = 10
GITHUB_REQUEST_TIMEOUT_SECONDS = 30

# Rate limiting
RATE_LIMIT_DEFAULT_QUOTA = 5000
RATE_LIMIT_WAIT_SECONDS = 60

# Skill catalog
TOPCODER_SKILLS_ENDPOINT = "/standardized-skills"
TOPCODER_REQUEST_TIMEOUT_SECONDS = 10
AI_REQUEST_TIMEOUT_SECONDS = 30

# Evidence bounds
MAX_REPOSITORY_EVIDENCE = 5

TRUTHY_VALUES = {"1", "true", "yes", "on"}

# The message shown when neither a token nor a username is configured.
MISSING_IDENTITY_MESSAGE = "GITHUB_TOKEN or GITHUB_USERNAME is required"

# Directory paths for the project and configuration files.
SCRIPTS_DIR = os.path.dirname(os.path.dirname(__file__))
CONFIG_DIR = os.path.join(SCRIPTS_DIR, "config")
LANGUAGE_ALIASES_PATH = os.path.join(CONFIG_DIR, "language_aliases.json")
IGNORE_LANGUAGES_PATH = os.path.join(CONFIG_DIR, "language_ignore_list.json")
DEFAULT_SKILLS_PATH = os.path.join(CONFIG_DIR, "default_skills.json")


def env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in TRUTHY_VALUES


def env_list(name: str) -> Set[str]:
    return {
        item.strip().lower()
        for item in os.environ.get(name, "").split(",")
        if item.strip()
    }

# This function does load JSON content from disk safely.
# It returns None when the file is missing or invalid.
def _load_json(path: str):
    if not os.path.exists(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as file_handle:
            return json.load(file_handle)
    except (OSError, ValueError):
        return None

# This function does load language-to-skill name overrides.
# Keys keep their case because language labels are matched exactly.
def load_language_aliases(path: str = LANGUAGE_ALIASES_PATH) -> Dict[str, str]:
    data = _load_json(path)
    if not isinstance(data, dict):
        return {}
    return {
        str(key).strip(): str(value).strip()
        for key, value in data.items()
        if str(key).strip() and str(value).strip()
    }

# This function does load the language ignore list.
# It returns normalized lowercase language names as a set.
def load_ignored_languages(path: str = IGNORE_LANGUAGES_PATH) -> Set[str]:
    data = _load_json(path)
    if not isinstance(data, list):
        return set()
    return {str(item).strip().lower() for item in data if str(item).strip()}

# This function does load the offline skill list.
# Entries without a name are dropped; ids default to the name.
def load_default_skills(path: str = DEFAULT_SKILLS_PATH) -> List[dict]:
    data = _load_json(path)
    if not isinstance(data, list):
        return []
    skills = []
    for item in data:
        if isinstance(item, str) and item.strip():
            skills.append({"id": item.strip(), "name": item.strip()})
        elif isinstance(item, dict) and str(item.get("name") or "").strip():
            skills.append(item)
    return skills


def optional_env(name: str) -> Optional[str]:
    value = os.environ.get(name, "").strip()
    return value or None
