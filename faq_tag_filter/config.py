"""Configuration management for the FAQ tag filter."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# Load .env file from project root
_project_root = Path(__file__).parent.parent
load_dotenv(_project_root / ".env")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class Config:
    """Application configuration."""

    # Tag grammar
    tag_namespace: str

    # Snapshot source
    snapshot_path: Optional[str]
    snapshot_url: Optional[str]

    # Optional settings with defaults
    request_timeout: float = 30.0

    # Search and suggestions
    suggestion_debounce: float = 0.2
    suggestion_min_length: int = 4
    max_suggestions: int = 5
    question_suggestion_max_length: int = 70
    search_match_markup: bool = False

    # Authoring integration
    authoring_mode: bool = False
    authoring_wait: float = 0.8
    retry_interval: float = 0.3
    retry_max_attempts: int = 10
    rebuild_delay: float = 0.5

    # Display texts
    placeholder_top: str = "Select a category"
    placeholder_sub: str = "Select subcategory"
    no_results_text: str = "No results found."
    missing_answer_text: str = "No answer provided"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            tag_namespace=os.getenv("FAQ_TAG_NAMESPACE", "smart-x-com"),
            snapshot_path=os.getenv("FAQ_SNAPSHOT_PATH"),
            snapshot_url=os.getenv("FAQ_SNAPSHOT_URL"),
            request_timeout=float(os.getenv("FAQ_REQUEST_TIMEOUT", "30")),
            suggestion_debounce=float(os.getenv("FAQ_SUGGESTION_DEBOUNCE", "0.2")),
            suggestion_min_length=int(os.getenv("FAQ_SUGGESTION_MIN_LENGTH", "4")),
            max_suggestions=int(os.getenv("FAQ_MAX_SUGGESTIONS", "5")),
            question_suggestion_max_length=int(
                os.getenv("FAQ_QUESTION_SUGGESTION_MAX_LENGTH", "70")
            ),
            search_match_markup=_env_bool("FAQ_SEARCH_MATCH_MARKUP", "false"),
            authoring_mode=_env_bool("FAQ_AUTHORING_MODE", "false"),
            authoring_wait=float(os.getenv("FAQ_AUTHORING_WAIT", "0.8")),
            retry_interval=float(os.getenv("FAQ_RETRY_INTERVAL", "0.3")),
            retry_max_attempts=int(os.getenv("FAQ_RETRY_MAX_ATTEMPTS", "10")),
            rebuild_delay=float(os.getenv("FAQ_REBUILD_DELAY", "0.5")),
        )

    @property
    def tag_marker(self) -> str:
        """Prefix every tag identifier must contain."""
        return f"{self.tag_namespace}:"

    def placeholder_for(self, level: int) -> str:
        """Unselected dropdown text for a filter level."""
        return self.placeholder_top if level == 0 else self.placeholder_sub


# Global config instance
config = Config.from_env()
