"""
Configuration management for Browser Task Agent.

Provides configuration dataclass and environment variable loading.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

# Load environment variables from .env file if present
load_dotenv()


API_KEY_ENV_VAR = "OPENAI_API_KEY"


@dataclass
class AgentConfig:
    """Configuration for the browser agent."""

    # LLM settings
    api_key: Optional[str] = field(
        default_factory=lambda: os.getenv(API_KEY_ENV_VAR)
    )
    model: str = "gpt-4-turbo-preview"
    model_endpoint: str = "https://api.openai.com/v1"
    temperature: float = 0.7
    request_timeout: float = 120.0

    # Agent settings
    max_iterations: int = 20

    # Browser settings
    headless: bool = True
    no_sandbox: bool = True

    # Timeouts (ms)
    navigation_timeout: int = 30000
    action_timeout: int = 10000

    # Settle delays after actions (ms)
    navigation_settle_delay: int = 2000
    click_settle_delay: int = 1000

    # Default for wait_for_element when the model gives no timeout
    default_wait_timeout_s: int = 10

    # Content limits for tool results
    html_max_chars: int = 5000
    text_max_chars: int = 3000
    max_listed_elements: int = 10

    debug: bool = False

    def require_api_key(self) -> str:
        """Return the API key or raise ConfigurationError when it is unset."""
        if not self.api_key:
            raise ConfigurationError(
                f"{API_KEY_ENV_VAR} is not set. Set the environment variable "
                "or add it to a .env file."
            )
        return self.api_key

    @classmethod
    def from_env(cls, debug: bool = False) -> "AgentConfig":
        """Create configuration from the environment.

        Raises:
            ConfigurationError: If the API key is missing
        """
        config = cls(debug=debug)
        config.require_api_key()
        return config
