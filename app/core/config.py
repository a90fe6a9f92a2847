from dataclasses import dataclass
from typing import Optional
import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_TEMPERATURE = 0.0
DEFAULT_LOG_LEVEL = "INFO"


class ConfigurationError(RuntimeError):
    """Raised when required configuration is missing or malformed"""


@dataclass(frozen=True)
class Settings:
    openai_api_key: str
    llm_model: str = DEFAULT_MODEL
    llm_temperature: float = DEFAULT_TEMPERATURE
    log_level: str = DEFAULT_LOG_LEVEL


def get_settings(env_file: Optional[str] = ".env") -> Settings:
    """
    Load settings from the process environment.

    Values from ``env_file`` are loaded first when the file exists; variables
    already set in the environment win.

    Raises:
        ConfigurationError: if OPENAI_API_KEY is unset or a value can't be parsed
    """
    if env_file and os.path.exists(env_file):
        load_dotenv(env_file, override=False)

    openai_api_key = os.getenv("OPENAI_API_KEY")
    if not openai_api_key:
        logger.critical("OPENAI_API_KEY environment variable not configured")
        raise ConfigurationError("OPENAI_API_KEY environment variable is not set")

    raw_temperature = os.getenv("LLM_TEMPERATURE", str(DEFAULT_TEMPERATURE))
    try:
        llm_temperature = float(raw_temperature)
    except ValueError as e:
        raise ConfigurationError(f"LLM_TEMPERATURE must be a number, got {raw_temperature!r}") from e

    return Settings(
        openai_api_key=openai_api_key,
        llm_model=os.getenv("LLM_MODEL", DEFAULT_MODEL),
        llm_temperature=llm_temperature,
        log_level=os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )
