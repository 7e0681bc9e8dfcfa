# ------------------------------
# Module: config.py
# Description: Process-wide settings read from the environment
# ------------------------------

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional
from dotenv import load_dotenv

from azure_explorer.constants import (
    LLM_PROVIDER,
    DEFAULT_OPENAI_MODEL,
    DEFAULT_AZURE_OPENAI_API_VERSION,
    PROMPTS_FOLDER_PATH_STR,
)
from azure_explorer.errors import ConfigurationError

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent

AZURE_REQUIRED_VARS = [
    'AZURE_SUBSCRIPTION_ID',
]

LLM_REQUIRED_VARS = {
    "azure": ['AZURE_OPENAI_API_KEY', 'AZURE_OPENAI_ENDPOINT', 'AZURE_OPENAI_DEPLOYMENT_NAME'],
    "openai": ['OPENAI_API_KEY'],
}


@dataclass(frozen=True)
class Settings:
    """Read-only configuration, loaded once per process."""
    subscription_id: Optional[str] = None
    tenant_id: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    llm_provider: str = LLM_PROVIDER
    openai_api_key: Optional[str] = None
    openai_model: str = DEFAULT_OPENAI_MODEL
    azure_openai_api_key: Optional[str] = None
    azure_openai_endpoint: Optional[str] = None
    azure_openai_deployment: Optional[str] = None
    azure_openai_api_version: str = DEFAULT_AZURE_OPENAI_API_VERSION
    resource_groups: Optional[str] = None
    prompts_dir: Path = PROJECT_ROOT / PROMPTS_FOLDER_PATH_STR

    @property
    def has_client_secret(self) -> bool:
        return bool(self.tenant_id and self.client_id and self.client_secret)

    def _env_view(self) -> Dict[str, Optional[str]]:
        return {
            'AZURE_SUBSCRIPTION_ID': self.subscription_id,
            'AZURE_OPENAI_API_KEY': self.azure_openai_api_key,
            'AZURE_OPENAI_ENDPOINT': self.azure_openai_endpoint,
            'AZURE_OPENAI_DEPLOYMENT_NAME': self.azure_openai_deployment,
            'OPENAI_API_KEY': self.openai_api_key,
        }

    def missing_required(self) -> List[str]:
        """Names of the required environment variables that are not set."""
        required = AZURE_REQUIRED_VARS + LLM_REQUIRED_VARS.get(self.llm_provider.lower(), [])
        values = self._env_view()
        return [var for var in required if not values.get(var)]

    def require(self) -> "Settings":
        missing = self.missing_required()
        if missing:
            raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")
        return self


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def load_settings(env_file: Optional[Path] = None) -> Settings:
    '''
      Load settings from the environment, reading the project .env file first.
      Variables already present in the environment win over the .env file.
    '''
    load_dotenv(env_file or PROJECT_ROOT / '.env')

    prompts_dir = _clean(os.getenv('PROMPTS_DIR'))

    settings = Settings(
        subscription_id=_clean(os.getenv('AZURE_SUBSCRIPTION_ID')),
        tenant_id=_clean(os.getenv('AZURE_TENANT_ID')),
        client_id=_clean(os.getenv('AZURE_CLIENT_ID')),
        client_secret=_clean(os.getenv('AZURE_CLIENT_SECRET')),
        llm_provider=(_clean(os.getenv('LLM_PROVIDER')) or LLM_PROVIDER).lower(),
        openai_api_key=_clean(os.getenv('OPENAI_API_KEY')),
        openai_model=_clean(os.getenv('OPENAI_MODEL')) or DEFAULT_OPENAI_MODEL,
        azure_openai_api_key=_clean(os.getenv('AZURE_OPENAI_API_KEY')),
        azure_openai_endpoint=_clean(os.getenv('AZURE_OPENAI_ENDPOINT')),
        azure_openai_deployment=_clean(os.getenv('AZURE_OPENAI_DEPLOYMENT_NAME')),
        azure_openai_api_version=_clean(os.getenv('AZURE_OPENAI_API_VERSION')) or DEFAULT_AZURE_OPENAI_API_VERSION,
        resource_groups=_clean(os.getenv('RESOURCE_GROUPS')),
        prompts_dir=Path(prompts_dir) if prompts_dir else PROJECT_ROOT / PROMPTS_FOLDER_PATH_STR,
    )

    logger.info(f"Loaded settings for provider '{settings.llm_provider}' and subscription '{settings.subscription_id}'")
    return settings
