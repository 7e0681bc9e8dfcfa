# azure_explorer/directory/__init__.py
from .base import CloudDirectory, Record
from .azure_arm import AzureDirectory, get_credential
from azure_explorer.config import Settings
from azure_explorer.errors import ConfigurationError


def get_directory(settings: Settings) -> CloudDirectory:
    """
    Factory function to get the cloud directory for the configured subscription.
    """
    if not settings.subscription_id:
        raise ConfigurationError("Missing required environment variables: AZURE_SUBSCRIPTION_ID")

    return AzureDirectory(get_credential(settings), settings.subscription_id)
