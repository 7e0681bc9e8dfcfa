# ------------------------------
# Module: context.py
# Description: Collaborators the query pipeline runs against
# ------------------------------

import logging
from dataclasses import dataclass, field
from typing import Optional

from azure_explorer.ai_workflow.utils.openai_utils import LanguageModel, get_language_model
from azure_explorer.config import Settings, load_settings
from azure_explorer.directory import CloudDirectory, get_directory
from azure_explorer.prompt_store import PromptStore
from azure_explorer.routing import ResourceGroupResolver, ResourceRouter

logger = logging.getLogger(__name__)


@dataclass
class PipelineContext:
    """Directory, language model and prompts for answering questions.

    Built once per process and shared read-only across requests.
    """
    directory: CloudDirectory
    llm: LanguageModel
    prompt_store: PromptStore
    settings: Settings = field(default_factory=Settings)

    @property
    def resolver(self) -> ResourceGroupResolver:
        return ResourceGroupResolver(self.directory, self.settings.resource_groups)

    @property
    def router(self) -> ResourceRouter:
        return ResourceRouter(self.directory, self.resolver)


def build_context(settings: Optional[Settings] = None) -> PipelineContext:
    """
    Build the production context: Azure directory, configured chat model and the prompts folder.

    Raises:
        ConfigurationError: when required environment variables are missing.
    """
    settings = (settings or load_settings()).require()

    context = PipelineContext(
        directory=get_directory(settings),
        llm=get_language_model(settings),
        prompt_store=PromptStore(settings.prompts_dir),
        settings=settings,
    )
    logger.info(f"Pipeline context ready for subscription {settings.subscription_id}")
    return context
