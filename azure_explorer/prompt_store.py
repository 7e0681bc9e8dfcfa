# ------------------------------
# Module: prompt_store.py
# Description: Loads prompt templates from the prompts folder
# ------------------------------

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from azure_explorer.errors import PromptNotFoundError

logger = logging.getLogger(__name__)


class PromptStore:
    """Text templates stored as <name>.txt with {placeholder} variables."""

    def __init__(self, prompts_dir: Union[str, Path]):
        self.prompts_dir = Path(prompts_dir)

    def path_for(self, name: str) -> Path:
        return self.prompts_dir / f"{name}.txt"

    def load(self, name: str, variables: Optional[Dict[str, object]] = None) -> str:
        '''
          Load a prompt and substitute its variables.

          Args:
            name: The template name, without the .txt extension
            variables: Values for the {key} placeholders in the template

          Returns:
            The template text with every known placeholder replaced.
            Unknown placeholders are left as they are.
        '''
        prompt_path = self.path_for(name)
        try:
            content = prompt_path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error(f"Error loading prompt '{name}' from {prompt_path}: {e}")
            raise PromptNotFoundError(f"Failed to load prompt: {name}") from e

        for key, value in (variables or {}).items():
            content = content.replace("{" + key + "}", str(value))

        return content
