"""
response_synthesizer.py
AI agent for turning query results into a natural language answer.
"""

import json
import logging
from typing import Any, List, Mapping, Optional

from azure_explorer.ai_workflow.data_model import Failure, QueryIntent, QueryResult
from azure_explorer.ai_workflow.utils.common_utils import get_data_context_str
from azure_explorer.ai_workflow.utils.openai_utils import LanguageModel
from azure_explorer.constants import (
    RESPONSE_GENERATOR_PROMPT,
    RESPONSE_TEMPERATURE,
    RESPONSE_MAX_TOKENS,
    FAILURE_APOLOGY,
    NO_DATA_AVAILABLE,
    BASIC_RESPONSE_HEADER,
)
from azure_explorer.errors import LanguageModelError
from azure_explorer.prompt_store import PromptStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

INDENT = "  "


def generate_response(
    question: str,
    intent: Optional[QueryIntent],
    result: QueryResult,
    llm: LanguageModel,
    prompt_store: PromptStore,
) -> str:
    """
    Generate the final answer text for a query result.

    Failures are answered directly without a model call. For data, the model writes
    the answer; if that fails for any reason the data is formatted deterministically.
    """
    if isinstance(result, Failure):
        return f"{FAILURE_APOLOGY} {result.message}"

    try:
        system_prompt = prompt_store.load(RESPONSE_GENERATOR_PROMPT, {"originalQuery": question})
        data_context = get_data_context_str(result.data)

        if intent is not None:
            logger.info(f"Generating response for intent '{intent.intent}' on {intent.resource_type} '{intent.resource_name}'")

        answer = llm.complete(
            system_prompt,
            data_context,
            temperature=RESPONSE_TEMPERATURE,
            max_tokens=RESPONSE_MAX_TOKENS,
        )
        answer = (answer or "").strip()
        if not answer:
            raise LanguageModelError("Model returned an empty answer")
        return answer

    except Exception as e:
        logger.warning(f"Error generating response, falling back to basic formatting: {e}", exc_info=True)
        return format_basic_response(result.data)


def format_basic_response(data: Any) -> str:
    '''
      Format result data without a language model.

      Scalars become "key: value" lines, nested maps become indented blocks and
      sequences become numbered lists. Fields set to None are skipped.
    '''
    if not data:
        return NO_DATA_AVAILABLE

    lines = [BASIC_RESPONSE_HEADER, ""]
    if isinstance(data, Mapping):
        _format_fields(data, lines, depth=0)
    elif isinstance(data, (list, tuple)):
        _format_items(data, lines, depth=0)
    else:
        lines.append(str(data))

    return "\n".join(lines) + "\n"


def _format_fields(fields: Mapping, lines: List[str], depth: int) -> None:
    pad = INDENT * depth
    for key, value in fields.items():
        if value is None:
            continue
        if isinstance(value, Mapping):
            lines.append(f"{pad}{key}:")
            _format_fields(value, lines, depth + 1)
        elif isinstance(value, (list, tuple)):
            lines.append(f"{pad}{key}: {len(value)} items")
            _format_items(value, lines, depth + 1)
        else:
            lines.append(f"{pad}{key}: {value}")


def _format_items(items, lines: List[str], depth: int) -> None:
    pad = INDENT * depth
    for index, item in enumerate(items, start=1):
        if isinstance(item, (Mapping, list, tuple)):
            item = json.dumps(item, default=str)
        lines.append(f"{pad}{index}. {item}")
