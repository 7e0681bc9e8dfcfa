"""
query_analyzer.py
AI agent for turning a natural language question into a structured query intent.
"""

import json
import logging
from typing import Any, Dict

from azure_explorer.ai_workflow.data_model import QueryIntent, ResourceType
from azure_explorer.ai_workflow.utils.common_utils import strip_code_fences
from azure_explorer.ai_workflow.utils.openai_utils import LanguageModel
from azure_explorer.constants import (
    QUERY_ANALYZER_PROMPT,
    ANALYZER_TEMPERATURE,
    ANALYZER_MAX_TOKENS,
    UNKNOWN_RESOURCE_NAME,
)
from azure_explorer.errors import AnalysisError
from azure_explorer.prompt_store import PromptStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def analyze_query(question: str, llm: LanguageModel, prompt_store: PromptStore) -> QueryIntent:
    """
    Analyze the user's question and extract intent, resource type, resource name and parameters.

    Raises:
        AnalysisError: when the model call fails, its answer is not a JSON object,
            or the object lacks intent or resourceType.
    """
    if not question or not question.strip():
        raise AnalysisError("Query analysis failed: the question is empty")

    try:
        system_prompt = prompt_store.load(QUERY_ANALYZER_PROMPT)
        analysis_text = llm.complete(
            system_prompt,
            question,
            temperature=ANALYZER_TEMPERATURE,
            max_tokens=ANALYZER_MAX_TOKENS,
        )
    except Exception as e:
        logger.error(f"Error analyzing query: {e}", exc_info=True)
        raise AnalysisError(f"Query analysis failed: {e}") from e

    analysis = _parse_analysis(analysis_text)
    query_intent = _to_query_intent(analysis)

    logger.info(f"Query analysis: {json.dumps(query_intent.to_dict())}")
    return query_intent


def _parse_analysis(analysis_text: str) -> Dict[str, Any]:
    """Parse the model's answer into a dict, tolerating Markdown code fences."""
    if not analysis_text or not analysis_text.strip():
        raise AnalysisError("Query analysis failed: the model returned an empty response")

    cleaned_text = strip_code_fences(analysis_text)
    try:
        analysis = json.loads(cleaned_text)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse model response: {analysis_text}")
        raise AnalysisError(
            f"Query analysis failed: could not parse the model response as JSON ({e.msg}). Raw response: {analysis_text}"
        ) from e

    if not isinstance(analysis, dict):
        raise AnalysisError(f"Query analysis failed: expected a JSON object. Raw response: {analysis_text}")

    if not analysis.get("intent") or not analysis.get("resourceType"):
        logger.error(f"Invalid analysis result - missing required fields: {analysis}")
        raise AnalysisError("Query analysis failed: missing required fields (intent or resourceType)")

    return analysis


def _to_query_intent(analysis: Dict[str, Any]) -> QueryIntent:
    resource_type = str(analysis["resourceType"])

    raw_parameters = analysis.get("parameters")
    if not isinstance(raw_parameters, dict):
        raw_parameters = {}
    parameters = {str(k): str(v) for k, v in raw_parameters.items() if v is not None}

    resource_name = analysis.get("resourceName")
    resource_name = str(resource_name) if resource_name else None
    if resource_name is None and resource_type != ResourceType.GENERIC:
        resource_name = UNKNOWN_RESOURCE_NAME

    return QueryIntent(
        intent=str(analysis["intent"]),
        resource_type=resource_type,
        resource_name=resource_name,
        parameters=parameters,
    )
