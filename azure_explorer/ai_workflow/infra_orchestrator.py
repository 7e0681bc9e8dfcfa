"""
infra_orchestrator.py
High-level orchestrator for answering Azure infrastructure questions.
"""

import logging
import time
from datetime import datetime, timezone

from azure_explorer.ai_workflow.agents.query_analyzer import analyze_query
from azure_explorer.ai_workflow.agents.response_synthesizer import generate_response
from azure_explorer.ai_workflow.data_model import RenderedAnswer, Success
from azure_explorer.constants import (
    ANALYSIS_FAILURE_TEMPLATE,
    DEFAULT_RESULT_SOURCE,
    ERROR_RESULT_SOURCE,
)
from azure_explorer.context import PipelineContext
from azure_explorer.errors import AnalysisError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def handle_user_query(question: str, context: PipelineContext) -> RenderedAnswer:
    """
        High-level entrypoint for query processing:
        1. Analyze the question into a query intent
        2. Route the intent to the lookup for its resource type
        3. Render the result as a natural language answer
    """
    started = time.perf_counter()
    timestamp = datetime.now(timezone.utc).isoformat()
    logger.info(f"Processing query: \"{question}\"")

    # --- Analysis step ---

    try:
        intent = analyze_query(question, context.llm, context.prompt_store)
    except AnalysisError as e:
        logger.error(f"Error in handle_user_query: {e}")
        return RenderedAnswer(
            text=ANALYSIS_FAILURE_TEMPLATE.format(error=str(e)),
            source=ERROR_RESULT_SOURCE,
            intent=None,
            error_message=str(e),
            query_time_ms=_elapsed_ms(started),
            timestamp=timestamp,
        )

    # --- Routing step ---

    result = context.router.route(intent)
    logger.info(f"Azure query result: {result}")

    # --- Response step ---

    text = generate_response(question, intent, result, context.llm, context.prompt_store)

    return RenderedAnswer(
        text=text,
        source=result.source if isinstance(result, Success) else DEFAULT_RESULT_SOURCE,
        intent=intent,
        error_message=None,
        query_time_ms=_elapsed_ms(started),
        timestamp=timestamp,
    )


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)
