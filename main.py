# ------------------------------------------------------------------
# Project's Testing Entry Point
# Run: python main.py
# Note: Needs the Azure and Azure OpenAI settings in .env
# ------------------------------------------------------------------

import sys

from azure_explorer.context import build_context
from azure_explorer.diagnostics import check_connection
import azure_explorer.ai_workflow.infra_orchestrator as infra_orchestrator


if __name__ == "__main__":

    context = build_context()

    report = check_connection(context)
    print(report.summary())
    if not report.ok:
        sys.exit(1)

    # the_query = "What is the power state of vm-prod-01?"
    # the_query = "How many subnets does vnet-hub have?"
    # the_query = "List all storage accounts"
    the_query = sys.argv[1] if len(sys.argv) > 1 else "Show me everything we have deployed"

    answer = infra_orchestrator.handle_user_query(the_query, context)
    print(answer.text)
    print(f"-- source: {answer.source} | {answer.query_time_ms} ms")
