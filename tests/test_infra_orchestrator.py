import json
from datetime import datetime

from azure_explorer.ai_workflow.data_model import Intent, ResourceType
from azure_explorer.ai_workflow.infra_orchestrator import handle_user_query
from azure_explorer.constants import DEFAULT_RESULT_SOURCE, ERROR_RESULT_SOURCE, FAILURE_APOLOGY
from azure_explorer.errors import LanguageModelError


def analysis(intent, resource_type, resource_name=None, **parameters):
    return json.dumps({
        "intent": intent,
        "resourceType": resource_type,
        "resourceName": resource_name,
        "parameters": parameters,
    })


def test_vm_status_question_end_to_end(estate, make_context):
    context = make_context(estate, analysis("get_status", "virtualMachine", "vm-prod-01"), "vm-prod-01 is running.")

    answer = handle_user_query("What is the power state of vm-prod-01?", context)

    assert answer.text == "vm-prod-01 is running."
    assert answer.source == DEFAULT_RESULT_SOURCE
    assert answer.intent.intent == Intent.GET_STATUS
    assert answer.intent.resource_type == ResourceType.VIRTUAL_MACHINE
    assert answer.error_message is None
    assert answer.query_time_ms >= 0
    assert datetime.fromisoformat(answer.timestamp).tzinfo is not None

    data_context = context.llm.calls[1]["user_content"]
    assert '"resourceGroup": "rg-prod"' in data_context
    assert '"powerState": "VM running"' in data_context


def test_list_everything_end_to_end(estate, make_context):
    context = make_context(estate, analysis("list_all", "generic", "all"), "You have 6 resources.")

    answer = handle_user_query("Show me everything we have deployed", context)

    assert answer.text == "You have 6 resources."
    assert '"count": 6' in context.llm.calls[1]["user_content"]


def test_configured_groups_bound_the_search(estate, make_context):
    context = make_context(
        estate,
        analysis("get_status", "virtualMachine", "vm-prod-01"),
        "vm-prod-01 is running.",
        resource_groups="rg-prod",
    )

    handle_user_query("Is vm-prod-01 up?", context)

    assert estate.calls == [("get_virtual_machine", "rg-prod", "vm-prod-01")]


def test_analysis_failure_returns_error_answer(estate, make_context):
    context = make_context(estate, "I am not sure what you mean.")

    answer = handle_user_query("Hmm?", context)

    assert answer.text.startswith("I encountered an error while processing your query:")
    assert answer.source == ERROR_RESULT_SOURCE
    assert answer.intent is None
    assert answer.error_message
    assert len(context.llm.calls) == 1
    assert estate.calls == []


def test_missing_resource_returns_apology_without_second_model_call(estate, make_context):
    context = make_context(estate, analysis("get_status", "virtualMachine", "vm-ghost"))

    answer = handle_user_query("Is vm-ghost running?", context)

    assert answer.text.startswith(FAILURE_APOLOGY)
    assert "vm-ghost" in answer.text
    assert answer.source == DEFAULT_RESULT_SOURCE
    assert answer.error_message is None
    assert len(context.llm.calls) == 1


def test_model_failure_while_answering_falls_back(estate, make_context):
    context = make_context(
        estate,
        analysis("get_details", "storageAccount", "stprod01"),
        LanguageModelError("deployment not found"),
    )

    answer = handle_user_query("Tell me about stprod01", context)

    assert answer.text.startswith("Here is the information I found:")
    assert "accessTier: Hot" in answer.text


def test_unexpected_model_exception_during_analysis_returns_error_answer(estate, make_context):
    context = make_context(estate, ConnectionError("connection reset by peer"))

    answer = handle_user_query("Is vm-prod-01 running?", context)

    assert answer.text.startswith("I encountered an error while processing your query:")
    assert "connection reset by peer" in answer.text
    assert answer.source == ERROR_RESULT_SOURCE
    assert answer.intent is None
    assert estate.calls == []


def test_blank_answer_from_the_model_falls_back(estate, make_context):
    context = make_context(estate, analysis("get_status", "virtualMachine", "vm-prod-01"), "  \n ")

    answer = handle_user_query("Is vm-prod-01 running?", context)

    assert answer.text.startswith("Here is the information I found:")
    assert "powerState: VM running" in answer.text
