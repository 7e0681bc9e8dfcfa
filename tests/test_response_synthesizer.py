from azure_explorer.ai_workflow.agents.response_synthesizer import format_basic_response, generate_response
from azure_explorer.ai_workflow.data_model import Failure, QueryIntent, Success
from azure_explorer.constants import (
    BASIC_RESPONSE_HEADER,
    DATA_CONTEXT_HEADER,
    FAILURE_APOLOGY,
    NO_DATA_AVAILABLE,
    RESPONSE_MAX_TOKENS,
    RESPONSE_TEMPERATURE,
)
from azure_explorer.errors import LanguageModelError
from azure_explorer.prompt_store import PromptStore

from fakes import FakeLLM


INTENT = QueryIntent(intent="get_status", resource_type="virtualMachine", resource_name="vm-prod-01")
VM_DATA = {"name": "vm-prod-01", "resourceGroup": "rg-prod", "powerState": "VM running"}


# -------------------------
# Model backed answers
# -------------------------

def test_failure_is_answered_without_the_model(prompt_store):
    llm = FakeLLM()
    failure = Failure(message="Virtual Machine 'vm-x' not found in any accessible resource group", code="NOT_FOUND")

    text = generate_response("Is vm-x running?", INTENT, failure, llm, prompt_store)

    assert text.startswith(FAILURE_APOLOGY)
    assert "vm-x" in text
    assert llm.calls == []


def test_success_sends_question_and_data_to_the_model(prompt_store):
    llm = FakeLLM("vm-prod-01 is running.")

    text = generate_response("Is vm-prod-01 running?", INTENT, Success(data=VM_DATA), llm, prompt_store)

    assert text == "vm-prod-01 is running."
    call = llm.calls[0]
    assert call["temperature"] == RESPONSE_TEMPERATURE
    assert call["max_tokens"] == RESPONSE_MAX_TOKENS
    assert 'The user asked: "Is vm-prod-01 running?"' in call["system_prompt"]
    assert call["user_content"].startswith(DATA_CONTEXT_HEADER)
    assert '"powerState": "VM running"' in call["user_content"]


def test_model_error_falls_back_to_basic_formatting(prompt_store):
    llm = FakeLLM(LanguageModelError("rate limited"))

    text = generate_response("Is vm-prod-01 running?", INTENT, Success(data=VM_DATA), llm, prompt_store)

    assert text.startswith(BASIC_RESPONSE_HEADER)
    assert "powerState: VM running" in text


def test_missing_template_falls_back_to_basic_formatting(tmp_path):
    llm = FakeLLM("unused")

    text = generate_response("q", INTENT, Success(data=VM_DATA), llm, PromptStore(tmp_path))

    assert text.startswith(BASIC_RESPONSE_HEADER)
    assert llm.calls == []


# -------------------------
# Basic formatting
# -------------------------

def test_basic_formatting_of_nested_data():
    text = format_basic_response({"a": 1, "b": [1, 2], "c": {"d": "x"}})

    assert text == "\n".join([
        BASIC_RESPONSE_HEADER,
        "",
        "a: 1",
        "b: 2 items",
        "  1. 1",
        "  2. 2",
        "c:",
        "  d: x",
    ]) + "\n"


def test_basic_formatting_skips_none_and_dumps_structured_items():
    text = format_basic_response({"tags": None, "resources": [{"name": "vm-a"}]})

    assert "tags" not in text
    assert 'resources: 1 items' in text
    assert '  1. {"name": "vm-a"}' in text


def test_basic_formatting_of_empty_data():
    assert format_basic_response({}) == NO_DATA_AVAILABLE
    assert format_basic_response(None) == NO_DATA_AVAILABLE


def test_blank_model_answer_falls_back_to_basic_formatting(prompt_store):
    llm = FakeLLM("   ")

    text = generate_response("Is vm-prod-01 running?", INTENT, Success(data=VM_DATA), llm, prompt_store)

    assert text.startswith(BASIC_RESPONSE_HEADER)
    assert "name: vm-prod-01" in text


def test_model_answer_is_stripped(prompt_store):
    llm = FakeLLM("\n vm-prod-01 is running. \n")

    text = generate_response("Is vm-prod-01 running?", INTENT, Success(data=VM_DATA), llm, prompt_store)

    assert text == "vm-prod-01 is running."
