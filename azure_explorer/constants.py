# ------------------------------
# Module: constants.py
# Description: Constants for the azure explorer
# ------------------------------

# :::::: Provider Related :::::: #

LLM_PROVIDER = "azure"                          # "azure" for Azure OpenAI, "openai" for api.openai.com

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"

DEFAULT_AZURE_OPENAI_API_VERSION = "2024-06-01"

# :::::: Prompt Related :::::: #

# The folder holding the prompt templates, relative to the project root
PROMPTS_FOLDER_PATH_STR = "prompts"

QUERY_ANALYZER_PROMPT = "query-analyzer"

RESPONSE_GENERATOR_PROMPT = "response-generator"

# :::::: Model Call Related :::::: #

# Intent extraction should be near-deterministic
ANALYZER_TEMPERATURE = 0.1
ANALYZER_MAX_TOKENS = 500

RESPONSE_TEMPERATURE = 0.7
RESPONSE_MAX_TOKENS = 800

DEFAULT_TOP_P = 0.95

# :::::: Query Related :::::: #

UNKNOWN_RESOURCE_NAME = "unknown"

ALL_RESOURCES_NAME = "all"

# Parameter key the analyzer uses for an explicit resource group
RESOURCE_GROUP_PARAM = "resourceGroup"

TIME_PERIOD_PARAM = "timePeriod"

POWER_STATE_PREFIX = "PowerState/"

# :::::: Result Related :::::: #

DEFAULT_RESULT_SOURCE = "Azure Resource Manager"

ERROR_RESULT_SOURCE = "Error Handler"

FAILURE_CODE_NOT_FOUND = "NOT_FOUND"
FAILURE_CODE_NOT_IMPLEMENTED = "NOT_IMPLEMENTED"
FAILURE_CODE_UNKNOWN = "UNKNOWN_ERROR"

# :::::: Response Text Related :::::: #

FAILURE_APOLOGY = "I couldn't find the information you requested."

ANALYSIS_FAILURE_TEMPLATE = (
    "I encountered an error while processing your query: {error}. "
    "Please try rephrasing your question or check if the resource name is correct."
)

NO_DATA_AVAILABLE = "No data available."

BASIC_RESPONSE_HEADER = "Here is the information I found:"

DATA_CONTEXT_HEADER = "Here is the data from Azure:"
