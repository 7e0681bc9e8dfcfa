import json
import re
from typing import Any

from azure_explorer.constants import DATA_CONTEXT_HEADER

CODE_FENCE_PATTERN = re.compile(r"```(?:json)?[ \t]*\n?", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    '''
      Remove Markdown code fences (``` and ```json) around a model answer.
    '''
    return CODE_FENCE_PATTERN.sub("", text).strip()


def to_json_text(data: Any) -> str:
    '''
      Serialize result data as readable JSON. Values JSON cannot represent are stringified.
    '''
    return json.dumps(data, indent=2, default=str)


def get_data_context_str(data: Any) -> str:
    return f"""{DATA_CONTEXT_HEADER}
{to_json_text(data)}"""
