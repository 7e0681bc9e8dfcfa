"""
data_model.py
Data models for Azure query analysis, routing and answering.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from azure_explorer.constants import DEFAULT_RESULT_SOURCE


class Intent(str, Enum):
    GET_STATUS = "get_status"
    GET_CONFIGURATION = "get_configuration"
    GET_DETAILS = "get_details"
    LIST_RESOURCES = "list_resources"
    COUNT_RESOURCES = "count_resources"
    LIST_ALL = "list_all"
    GET_COST = "get_cost"


class ResourceType(str, Enum):
    VIRTUAL_MACHINE = "virtualMachine"
    DATABASE = "database"
    VIRTUAL_NETWORK = "virtualNetwork"
    SUBNET = "subnet"
    STORAGE_ACCOUNT = "storageAccount"
    RESOURCE_GROUP = "resourceGroup"
    GENERIC = "generic"


# Ordered resource group names searched for a single query
ResourceGroupSet = Tuple[str, ...]


@dataclass(frozen=True)
class QueryIntent:
    """Structured intent extracted from the user's question."""
    intent: str                                 # an Intent value, or whatever the model returned
    resource_type: str                          # a ResourceType value, or whatever the model returned
    resource_name: Optional[str] = None
    parameters: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "intent": self.intent,
            "resourceType": self.resource_type,
            "resourceName": self.resource_name,
            "parameters": dict(self.parameters),
        }


@dataclass
class Success:
    """Data found for the query."""
    data: Dict[str, Any]
    source: str = DEFAULT_RESULT_SOURCE


@dataclass
class Failure:
    """The query could not be answered with data."""
    message: str
    code: str


QueryResult = Union[Success, Failure]


@dataclass
class RenderedAnswer:
    """Final answer to user's query."""
    text: str
    source: str
    intent: Optional[QueryIntent] = None
    error_message: Optional[str] = None
    query_time_ms: int = 0
    timestamp: str = ""
