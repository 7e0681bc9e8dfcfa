"""
resource_router.py
Dispatches a query intent to the lookup for its resource type.
"""

import logging
from typing import Dict, List, Optional, Sequence

from azure_explorer.ai_workflow.data_model import (
    Failure, Intent, QueryIntent, QueryResult, ResourceGroupSet, ResourceType, Success
)
from azure_explorer.constants import (
    ALL_RESOURCES_NAME,
    RESOURCE_GROUP_PARAM,
    TIME_PERIOD_PARAM,
    FAILURE_CODE_NOT_IMPLEMENTED,
    FAILURE_CODE_UNKNOWN,
)
from azure_explorer.directory import CloudDirectory
from azure_explorer.errors import DirectoryError, ResourceNotFound
from azure_explorer.routing.group_resolver import ResourceGroupResolver
from azure_explorer.routing.strategies import LookupStrategy, STRATEGIES, GENERIC_STRATEGY

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class ResourceRouter:
    def __init__(
        self,
        directory: CloudDirectory,
        resolver: ResourceGroupResolver,
        strategies: Optional[Dict[str, LookupStrategy]] = None,
    ):
        self.directory = directory
        self.resolver = resolver
        self.strategies = strategies if strategies is not None else STRATEGIES

    def strategy_for(self, resource_type: str) -> LookupStrategy:
        key = getattr(resource_type, "value", resource_type)
        return self.strategies.get(key, GENERIC_STRATEGY)

    def route(self, intent: QueryIntent, groups: Optional[Sequence[str]] = None) -> QueryResult:
        """
        Execute the lookup for the intent and return a Success or Failure. Never raises.

        Args:
            intent: The analyzed query
            groups: Resource groups to search, in order. Resolved from the intent when None.
        """
        what = f"{intent.resource_type} '{intent.resource_name}'"
        try:
            if intent.intent == Intent.LIST_ALL and intent.resource_name == ALL_RESOURCES_NAME:
                what = f"all {intent.resource_type} resources"
                return self._list_all(intent, self._groups_for(intent, groups))

            if intent.intent == Intent.GET_COST:
                return self._cost_placeholder(intent)

            strategy = self.strategy_for(intent.resource_type)
            what = strategy.label.lower()
            search_groups = self._groups_for(intent, groups) if strategy.scans_groups else ()
            return strategy.run(self.directory, intent, search_groups)

        except Exception as e:
            logger.error(f"Error executing Azure query for {what}: {e}", exc_info=True)
            return Failure(
                message=f"Failed to query {what}: {e}",
                code=str(getattr(e, "code", None) or FAILURE_CODE_UNKNOWN),
            )

    def _groups_for(self, intent: QueryIntent, groups: Optional[Sequence[str]]) -> ResourceGroupSet:
        if groups is not None:
            return tuple(groups)
        return self.resolver.resolve(intent.parameters.get(RESOURCE_GROUP_PARAM))

    def _list_all(self, intent: QueryIntent, groups: ResourceGroupSet) -> QueryResult:
        """Every resource across the groups whose type contains the requested type."""
        resource_type = intent.resource_type
        include_everything = resource_type == ResourceType.GENERIC
        type_name = str(getattr(resource_type, "value", resource_type))
        type_filter = type_name.lower()

        all_resources: List[Dict[str, str]] = []
        for group in groups:
            try:
                for resource in self.directory.list_resources_in_group(group):
                    if include_everything or type_filter in (resource.get("type") or "").lower():
                        all_resources.append({
                            "name": resource.get("name"),
                            "type": resource.get("type"),
                            "resourceGroup": group,
                            "location": resource.get("location"),
                            "id": resource.get("id"),
                        })
            except (ResourceNotFound, DirectoryError) as e:
                logger.error(f"Error listing resources in {group}: {e}")

        logger.info(f"Listed {len(all_resources)} resources of type '{resource_type}' across {len(groups)} resource group(s)")
        return Success(data={
            "resourceType": "all resources" if include_everything else type_name,
            "count": len(all_resources),
            "resources": all_resources,
        })

    def _cost_placeholder(self, intent: QueryIntent) -> QueryResult:
        time_period = intent.parameters.get(TIME_PERIOD_PARAM) or "not specified"
        return Failure(
            message=(
                f"Cost data retrieval requires additional configuration. "
                f"Cost Management API access and time-range queries are not set up, "
                f"so costs for '{intent.resource_name}' (time period: {time_period}) cannot be retrieved."
            ),
            code=FAILURE_CODE_NOT_IMPLEMENTED,
        )
