"""
strategies.py
Per resource type lookup strategies used by the resource router.

Each strategy knows how to locate its resource inside a single resource group
and how to shape what it found. The shared run() walks the groups lazily and
stops at the first group that has a match.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Sequence

from azure_explorer.ai_workflow.data_model import (
    Failure, Intent, QueryIntent, QueryResult, ResourceType, Success
)
from azure_explorer.constants import FAILURE_CODE_NOT_FOUND, POWER_STATE_PREFIX
from azure_explorer.directory import CloudDirectory, Record
from azure_explorer.errors import DirectoryError, ResourceNotFound

logger = logging.getLogger(__name__)


def same_name(left: Optional[str], right: Optional[str]) -> bool:
    return (left or "").lower() == (right or "").lower()


def get_or_none(fetch: Callable[..., Record], *args: Any) -> Optional[Record]:
    '''
      Call a directory getter, mapping "not found" to None.
    '''
    try:
        return fetch(*args)
    except ResourceNotFound:
        return None


class LookupStrategy(ABC):
    label = "Resource"
    scans_groups = True

    @abstractmethod
    def locate(self, directory: CloudDirectory, group: str, intent: QueryIntent) -> Optional[Dict[str, Any]]:
        """Return the shaped result data if the resource is in this group, else None."""
        pass

    def not_found_message(self, intent: QueryIntent) -> str:
        return f"{self.label} '{intent.resource_name}' not found in any accessible resource group"

    def run(self, directory: CloudDirectory, intent: QueryIntent, groups: Sequence[str]) -> QueryResult:
        """First match wins: earliest group, then earliest entity inside it."""
        matches = (self.locate(directory, group, intent) for group in groups)
        data = next((match for match in matches if match is not None), None)

        if data is None:
            logger.info(f"{self.label} '{intent.resource_name}' not found after searching {len(groups)} resource group(s)")
            return Failure(message=self.not_found_message(intent), code=FAILURE_CODE_NOT_FOUND)

        return Success(data=data)


class VirtualMachineStrategy(LookupStrategy):
    label = "Virtual Machine"

    def locate(self, directory, group, intent):
        vm = get_or_none(directory.get_virtual_machine, group, intent.resource_name)
        if vm is None:
            return None

        status = {
            "name": vm.get("name"),
            "resourceGroup": group,
            "powerState": power_state(vm),
            "provisioningState": vm.get("provisioning_state"),
            "location": vm.get("location"),
        }
        configuration = {
            "name": vm.get("name"),
            "resourceGroup": group,
            "vmSize": vm.get("vm_size"),
            "osType": vm.get("os_type"),
            "location": vm.get("location"),
            "tags": vm.get("tags"),
        }

        if intent.intent == Intent.GET_STATUS:
            return status
        if intent.intent == Intent.GET_CONFIGURATION:
            return configuration
        return {**status, **configuration}


def power_state(vm: Record) -> str:
    for status in vm.get("statuses") or []:
        if (status.get("code") or "").startswith(POWER_STATE_PREFIX):
            return status.get("display_status") or "Unknown"
    return "Unknown"


class DatabaseStrategy(LookupStrategy):
    label = "Database"

    def locate(self, directory, group, intent):
        try:
            for server in directory.list_sql_servers(group):
                match = self._find_on_server(directory, group, server["name"], intent.resource_name)
                if match is not None:
                    return match
        except ResourceNotFound:
            return None
        except DirectoryError as e:
            logger.error(f"Error in resource group {group}: {e}")
        return None

    def _find_on_server(self, directory, group, server_name, db_name):
        try:
            for db in directory.list_databases(group, server_name):
                if same_name(db.get("name"), db_name):
                    return {
                        "name": db.get("name"),
                        "serverName": server_name,
                        "resourceGroup": group,
                        "sku": db.get("sku_name"),
                        "tier": db.get("sku_tier"),
                        "capacity": db.get("sku_capacity"),
                        "status": db.get("status"),
                        "location": db.get("location"),
                        "maxSizeBytes": db.get("max_size_bytes"),
                        "collation": db.get("collation"),
                    }
        except (ResourceNotFound, DirectoryError) as e:
            logger.error(f"Error querying databases on server {server_name}: {e}")
        return None


def subnet_breakdown(vnet: Record, group: str, with_resource_count: bool = True) -> Dict[str, Any]:
    subnets = []
    for subnet in vnet.get("subnets") or []:
        summary = {"name": subnet.get("name"), "addressPrefix": subnet.get("address_prefix")}
        if with_resource_count:
            summary["resourceCount"] = subnet.get("ip_configuration_count", 0)
        subnets.append(summary)

    return {
        "vnetName": vnet.get("name"),
        "resourceGroup": group,
        "subnetCount": len(subnets),
        "subnets": subnets,
    }


class VirtualNetworkStrategy(LookupStrategy):
    label = "Virtual Network"

    def locate(self, directory, group, intent):
        vnet = get_or_none(directory.get_virtual_network, group, intent.resource_name)
        if vnet is None:
            return None

        if intent.intent == Intent.COUNT_RESOURCES or "subnet" in (intent.resource_name or "").lower():
            return subnet_breakdown(vnet, group)

        subnets = vnet.get("subnets") or []
        return {
            "name": vnet.get("name"),
            "resourceGroup": group,
            "location": vnet.get("location"),
            "addressSpace": vnet.get("address_prefixes"),
            "subnetCount": len(subnets),
            "subnets": [s.get("name") for s in subnets],
        }


class SubnetStrategy(LookupStrategy):
    label = "Subnet"

    def not_found_message(self, intent):
        return f"Could not find subnet information for '{intent.resource_name}'"

    def locate(self, directory, group, intent):
        try:
            for vnet in directory.list_virtual_networks(group):
                if same_name(vnet.get("name"), intent.resource_name):
                    return subnet_breakdown(vnet, group, with_resource_count=False)
        except (ResourceNotFound, DirectoryError) as e:
            logger.error(f"Error querying VNets in {group}: {e}")
        return None


class StorageAccountStrategy(LookupStrategy):
    label = "Storage Account"

    def locate(self, directory, group, intent):
        account = get_or_none(directory.get_storage_account, group, intent.resource_name)
        if account is None:
            return None

        return {
            "name": account.get("name"),
            "resourceGroup": group,
            "sku": account.get("sku_name"),
            "kind": account.get("kind"),
            "location": account.get("location"),
            "provisioningState": account.get("provisioning_state"),
            "accessTier": account.get("access_tier"),
            "enableHttpsTrafficOnly": account.get("enable_https_traffic_only"),
        }


class ResourceGroupStrategy(LookupStrategy):
    """A resource group is looked up by name directly, never scanned for."""
    label = "Resource Group"
    scans_groups = False

    def locate(self, directory, group, intent):
        return get_or_none(directory.get_resource_group, group)

    def run(self, directory, intent, groups=()):
        rg = self.locate(directory, intent.resource_name, intent)
        if rg is None:
            return Failure(message=f"{self.label} '{intent.resource_name}' not found", code=FAILURE_CODE_NOT_FOUND)

        if intent.intent in (Intent.LIST_RESOURCES, Intent.COUNT_RESOURCES):
            resources = [
                {"name": r.get("name"), "type": r.get("type"), "location": r.get("location")}
                for r in directory.list_resources_in_group(rg["name"])
            ]
            data = {
                "resourceGroup": rg.get("name"),
                "location": rg.get("location"),
                "resourceCount": len(resources),
            }
            if intent.intent == Intent.LIST_RESOURCES:
                data["resources"] = resources
            return Success(data=data)

        return Success(data={
            "name": rg.get("name"),
            "location": rg.get("location"),
            "provisioningState": rg.get("provisioning_state"),
            "tags": rg.get("tags"),
        })


class GenericResourceStrategy(LookupStrategy):
    label = "Resource"

    def not_found_message(self, intent):
        if intent.resource_type and intent.resource_type != ResourceType.GENERIC:
            return f"Resource '{intent.resource_name}' of type '{intent.resource_type}' not found in any accessible resource group"
        return super().not_found_message(intent)

    def locate(self, directory, group, intent):
        try:
            for resource in directory.list_resources_in_group(group):
                if same_name(resource.get("name"), intent.resource_name):
                    return {
                        "name": resource.get("name"),
                        "type": resource.get("type"),
                        "resourceGroup": group,
                        "location": resource.get("location"),
                        "id": resource.get("id"),
                    }
        except ResourceNotFound:
            logger.info(f"Resource group {group} not found, skipping")
        return None

    def run(self, directory, intent, groups):
        if not intent.resource_name:
            return Failure(
                message="No resource name was given. Please name the resource you are asking about.",
                code=FAILURE_CODE_NOT_FOUND,
            )
        return super().run(directory, intent, groups)


GENERIC_STRATEGY = GenericResourceStrategy()

STRATEGIES: Dict[str, LookupStrategy] = {
    ResourceType.VIRTUAL_MACHINE.value: VirtualMachineStrategy(),
    ResourceType.DATABASE.value: DatabaseStrategy(),
    ResourceType.VIRTUAL_NETWORK.value: VirtualNetworkStrategy(),
    ResourceType.SUBNET.value: SubnetStrategy(),
    ResourceType.STORAGE_ACCOUNT.value: StorageAccountStrategy(),
    ResourceType.RESOURCE_GROUP.value: ResourceGroupStrategy(),
    ResourceType.GENERIC.value: GENERIC_STRATEGY,
}
