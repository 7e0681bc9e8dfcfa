# ------------------------------
# Module: azure_arm.py
# Description: Cloud directory backed by the Azure Resource Manager SDKs
# ------------------------------

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from azure.core.credentials import TokenCredential
from azure.core.exceptions import AzureError, HttpResponseError, ResourceNotFoundError
from azure.identity import ClientSecretCredential, DefaultAzureCredential
from azure.mgmt.compute import ComputeManagementClient
from azure.mgmt.network import NetworkManagementClient
from azure.mgmt.resource import ResourceManagementClient
from azure.mgmt.sql import SqlManagementClient
from azure.mgmt.storage import StorageManagementClient

from azure_explorer.config import Settings
from azure_explorer.errors import DirectoryError, ResourceNotFound

from .base import CloudDirectory, Record

logger = logging.getLogger(__name__)


def get_credential(settings: Settings) -> TokenCredential:
    '''
      Use the service principal from the environment when it is fully configured,
      otherwise fall back to the default Azure credential chain.
    '''
    if settings.has_client_secret:
        return ClientSecretCredential(settings.tenant_id, settings.client_id, settings.client_secret)
    logger.info("Service principal not configured, using DefaultAzureCredential")
    return DefaultAzureCredential()


def _enum_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return getattr(value, "value", value)


@contextmanager
def _azure_errors(what: str):
    try:
        yield
    except ResourceNotFoundError as e:
        raise ResourceNotFound(f"{what} not found") from e
    except HttpResponseError as e:
        if e.status_code == 404:
            raise ResourceNotFound(f"{what} not found") from e
        error = getattr(e, "error", None)
        code = error.code if error is not None and error.code else str(e.status_code or "HTTP_ERROR")
        raise DirectoryError(e.message or str(e), code) from e
    except AzureError as e:
        raise DirectoryError(str(e), type(e).__name__) from e


class AzureDirectory(CloudDirectory):
    def __init__(self, credential: TokenCredential, subscription_id: str):
        self.subscription_id = subscription_id
        self.resource_client = ResourceManagementClient(credential, subscription_id)
        self.compute_client = ComputeManagementClient(credential, subscription_id)
        self.sql_client = SqlManagementClient(credential, subscription_id)
        self.network_client = NetworkManagementClient(credential, subscription_id)
        self.storage_client = StorageManagementClient(credential, subscription_id)

    # :::::: Resource Manager :::::: #

    def get_resource_group(self, name: str) -> Record:
        with _azure_errors(f"Resource group '{name}'"):
            rg = self.resource_client.resource_groups.get(name)
        return {
            "name": rg.name,
            "location": rg.location,
            "id": rg.id,
            "type": rg.type,
            "provisioning_state": rg.properties.provisioning_state if rg.properties else None,
            "tags": rg.tags,
        }

    def list_resource_groups(self) -> Iterator[Record]:
        with _azure_errors("Resource groups"):
            for rg in self.resource_client.resource_groups.list():
                yield {"name": rg.name, "location": rg.location, "id": rg.id, "type": rg.type}

    def list_resources_in_group(self, group: str) -> Iterator[Record]:
        with _azure_errors(f"Resource group '{group}'"):
            for resource in self.resource_client.resources.list_by_resource_group(group):
                yield {
                    "name": resource.name,
                    "type": resource.type,
                    "location": resource.location,
                    "id": resource.id,
                }

    # :::::: Compute :::::: #

    def get_virtual_machine(self, group: str, name: str) -> Record:
        with _azure_errors(f"Virtual machine '{name}' in '{group}'"):
            vm = self.compute_client.virtual_machines.get(group, name, expand="instanceView")

        statuses = []
        if vm.instance_view and vm.instance_view.statuses:
            statuses = [{"code": s.code, "display_status": s.display_status} for s in vm.instance_view.statuses]

        os_disk = vm.storage_profile.os_disk if vm.storage_profile else None
        return {
            "name": vm.name,
            "id": vm.id,
            "type": vm.type,
            "location": vm.location,
            "provisioning_state": vm.provisioning_state,
            "vm_size": _enum_str(vm.hardware_profile.vm_size) if vm.hardware_profile else None,
            "os_type": _enum_str(os_disk.os_type) if os_disk else None,
            "tags": vm.tags,
            "statuses": statuses,
        }

    # :::::: SQL :::::: #

    def list_sql_servers(self, group: str) -> Iterator[Record]:
        with _azure_errors(f"SQL servers in '{group}'"):
            for server in self.sql_client.servers.list_by_resource_group(group):
                yield {"name": server.name, "location": server.location, "id": server.id, "type": server.type}

    def list_databases(self, group: str, server: str) -> Iterator[Record]:
        with _azure_errors(f"Databases on server '{server}'"):
            for db in self.sql_client.databases.list_by_server(group, server):
                yield {
                    "name": db.name,
                    "id": db.id,
                    "type": db.type,
                    "location": db.location,
                    "status": _enum_str(db.status),
                    "sku_name": db.sku.name if db.sku else None,
                    "sku_tier": db.sku.tier if db.sku else None,
                    "sku_capacity": db.sku.capacity if db.sku else None,
                    "max_size_bytes": db.max_size_bytes,
                    "collation": db.collation,
                }

    # :::::: Network :::::: #

    def _vnet_record(self, vnet) -> Record:
        subnets = [
            {
                "name": s.name,
                "address_prefix": s.address_prefix,
                "ip_configuration_count": len(s.ip_configurations or []),
            }
            for s in (vnet.subnets or [])
        ]
        return {
            "name": vnet.name,
            "id": vnet.id,
            "type": vnet.type,
            "location": vnet.location,
            "address_prefixes": list(vnet.address_space.address_prefixes or []) if vnet.address_space else [],
            "subnets": subnets,
        }

    def get_virtual_network(self, group: str, name: str) -> Record:
        with _azure_errors(f"Virtual network '{name}' in '{group}'"):
            vnet = self.network_client.virtual_networks.get(group, name)
        return self._vnet_record(vnet)

    def list_virtual_networks(self, group: str) -> Iterator[Record]:
        with _azure_errors(f"Virtual networks in '{group}'"):
            for vnet in self.network_client.virtual_networks.list(group):
                yield self._vnet_record(vnet)

    # :::::: Storage :::::: #

    def get_storage_account(self, group: str, name: str) -> Record:
        with _azure_errors(f"Storage account '{name}' in '{group}'"):
            account = self.storage_client.storage_accounts.get_properties(group, name)
        return {
            "name": account.name,
            "id": account.id,
            "type": account.type,
            "location": account.location,
            "kind": _enum_str(account.kind),
            "sku_name": _enum_str(account.sku.name) if account.sku else None,
            "provisioning_state": _enum_str(account.provisioning_state),
            "access_tier": _enum_str(account.access_tier),
            "enable_https_traffic_only": account.enable_https_traffic_only,
        }
