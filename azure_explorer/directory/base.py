# azure_explorer/directory/base.py
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable

# Every record is a plain dict. Common keys: name, type, location, id.
Record = Dict[str, Any]


class CloudDirectory(ABC):
    """Abstract base class that defines the lookups the resource router relies on.

    Implementations raise ResourceNotFound when the named resource does not exist
    in the given scope, and DirectoryError for any other failure.
    """

    # :::::: Resource Manager :::::: #

    @abstractmethod
    def get_resource_group(self, name: str) -> Record:
        """Return {name, location, id, provisioning_state, tags}."""
        pass

    @abstractmethod
    def list_resource_groups(self) -> Iterable[Record]:
        """Every resource group visible to the current credentials."""
        pass

    @abstractmethod
    def list_resources_in_group(self, group: str) -> Iterable[Record]:
        """Return {name, type, location, id} for every resource in the group."""
        pass

    # :::::: Compute :::::: #

    @abstractmethod
    def get_virtual_machine(self, group: str, name: str) -> Record:
        """Return the VM with its instance view.

        Keys: name, location, provisioning_state, vm_size, os_type, tags,
        statuses (list of {code, display_status}).
        """
        pass

    # :::::: SQL :::::: #

    @abstractmethod
    def list_sql_servers(self, group: str) -> Iterable[Record]:
        pass

    @abstractmethod
    def list_databases(self, group: str, server: str) -> Iterable[Record]:
        """Keys: name, location, status, sku_name, sku_tier, sku_capacity, max_size_bytes, collation."""
        pass

    # :::::: Network :::::: #

    @abstractmethod
    def get_virtual_network(self, group: str, name: str) -> Record:
        """Keys: name, location, address_prefixes, subnets (list of {name, address_prefix, ip_configuration_count})."""
        pass

    @abstractmethod
    def list_virtual_networks(self, group: str) -> Iterable[Record]:
        pass

    # :::::: Storage :::::: #

    @abstractmethod
    def get_storage_account(self, group: str, name: str) -> Record:
        """Keys: name, location, kind, sku_name, provisioning_state, access_tier, enable_https_traffic_only."""
        pass
