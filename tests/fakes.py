"""In-memory stand-ins for the language model and the Azure directory."""

from typing import Any, Dict, List, Optional

from azure_explorer.directory import CloudDirectory
from azure_explorer.errors import ResourceNotFound


class FakeLLM:
    """Returns queued replies in order. A queued exception is raised instead."""

    def __init__(self, *replies: Any):
        self.replies = list(replies)
        self.calls: List[Dict[str, Any]] = []

    def complete(self, system_prompt, user_content, temperature, max_tokens):
        self.calls.append({
            "system_prompt": system_prompt,
            "user_content": user_content,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeDirectory(CloudDirectory):
    """
    Groups are described as:
        {"rg-name": {"location": ..., "resources": [...], "vms": {name: record},
                     "servers": {server: [db records]}, "vnets": {name: record},
                     "storage": {name: record}}}

    Every call is recorded in self.calls as (method, *args). Errors maps the same
    tuple to an exception raised instead of answering.
    """

    def __init__(self, groups: Optional[Dict[str, Dict[str, Any]]] = None, errors=None):
        self.groups = groups or {}
        self.errors = errors or {}
        self.calls: List[tuple] = []

    def _call(self, *call):
        self.calls.append(call)
        if call in self.errors:
            raise self.errors[call]

    def _group(self, group):
        if group not in self.groups:
            raise ResourceNotFound(f"Resource group '{group}' not found")
        return self.groups[group]

    def _named(self, group, section, name):
        records = self._group(group).get(section, {})
        if name not in records:
            raise ResourceNotFound(f"'{name}' not found in '{group}'")
        return records[name]

    def get_resource_group(self, name):
        self._call("get_resource_group", name)
        group = self._group(name)
        return {
            "name": name,
            "location": group.get("location", "eastus"),
            "id": f"/subscriptions/sub-1/resourceGroups/{name}",
            "provisioning_state": "Succeeded",
            "tags": group.get("tags"),
        }

    def list_resource_groups(self):
        self._call("list_resource_groups")
        return [{"name": name, "location": g.get("location", "eastus")} for name, g in self.groups.items()]

    def list_resources_in_group(self, group):
        self._call("list_resources_in_group", group)
        return list(self._group(group).get("resources", []))

    def get_virtual_machine(self, group, name):
        self._call("get_virtual_machine", group, name)
        return self._named(group, "vms", name)

    def list_sql_servers(self, group):
        self._call("list_sql_servers", group)
        return [{"name": server} for server in self._group(group).get("servers", {})]

    def list_databases(self, group, server):
        self._call("list_databases", group, server)
        return list(self._group(group)["servers"][server])

    def get_virtual_network(self, group, name):
        self._call("get_virtual_network", group, name)
        return self._named(group, "vnets", name)

    def list_virtual_networks(self, group):
        self._call("list_virtual_networks", group)
        return list(self._group(group).get("vnets", {}).values())

    def get_storage_account(self, group, name):
        self._call("get_storage_account", group, name)
        return self._named(group, "storage", name)


def make_vm(name, power_state="VM running", location="eastus"):
    return {
        "name": name,
        "location": location,
        "provisioning_state": "Succeeded",
        "vm_size": "Standard_D2s_v3",
        "os_type": "Linux",
        "tags": {"env": "prod"},
        "statuses": [
            {"code": "ProvisioningState/succeeded", "display_status": "Provisioning succeeded"},
            {"code": "PowerState/running", "display_status": power_state},
        ],
    }


def make_vnet(name, subnets=(("default", "10.0.0.0/24", 2),), location="eastus"):
    return {
        "name": name,
        "location": location,
        "address_prefixes": ["10.0.0.0/16"],
        "subnets": [
            {"name": s, "address_prefix": prefix, "ip_configuration_count": count}
            for s, prefix, count in subnets
        ],
    }


def make_resource(name, type_, location="eastus", group="rg"):
    return {
        "name": name,
        "type": type_,
        "location": location,
        "id": f"/subscriptions/sub-1/resourceGroups/{group}/providers/{type_}/{name}",
    }
