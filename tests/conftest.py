import pytest

from azure_explorer.config import PROJECT_ROOT, Settings
from azure_explorer.context import PipelineContext
from azure_explorer.prompt_store import PromptStore

from fakes import FakeDirectory, FakeLLM, make_resource, make_vm, make_vnet


# -------------------------
# Fixtures
# -------------------------

@pytest.fixture
def prompt_store():
    """The real templates shipped in prompts/."""
    return PromptStore(PROJECT_ROOT / "prompts")


@pytest.fixture
def estate():
    """A small subscription with three resource groups."""
    return FakeDirectory({
        "rg-dev": {
            "location": "westeurope",
            "resources": [make_resource("vm-dev-01", "Microsoft.Compute/virtualMachines", group="rg-dev")],
            "vms": {"vm-dev-01": make_vm("vm-dev-01", "VM deallocated")},
        },
        "rg-network": {
            "location": "eastus",
            "resources": [make_resource("vnet-hub", "Microsoft.Network/virtualNetworks", group="rg-network")],
            "vnets": {
                "vnet-hub": make_vnet("vnet-hub", subnets=(
                    ("GatewaySubnet", "10.0.0.0/27", 1),
                    ("snet-app", "10.0.1.0/24", 4),
                )),
            },
        },
        "rg-prod": {
            "location": "eastus",
            "tags": {"env": "prod"},
            "resources": [
                make_resource("vm-prod-01", "Microsoft.Compute/virtualMachines", group="rg-prod"),
                make_resource("stprod01", "Microsoft.Storage/storageAccounts", group="rg-prod"),
                make_resource("sql-prod", "Microsoft.Sql/servers", group="rg-prod"),
                make_resource("sql-prod/sqldb-orders", "Microsoft.Sql/servers/databases", group="rg-prod"),
            ],
            "vms": {"vm-prod-01": make_vm("vm-prod-01")},
            "servers": {
                "sql-prod": [
                    {"name": "master", "sku_name": "System", "status": "Online"},
                    {
                        "name": "sqldb-Orders",
                        "location": "eastus",
                        "status": "Online",
                        "sku_name": "S1",
                        "sku_tier": "Standard",
                        "sku_capacity": 20,
                        "max_size_bytes": 268435456000,
                        "collation": "SQL_Latin1_General_CP1_CI_AS",
                    },
                ],
            },
            "storage": {
                "stprod01": {
                    "name": "stprod01",
                    "location": "eastus",
                    "kind": "StorageV2",
                    "sku_name": "Standard_LRS",
                    "provisioning_state": "Succeeded",
                    "access_tier": "Hot",
                    "enable_https_traffic_only": True,
                },
            },
        },
    })


@pytest.fixture
def make_context(prompt_store):
    """Build a PipelineContext around fakes."""
    def _make(directory, *replies, resource_groups=None):
        return PipelineContext(
            directory=directory,
            llm=FakeLLM(*replies),
            prompt_store=prompt_store,
            settings=Settings(subscription_id="sub-1", resource_groups=resource_groups),
        )
    return _make
