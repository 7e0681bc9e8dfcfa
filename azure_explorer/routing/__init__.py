# azure_explorer/routing/__init__.py
from .group_resolver import ResourceGroupResolver
from .resource_router import ResourceRouter
