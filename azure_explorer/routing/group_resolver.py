"""
group_resolver.py
Decides which resource groups a query searches, and in which order.
"""

import logging
from typing import Optional

from azure_explorer.ai_workflow.data_model import ResourceGroupSet
from azure_explorer.directory import CloudDirectory

logger = logging.getLogger(__name__)


def split_group_list(configured_groups: Optional[str]) -> ResourceGroupSet:
    '''
      Split a comma separated group list, trimming names and dropping blanks.
    '''
    if not configured_groups:
        return ()
    return tuple(name.strip() for name in configured_groups.split(",") if name.strip())


class ResourceGroupResolver:
    """Resolves the search space per request. Nothing is cached."""

    def __init__(self, directory: CloudDirectory, configured_groups: Optional[str] = None):
        self.directory = directory
        self.configured_groups = split_group_list(configured_groups)

    def resolve(self, explicit_group: Optional[str] = None) -> ResourceGroupSet:
        """
        Priority order:
        1. the group named in the question
        2. the configured RESOURCE_GROUPS allow-list
        3. every group the credentials can see, in enumeration order
        """
        if explicit_group and explicit_group.strip():
            return (explicit_group.strip(),)

        if self.configured_groups:
            return self.configured_groups

        groups = tuple(rg["name"] for rg in self.directory.list_resource_groups())
        logger.info(f"Enumerated {len(groups)} resource groups")
        return groups
