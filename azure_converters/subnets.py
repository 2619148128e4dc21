"""Address extraction for SDK subnet models."""

from typing import Any, List, Optional


def get_subnet_addresses(subnet: Any) -> Optional[List[str]]:
    """
    Return the address ranges of an ``azure.mgmt.network.models.Subnet``.

    A subnet carries either a single ``address_prefix`` or a list of
    ``address_prefixes``. The single prefix wins when both are set.

    Returns:
        List of CIDR prefixes, or None when the subnet has neither field
    """
    if subnet.address_prefix is not None:
        return [subnet.address_prefix]
    if subnet.address_prefixes is not None:
        return list(subnet.address_prefixes)
    return None
