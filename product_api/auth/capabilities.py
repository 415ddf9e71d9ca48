"""
Capabilities gating product operations and the route requirements
"""

from enum import Enum
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

from product_api.core.config import Config, config


class Capability(str, Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


# (method, path) -> capability the caller must hold; None means ungated
ROUTE_CAPABILITIES: Mapping[Tuple[str, str], Optional[Capability]] = {
    ("GET", "/products"): None,
    ("GET", "/products/{product_id}"): None,
    ("GET", "/products/bycat/{cat_id}"): None,
    ("POST", "/products"): Capability.CREATE,
    ("PUT", "/products"): Capability.UPDATE,
    ("DELETE", "/products/{product_id}"): Capability.DELETE,
}


def permission_map(settings: Config = config) -> Dict[str, Capability]:
    """Permission strings carried in tokens, keyed to the capability each grants"""
    return {
        settings.create_permission: Capability.CREATE,
        settings.update_permission: Capability.UPDATE,
        settings.delete_permission: Capability.DELETE,
    }


def _as_strings(value) -> Iterable[str]:
    if isinstance(value, str):
        # space-delimited, as in an OAuth "scope" claim
        return value.split()
    if isinstance(value, (list, tuple, set, frozenset)):
        return [v for v in value if isinstance(v, str)]
    return []


def capabilities_from_claims(claims: Mapping, settings: Config = config) -> FrozenSet[Capability]:
    """
    Derive granted capabilities from verified token claims.

    Reading is always granted. Each recognised permission grants its
    capability; the admin role grants all of them. Unknown permissions are
    ignored.
    """
    roles = {r.lower() for r in _as_strings(claims.get(settings.roles_claim))}
    if settings.admin_role.lower() in roles:
        return frozenset(Capability)

    permissions = permission_map(settings)
    granted = {Capability.READ}
    for permission in _as_strings(claims.get(settings.permissions_claim)):
        capability = permissions.get(permission)
        if capability is not None:
            granted.add(capability)
    return frozenset(granted)
