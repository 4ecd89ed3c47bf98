"""
Config-type resolution for auth method mounts.

Maps (category, backend type) to the model name of the secondary config
record that must be created for a new mount, or None when the mount carries
no config.
"""

from enum import Enum
from typing import Dict, Optional, Union

from ..models import MountCategory

CONFIG_PREFIX = "auth-config"


class AuthMethodType(str, Enum):
    ALICLOUD = "alicloud"
    APPROLE = "approle"
    AWS = "aws"
    AZURE = "azure"
    CERT = "cert"
    GCP = "gcp"
    GITHUB = "github"
    JWT = "jwt"
    KUBERNETES = "kubernetes"
    LDAP = "ldap"
    OIDC = "oidc"
    OKTA = "okta"
    RADIUS = "radius"
    USERPASS = "userpass"


def _generic(method: AuthMethodType) -> str:
    return f"{CONFIG_PREFIX}/{method.value}"


# Every member is listed so a new method type has to be placed here explicitly
CONFIG_TYPES: Dict[AuthMethodType, Optional[str]] = {
    AuthMethodType.ALICLOUD: _generic(AuthMethodType.ALICLOUD),
    AuthMethodType.APPROLE: None,  # nothing configurable at mount time
    AuthMethodType.AWS: f"{CONFIG_PREFIX}/aws/client",
    AuthMethodType.AZURE: _generic(AuthMethodType.AZURE),
    AuthMethodType.CERT: _generic(AuthMethodType.CERT),
    AuthMethodType.GCP: _generic(AuthMethodType.GCP),
    AuthMethodType.GITHUB: _generic(AuthMethodType.GITHUB),
    AuthMethodType.JWT: _generic(AuthMethodType.JWT),
    AuthMethodType.KUBERNETES: _generic(AuthMethodType.KUBERNETES),
    AuthMethodType.LDAP: _generic(AuthMethodType.LDAP),
    AuthMethodType.OIDC: _generic(AuthMethodType.OIDC),
    AuthMethodType.OKTA: _generic(AuthMethodType.OKTA),
    AuthMethodType.RADIUS: _generic(AuthMethodType.RADIUS),
    AuthMethodType.USERPASS: _generic(AuthMethodType.USERPASS),
}


def resolve_config_type(category: Union[MountCategory, str], backend_type: Optional[str]) -> Optional[str]:
    """
    Resolve the config model for a backend type.

    Rules, in order:
        1. secret engines never carry a config -> None
        2. excluded auth methods (approle) -> None
        3. specialized variants (aws -> auth-config/aws/client)
        4. anything else -> auth-config/<type>

    Pure and total: every input maps to a value, nothing raises.
    """
    if category == MountCategory.SECRET:
        return None
    if not backend_type:
        return None

    try:
        method = AuthMethodType(backend_type)
    except ValueError:
        return f"{CONFIG_PREFIX}/{backend_type}"
    return CONFIG_TYPES[method]
