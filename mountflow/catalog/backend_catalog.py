"""Static catalog of mountable secret engines and auth methods."""

from typing import Dict, List, Optional, Set, Tuple

from ..core.exceptions import UnknownCategoryError
from ..models import BackendGroup, BackendTypeInfo, MountCategory

_G = BackendGroup

SECRET_ENGINES: List[Tuple[str, str, BackendGroup]] = [
    ("ad", "Active Directory", _G.CLOUD),
    ("alicloud", "AliCloud", _G.CLOUD),
    ("aws", "AWS", _G.CLOUD),
    ("azure", "Azure", _G.CLOUD),
    ("consul", "Consul", _G.INFRA),
    ("database", "Databases", _G.INFRA),
    ("gcp", "Google Cloud", _G.CLOUD),
    ("gcpkms", "Google Cloud KMS", _G.CLOUD),
    ("kv", "KV", _G.GENERIC),
    ("nomad", "Nomad", _G.INFRA),
    ("pki", "PKI Certificates", _G.GENERIC),
    ("rabbitmq", "RabbitMQ", _G.INFRA),
    ("ssh", "SSH", _G.GENERIC),
    ("totp", "TOTP", _G.GENERIC),
    ("transit", "Transit", _G.GENERIC),
]

AUTH_METHODS: List[Tuple[str, str, BackendGroup]] = [
    ("alicloud", "AliCloud", _G.CLOUD),
    ("approle", "AppRole", _G.GENERIC),
    ("aws", "AWS", _G.CLOUD),
    ("azure", "Azure", _G.CLOUD),
    ("gcp", "Google Cloud", _G.CLOUD),
    ("github", "GitHub", _G.CLOUD),
    ("jwt", "JWT", _G.GENERIC),
    ("oidc", "OIDC", _G.GENERIC),
    ("kubernetes", "Kubernetes", _G.INFRA),
    ("ldap", "LDAP", _G.GENERIC),
    ("okta", "Okta", _G.INFRA),
    ("radius", "RADIUS", _G.INFRA),
    ("cert", "TLS Certificates", _G.GENERIC),
    ("userpass", "Username & Password", _G.GENERIC),
]


def _coerce_category(category) -> MountCategory:
    try:
        return MountCategory(category)
    except ValueError:
        raise UnknownCategoryError(str(category))


class BackendCatalog:
    """Read-only lookup over the mountable backend tables."""

    def __init__(self):
        self._entries: Dict[MountCategory, List[BackendTypeInfo]] = {
            MountCategory.SECRET: [
                BackendTypeInfo(type=t, display_name=name, category=MountCategory.SECRET, group=group)
                for t, name, group in SECRET_ENGINES
            ],
            MountCategory.AUTH: [
                BackendTypeInfo(type=t, display_name=name, category=MountCategory.AUTH, group=group)
                for t, name, group in AUTH_METHODS
            ],
        }

    def types_for(self, category) -> List[BackendTypeInfo]:
        return list(self._entries[_coerce_category(category)])

    def type_ids(self, category) -> Set[str]:
        return {entry.type for entry in self._entries[_coerce_category(category)]}

    def get(self, category, backend_type: str) -> Optional[BackendTypeInfo]:
        for entry in self._entries[_coerce_category(category)]:
            if entry.type == backend_type:
                return entry
        return None

    def is_catalog_type(self, category, value: Optional[str]) -> bool:
        """True when ``value`` is one of the category's type identifiers."""
        return bool(value) and value in self.type_ids(category)
