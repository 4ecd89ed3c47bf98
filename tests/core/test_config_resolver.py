"""
Tests for config-type resolution.
"""

import pytest

from mountflow.core.config_resolver import (
    CONFIG_TYPES,
    AuthMethodType,
    resolve_config_type,
)
from mountflow.models import MountCategory


def test_approle_has_no_config():
    assert resolve_config_type(MountCategory.AUTH, "approle") is None


def test_aws_resolves_to_client_config():
    assert resolve_config_type(MountCategory.AUTH, "aws") == "auth-config/aws/client"


def test_generic_config_type_is_namespaced():
    assert resolve_config_type(MountCategory.AUTH, "ssh") == "auth-config/ssh"
    assert resolve_config_type(MountCategory.AUTH, "userpass") == "auth-config/userpass"


@pytest.mark.parametrize("backend_type", ["aws", "kv", "userpass", "approle", "anything"])
def test_secret_category_never_has_config(backend_type):
    assert resolve_config_type(MountCategory.SECRET, backend_type) is None


def test_plain_string_categories_are_accepted():
    assert resolve_config_type("secret", "aws") is None
    assert resolve_config_type("auth", "github") == "auth-config/github"


def test_missing_type_has_no_config():
    assert resolve_config_type(MountCategory.AUTH, None) is None
    assert resolve_config_type(MountCategory.AUTH, "") is None


def test_every_method_type_is_in_table():
    assert set(CONFIG_TYPES) == set(AuthMethodType)
    assert CONFIG_TYPES[AuthMethodType.LDAP] == "auth-config/ldap"
