import pytest

from mountflow.core.exceptions import UnknownCategoryError
from mountflow.models import BackendGroup, MountCategory


def test_type_ids_per_category(catalog):
    assert "kv" in catalog.type_ids(MountCategory.SECRET)
    assert "kv" not in catalog.type_ids(MountCategory.AUTH)
    assert {"approle", "aws", "userpass"} <= catalog.type_ids("auth")


def test_get_entry(catalog):
    entry = catalog.get(MountCategory.AUTH, "userpass")
    assert entry.display_name == "Username & Password"
    assert entry.category == MountCategory.AUTH
    assert catalog.get(MountCategory.AUTH, "pki") is None


def test_groups(catalog):
    consul = catalog.get(MountCategory.SECRET, "consul")
    assert consul.group == BackendGroup.INFRA


def test_is_catalog_type(catalog):
    assert catalog.is_catalog_type(MountCategory.SECRET, "consul")
    assert not catalog.is_catalog_type(MountCategory.SECRET, "my-custom-path")
    assert not catalog.is_catalog_type(MountCategory.SECRET, "")


def test_unknown_category(catalog):
    with pytest.raises(UnknownCategoryError):
        catalog.types_for("plugin")
