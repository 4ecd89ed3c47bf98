"""
Tests for the in-memory persistence adapter.
"""

import pytest

from mountflow.core.exceptions import FieldError, ValidationError
from mountflow.core.in_memory_adapter import InMemoryAdapter, mount_id_for_path
from mountflow.core.resource_store import ResourceStore

pytestmark = pytest.mark.asyncio


async def test_mount_requires_type_and_path(store):
    record = store.create_record("auth-method", type=None, path="")
    with pytest.raises(ValidationError) as exc_info:
        await record.save()
    assert exc_info.value.messages == ["type can't be blank", "path can't be blank"]


async def test_duplicate_path_is_rejected(store):
    first = store.create_record("secret-engine", type="kv", path="kv/")
    await first.save()
    second = store.create_record("secret-engine", type="kv", path="kv")

    with pytest.raises(ValidationError) as exc_info:
        await second.save()

    assert exc_info.value.messages == ["path is already in use at kv/"]


async def test_same_path_in_other_category_is_allowed(store):
    await store.create_record("secret-engine", type="aws", path="aws").save()
    await store.create_record("auth-method", type="aws", path="aws").save()
    assert len(await store.find_all("auth-method")) == 1


async def test_resaving_persisted_mount_keeps_its_id(store):
    record = store.create_record("secret-engine", type="kv", path="kv/")
    await record.save()
    record.set("description", "team secrets")
    await record.save()
    listed = await store.find_all("secret-engine")
    assert [m["id"] for m in listed] == ["kv"]
    assert listed[0]["description"] == "team secrets"


async def test_config_takes_backend_id(store):
    mount = store.create_record("auth-method", type="github", path="github-org/")
    await mount.save()
    config = store.create_record("auth-config/github", backend=mount, organization="acme")
    await config.save()
    assert config.id == "github-org"


async def test_custom_rules_are_applied():
    adapter = InMemoryAdapter()
    adapter.add_rule(
        "auth-config/aws/client",
        lambda attrs: [] if attrs.get("region") else [FieldError("region", "region is required")],
    )
    store = ResourceStore(adapter)
    config = store.create_record("auth-config/aws/client", access_key="AKIA")

    with pytest.raises(ValidationError) as exc_info:
        await config.save()

    assert exc_info.value.messages == ["region is required"]


async def test_seeded_default_mounts():
    adapter = InMemoryAdapter(seed_default_mounts=True)
    secret_ids = {m["id"] for m in await adapter.list_records("secret-engine")}
    auth_ids = {m["id"] for m in await adapter.list_records("auth-method")}
    assert secret_ids == {"cubbyhole", "identity", "sys"}
    assert auth_ids == {"token"}


async def test_mount_id_strips_slashes():
    assert mount_id_for_path("kv/") == "kv"
    assert mount_id_for_path("/team/kv/") == "team/kv"
