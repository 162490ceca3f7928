"""Tests for on-chain object field extraction."""

from __future__ import annotations

import pytest

from domain.services.chain_object_fields import (
    blob_record_from_chain_object,
    extract_blob_id,
    extract_deletable_flag,
    extract_domain_name,
    extract_end_epoch,
    extract_object_id,
    extract_owner,
    extract_storage_rebate,
    extract_target_site,
    field_map,
)
from tests.factories import blob_id

RPC_BLOB_OBJECT = {
    "data": {
        "objectId": "0xstorage1",
        "owner": {"AddressOwner": "0xalice"},
        "storageRebate": "1500",
        "content": {
            "fields": {
                "blob_id": str(int(blob_id(255), 16)),
                "size": "4096",
                "registered_epoch": 40,
                "deletable": True,
                "storage": {"fields": {"end_epoch": "60"}},
            },
        },
    },
}


class TestFieldMap:
    """Test that every known payload shape resolves to its field map."""

    @pytest.mark.parametrize(
        "obj",
        [
            {"data": {"content": {"fields": {"size": 1}}}},
            {"content": {"fields": {"size": 1}}},
            {"fields": {"size": 1}},
            {"size": 1},
        ],
    )
    def test_shapes(self, obj: dict) -> None:
        """Test nested, partially nested and flat shapes."""
        assert field_map(obj) == {"size": 1}

    def test_non_mapping(self) -> None:
        """Test that a non-mapping payload yields an empty field map."""
        assert field_map(["not", "a", "map"]) == {}
        assert field_map(None) == {}


class TestExtractors:
    """Test individual typed extractors."""

    def test_blob_id_from_decimal(self) -> None:
        """Test that a decimal u256 blob id is converted to hex."""
        assert extract_blob_id(RPC_BLOB_OBJECT) == blob_id(255)

    def test_blob_id_from_hex(self) -> None:
        """Test that a hex blob id is lower-cased."""
        assert extract_blob_id({"blobId": "AB" * 32}) == "ab" * 32

    @pytest.mark.parametrize("value", ["not-an-id", -1, str(2**256), None, True])
    def test_blob_id_invalid(self, value: object) -> None:
        """Test that unusable blob ids yield None."""
        assert extract_blob_id({"blob_id": value}) is None

    def test_storage_rebate_from_envelope(self) -> None:
        """Test that the envelope rebate is used when fields carry none."""
        assert extract_storage_rebate(RPC_BLOB_OBJECT) == 1500

    def test_storage_rebate_from_fields(self) -> None:
        """Test that a field-level rebate wins."""
        assert extract_storage_rebate({"fields": {"storage_rebate": 7}}) == 7

    def test_end_epoch(self) -> None:
        """Test nested and flat end epochs."""
        assert extract_end_epoch(RPC_BLOB_OBJECT) == 60
        assert extract_end_epoch({"end_epoch": 3}) == 3

    def test_deletable_flag_requires_bool(self) -> None:
        """Test that only a real boolean is accepted."""
        assert extract_deletable_flag({"deletable": True}) is True
        assert extract_deletable_flag({"deletable": "true"}) is None

    def test_object_id(self) -> None:
        """Test envelope and nested object ids."""
        assert extract_object_id(RPC_BLOB_OBJECT) == "0xstorage1"
        assert extract_object_id({"fields": {"id": {"id": "0xnested"}}}) == "0xnested"

    def test_owner(self) -> None:
        """Test bare and wrapped owners."""
        assert extract_owner("0xbob") == "0xbob"
        assert extract_owner({"ObjectOwner": "0xparent"}) == "0xparent"
        assert extract_owner({"Shared": {}}) is None
        assert extract_owner("") is None

    def test_name_record(self) -> None:
        """Test domain and target extraction from a name record."""
        record = {
            "fields": {
                "name": {"fields": {"name": "mysite.sui"}},
                "target_address": "0xsite",
            },
        }

        assert extract_domain_name(record) == "mysite.sui"
        assert extract_target_site(record) == "0xsite"
        assert extract_domain_name({"domain_name": ""}) is None


class TestBlobRecordFromChainObject:
    """Test assembly of a BlobRecord."""

    def test_full_rpc_object(self) -> None:
        """Test that every field is read from a full RPC response."""
        record = blob_record_from_chain_object(RPC_BLOB_OBJECT, current_epoch=50)

        assert record is not None
        assert record.id == blob_id(255)
        assert record.size_bytes == 4096
        assert record.created_epoch == 40
        assert record.deletable_flag is True
        assert record.expired is False
        assert record.owner_address == "0xalice"
        assert record.storage_object_id == "0xstorage1"
        assert record.storage_rebate_units == 1500

    def test_expired_after_end_epoch(self) -> None:
        """Test that a past end epoch marks the blob expired."""
        record = blob_record_from_chain_object(RPC_BLOB_OBJECT, current_epoch=61)

        assert record is not None
        assert record.expired is True

    def test_explicit_owner_and_type(self) -> None:
        """Test that caller-supplied owner and content type take precedence."""
        record = blob_record_from_chain_object(
            RPC_BLOB_OBJECT,
            current_epoch=0,
            owner_address="0xcaller",
            declared_content_type="image/png",
        )

        assert record is not None
        assert record.owner_address == "0xcaller"
        assert record.declared_content_type == "image/png"

    def test_minimal_and_malformed_fields(self) -> None:
        """Test that missing or negative values degrade to safe defaults."""
        record = blob_record_from_chain_object(
            {"blob_id": blob_id(1), "size": -5, "registered_epoch": "x"},
            current_epoch=10,
        )

        assert record is not None
        assert record.size_bytes is None
        assert record.created_epoch is None
        assert record.deletable_flag is False
        assert record.expired is False
        assert record.storage_rebate_units == 0

    def test_without_blob_id(self) -> None:
        """Test that an object with no blob id is not a blob."""
        assert blob_record_from_chain_object({"size": 1}, current_epoch=1) is None
