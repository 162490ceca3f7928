"""Typed extraction of fields from heterogeneous on-chain object payloads.

Objects arrive in several shapes depending on which client produced them (full RPC
responses, CLI ``--json`` output, bare field maps). Each extractor lists the known
shapes as explicit paths, tried in order, and returns an optional typed value
instead of probing nested properties ad hoc.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from domain.value_objects.blob_record import BLOB_ID_PATTERN, BlobRecord

Path = tuple[str, ...]

# Where the move-object field map lives, per payload shape.
FIELD_MAP_PATHS: tuple[Path, ...] = (
    ("data", "content", "fields"),  # RPC getObject / CLI `client object --json`
    ("content", "fields"),  # RPC object data without the response envelope
    ("fields",),  # dynamic field / nested struct
)

DELETABLE_PATHS: tuple[Path, ...] = (("deletable",), ("is_deletable",))
STORAGE_REBATE_PATHS: tuple[Path, ...] = (("storage_rebate",), ("storageRebate",))
END_EPOCH_PATHS: tuple[Path, ...] = (
    ("storage", "fields", "end_epoch"),
    ("end_epoch",),
)
CREATED_EPOCH_PATHS: tuple[Path, ...] = (("registered_epoch",), ("created_epoch",))
SIZE_PATHS: tuple[Path, ...] = (("size",),)
BLOB_ID_PATHS: tuple[Path, ...] = (("blob_id",), ("blobId",))
DOMAIN_NAME_PATHS: tuple[Path, ...] = (("name", "fields", "name"), ("domain_name",))
TARGET_SITE_PATHS: tuple[Path, ...] = (
    ("target_address",),
    ("data", "fields", "target_address"),
    ("walrus_site_id",),
)
OBJECT_ID_PATHS: tuple[Path, ...] = (
    ("data", "objectId"),
    ("objectId",),
    ("id", "id"),
)


def _lookup(obj: Any, path: Path) -> Any:
    current = obj
    for key in path:
        if not isinstance(current, Mapping) or key not in current:
            return None
        current = current[key]
    return current


def _first(obj: Any, paths: Sequence[Path]) -> Any:
    for path in paths:
        value = _lookup(obj, path)
        if value is not None:
            return value
    return None


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _non_negative(value: int | None) -> int | None:
    return value if value is not None and value >= 0 else None


def field_map(obj: Any) -> Mapping[str, Any]:
    """Return the move-object field map of ``obj``, or ``obj`` itself if it is already one."""
    for path in FIELD_MAP_PATHS:
        value = _lookup(obj, path)
        if isinstance(value, Mapping):
            return value
    return obj if isinstance(obj, Mapping) else {}


def extract_deletable_flag(obj: Any) -> bool | None:
    value = _first(field_map(obj), DELETABLE_PATHS)
    return value if isinstance(value, bool) else None


def extract_storage_rebate(obj: Any) -> int | None:
    """Storage rebate in MIST; accepts integers and numeric strings."""
    fields = field_map(obj)
    value = _as_int(_first(fields, STORAGE_REBATE_PATHS))
    if value is None:
        # Some payloads carry the rebate on the object envelope, not the fields.
        value = _as_int(_first(obj, (("data", "storageRebate"), ("storageRebate",))))
    return value


def extract_end_epoch(obj: Any) -> int | None:
    return _as_int(_first(field_map(obj), END_EPOCH_PATHS))


def extract_created_epoch(obj: Any) -> int | None:
    return _as_int(_first(field_map(obj), CREATED_EPOCH_PATHS))


def extract_size(obj: Any) -> int | None:
    return _as_int(_first(field_map(obj), SIZE_PATHS))


def extract_object_id(obj: Any) -> str | None:
    value = _first(obj, OBJECT_ID_PATHS[:2]) or _first(field_map(obj), OBJECT_ID_PATHS[2:])
    return value if isinstance(value, str) else None


def extract_blob_id(obj: Any) -> str | None:
    """Blob id as 64 hex digits; decimal u256 encodings are converted."""
    value = _first(field_map(obj), BLOB_ID_PATHS)
    if isinstance(value, str) and BLOB_ID_PATTERN.match(value):
        return value.lower()
    number = _as_int(value)
    if number is None or number < 0 or number.bit_length() > 256:
        return None
    return format(number, "064x")


def extract_domain_name(obj: Any) -> str | None:
    value = _first(field_map(obj), DOMAIN_NAME_PATHS)
    return value if isinstance(value, str) and value else None


def extract_target_site(obj: Any) -> str | None:
    value = _first(field_map(obj), TARGET_SITE_PATHS)
    return value if isinstance(value, str) and value else None


def extract_owner(owner: Any) -> str | None:
    """Owner address from either a bare string or an ``{AddressOwner|ObjectOwner: ...}`` map."""
    if isinstance(owner, str):
        return owner or None
    for key in ("AddressOwner", "ObjectOwner"):
        value = _lookup(owner, (key,))
        if isinstance(value, str):
            return value
    return None


def blob_record_from_chain_object(
    obj: Any,
    *,
    current_epoch: int,
    owner_address: str | None = None,
    declared_content_type: str | None = None,
) -> BlobRecord | None:
    """Build a BlobRecord from a raw on-chain blob object, or None without a usable blob id.

    A blob is expired when its storage end epoch lies before ``current_epoch``.
    """
    blob_id = extract_blob_id(obj)
    if blob_id is None:
        return None

    end_epoch = extract_end_epoch(obj)
    owner = owner_address or extract_owner(_lookup(obj, ("data", "owner")))
    return BlobRecord(
        id=blob_id,
        size_bytes=_non_negative(extract_size(obj)),
        declared_content_type=declared_content_type,
        expired=end_epoch is not None and end_epoch < current_epoch,
        deletable_flag=extract_deletable_flag(obj) is True,
        owner_address=owner,
        storage_object_id=extract_object_id(obj),
        created_epoch=_non_negative(extract_created_epoch(obj)),
        storage_rebate_units=max(extract_storage_rebate(obj) or 0, 0),
    )
