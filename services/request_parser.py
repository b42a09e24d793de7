"""
Request normalization for the DAS gateway.

One pure function per operation: take the raw inbound JSON body and return
the params dict for the matching DAS method, or raise MissingParameter /
InvalidShape. Nothing here touches the network.
"""

from typing import Any, Dict, Iterable, Mapping, Optional, Type

from pydantic import ValidationError as PydanticValidationError

from core.exceptions import InvalidShape, MissingParameter
from data.schemas.das import (
    AssetBatchParams,
    AssetByIdParams,
    AssetProofBatchParams,
    AssetProofParams,
    AssetsByAuthorityParams,
    AssetsByCreatorParams,
    AssetsByGroupParams,
    AssetsByOwnerParams,
    DASParams,
    SearchAssetsParams,
    SignaturesForAssetParams,
    TokenAccountsParams,
)

PAGINATION_FIELDS = ("sortBy", "limit", "page", "before", "after")

# Included whenever supplied, even as false / 0.
KEEP_FALSY_FIELDS = frozenset({
    "onlyVerified",
    "showZeroBalance",
    "negate",
    "creatorVerified",
    "frozen",
    "compressed",
    "compressible",
    "burnt",
    "supply",
})

SEARCH_FIELDS = (
    "negate",
    "interface",
    "ownerAddress",
    "ownerType",
    "creatorAddress",
    "creatorVerified",
    "authorityAddress",
    "grouping",
    "delegate",
    "frozen",
    "supply",
    "supplyMint",
    "compressed",
    "compressible",
    "royaltyTargetType",
    "burnt",
    "sortBy",
    "limit",
    "page",
    "before",
    "after",
    "jsonUri",
)

TOKEN_ACCOUNT_FIELDS = (
    "mint", "owner", "limit", "page", "cursor", "before", "after", "showZeroBalance",
)


def _as_body(body: Any) -> Mapping[str, Any]:
    # Arrays, scalars and missing bodies carry no named fields.
    return body if isinstance(body, Mapping) else {}


def is_supplied(name: str, value: Any) -> bool:
    """
    Whether a caller-supplied value counts as present.

    None is never present. Boolean-typed fields (and supply) are present for
    any other value, including False and 0. Every other field must be truthy,
    so "", 0, [] and {} are dropped.
    """
    if value is None:
        return False
    if name in KEEP_FALSY_FIELDS:
        return True
    return bool(value)


def pick_fields(body: Mapping[str, Any], names: Iterable[str]) -> Dict[str, Any]:
    """Collect the supplied fields from body, ignoring everything else."""
    return {name: body[name] for name in names if is_supplied(name, body.get(name))}


def require_fields(body: Mapping[str, Any], *names: str, message: Optional[str] = None) -> None:
    missing = [name for name in names if not is_supplied(name, body.get(name))]
    if missing:
        if message is None:
            message = f"{' and '.join(missing)} {'is' if len(missing) == 1 else 'are'} required"
        raise MissingParameter(message, fields=missing)


def build_params(model: Type[DASParams], values: Dict[str, Any]) -> Dict[str, Any]:
    """Validate values against the record type and dump only the supplied fields."""
    try:
        record = model(**values)
    except PydanticValidationError as e:
        error = e.errors()[0]
        # loc may carry list indexes or union member tags after the field name.
        field = str(error["loc"][0]) if error["loc"] else model.__name__
        raise InvalidShape(f"Invalid value for {field}: {error['msg']}", field=field) from e
    return record.to_params()


def _parse_ids(body: Mapping[str, Any], model: Type[DASParams]) -> Dict[str, Any]:
    # Inbound assetIds goes out as ids; an empty array is forwarded as-is.
    asset_ids = body.get("assetIds")
    if asset_ids is None:
        raise MissingParameter("assetIds is required", fields=["assetIds"])
    if not isinstance(asset_ids, list):
        raise InvalidShape("assetIds must be an array", field="assetIds")
    return build_params(model, {"ids": asset_ids})


def parse_get_asset(body: Any) -> Dict[str, Any]:
    body = _as_body(body)
    require_fields(body, "id", message="Asset id is required")
    return build_params(AssetByIdParams, pick_fields(body, ("id",)))


def parse_get_asset_proof(body: Any) -> Dict[str, Any]:
    body = _as_body(body)
    require_fields(body, "id", message="Asset id is required")
    return build_params(AssetProofParams, pick_fields(body, ("id",)))


def parse_get_asset_batch(body: Any) -> Dict[str, Any]:
    return _parse_ids(_as_body(body), AssetBatchParams)


def parse_get_asset_proof_batch(body: Any) -> Dict[str, Any]:
    return _parse_ids(_as_body(body), AssetProofBatchParams)


def parse_get_assets_by_owner(body: Any) -> Dict[str, Any]:
    body = _as_body(body)
    require_fields(body, "ownerAddress")
    values = pick_fields(body, ("ownerAddress",) + PAGINATION_FIELDS)
    return build_params(AssetsByOwnerParams, values)


def parse_get_assets_by_authority(body: Any) -> Dict[str, Any]:
    body = _as_body(body)
    require_fields(body, "authorityAddress")
    values = pick_fields(body, ("authorityAddress",) + PAGINATION_FIELDS)
    return build_params(AssetsByAuthorityParams, values)


def parse_get_assets_by_group(body: Any) -> Dict[str, Any]:
    body = _as_body(body)
    require_fields(body, "groupKey", "groupValue", message="groupKey and groupValue are required")
    values = pick_fields(body, ("groupKey", "groupValue") + PAGINATION_FIELDS)
    return build_params(AssetsByGroupParams, values)


def parse_get_assets_by_creator(body: Any) -> Dict[str, Any]:
    body = _as_body(body)
    require_fields(body, "creatorAddress")
    values = pick_fields(body, ("creatorAddress", "onlyVerified") + PAGINATION_FIELDS)
    return build_params(AssetsByCreatorParams, values)


def parse_get_signatures_for_asset(body: Any) -> Dict[str, Any]:
    """Params for getSignaturesForAsset; limit is capped at 1000 by the record."""
    body = _as_body(body)
    require_fields(body, "id", message="Asset id is required")
    values = pick_fields(body, ("id", "page", "limit", "before", "after"))
    return build_params(SignaturesForAssetParams, values)


def parse_get_token_accounts(body: Any) -> Dict[str, Any]:
    body = _as_body(body)
    if not (is_supplied("mint", body.get("mint")) or is_supplied("owner", body.get("owner"))):
        raise MissingParameter("Either mint or owner address is required", fields=["mint", "owner"])
    return build_params(TokenAccountsParams, pick_fields(body, TOKEN_ACCOUNT_FIELDS))


def parse_search_assets(body: Any) -> Dict[str, Any]:
    """
    Params for searchAssets. Nothing is required; an empty body yields an
    empty record, which is still forwarded.
    """
    body = _as_body(body)
    return build_params(SearchAssetsParams, pick_fields(body, SEARCH_FIELDS))
