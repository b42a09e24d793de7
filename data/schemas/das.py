"""
Typed params records for the DAS JSON-RPC methods.

Every optional field defaults to None and records are dumped with
exclude_unset=True, so only the fields a caller actually supplied reach
the wire.
"""

import math

from pydantic import BaseModel, BeforeValidator, ConfigDict, field_validator
from typing import Annotated, Any, List, Optional, Union

MAX_SIGNATURES_LIMIT = 1000


def coerce_number(value: Any) -> Any:
    """
    Turn numeric input (ints, floats, numeric strings such as "10" or "1e3")
    into an int when integral, else a float. Booleans are not numbers here.
    """
    if isinstance(value, bool):
        raise ValueError("expected a number, got a boolean")
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise ValueError(f"{value!r} is not a number")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError("number must be finite")
        if value.is_integer():
            return int(value)
    return value


Number = Annotated[Union[int, float], BeforeValidator(coerce_number)]


class DASParams(BaseModel):
    model_config = ConfigDict(extra="forbid")

    def to_params(self) -> dict:
        return self.model_dump(exclude_unset=True)


class PaginationParams(DASParams):
    sortBy: Optional[Any] = None
    limit: Optional[Number] = None
    page: Optional[Number] = None
    before: Optional[str] = None
    after: Optional[str] = None


class AssetByIdParams(DASParams):
    id: str


class AssetProofParams(DASParams):
    id: str


class AssetBatchParams(DASParams):
    ids: List[str]


class AssetProofBatchParams(DASParams):
    ids: List[str]


class AssetsByOwnerParams(PaginationParams):
    ownerAddress: str


class AssetsByAuthorityParams(PaginationParams):
    authorityAddress: str


class AssetsByGroupParams(PaginationParams):
    groupKey: str
    groupValue: str


class AssetsByCreatorParams(PaginationParams):
    creatorAddress: str
    onlyVerified: Optional[bool] = None


class SignaturesForAssetParams(DASParams):
    id: str
    page: Optional[Number] = None
    limit: Optional[Number] = None
    before: Optional[str] = None
    after: Optional[str] = None

    @field_validator("limit")
    @classmethod
    def cap_limit(cls, value: Optional[Union[int, float]]) -> Optional[Union[int, float]]:
        if value is None:
            return value
        return min(value, MAX_SIGNATURES_LIMIT)


class TokenAccountsParams(DASParams):
    mint: Optional[str] = None
    owner: Optional[str] = None
    limit: Optional[Number] = None
    page: Optional[Number] = None
    cursor: Optional[str] = None
    before: Optional[str] = None
    after: Optional[str] = None
    showZeroBalance: Optional[bool] = None


class SearchAssetsParams(PaginationParams):
    negate: Optional[bool] = None
    interface: Optional[str] = None
    ownerAddress: Optional[str] = None
    ownerType: Optional[str] = None
    creatorAddress: Optional[str] = None
    creatorVerified: Optional[bool] = None
    authorityAddress: Optional[str] = None
    grouping: Optional[List[str]] = None
    delegate: Optional[str] = None
    frozen: Optional[bool] = None
    supply: Optional[Number] = None
    supplyMint: Optional[str] = None
    compressed: Optional[bool] = None
    compressible: Optional[bool] = None
    royaltyTargetType: Optional[str] = None
    burnt: Optional[bool] = None
    jsonUri: Optional[str] = None
