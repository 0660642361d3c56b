"""Request and response models."""

import uuid
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictInt

# Range of the BIGINT columns behind user ids and amounts
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

Int64 = Annotated[StrictInt, Field(ge=INT64_MIN, le=INT64_MAX)]


class CreatePurchaseRequest(BaseModel):
    """Body of POST /purchases."""

    model_config = ConfigDict(extra="ignore")

    user_id: Int64
    # Negative amounts pass here and are rejected as E_BAD_AMOUNT by intake
    amount: Int64
    status: str
    id: uuid.UUID | None = None


class CreatePurchaseResponse(BaseModel):
    """Payload of a created purchase."""

    id: uuid.UUID


class BalanceResponse(BaseModel):
    """Payload of a balance lookup."""

    user_id: int
    balance: int


class ProcessResponse(BaseModel):
    """Payload of a processed purchase."""

    processed: uuid.UUID
