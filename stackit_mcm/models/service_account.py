"""
Service account key model.

Shape of the JSON key file issued by the STACKIT portal. Only the fields the
key flow needs are required; everything else is tolerated.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ServiceAccountCredentials(BaseModel):
    """JWT claims and signing key embedded in a service account key"""
    model_config = ConfigDict(extra="ignore")

    kid: str = Field(min_length=1)
    iss: str = Field(min_length=1)
    sub: str = Field(min_length=1)
    aud: str = Field(min_length=1)
    private_key: str = Field(alias="privateKey", min_length=1)


class ServiceAccountKey(BaseModel):
    """STACKIT service account key (serviceaccount.json)"""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(min_length=1)
    public_key: str = Field(alias="publicKey", min_length=1)
    key_type: Optional[str] = Field(default=None, alias="keyType")
    key_algorithm: Optional[str] = Field(default=None, alias="keyAlgorithm")
    valid_until: Optional[str] = Field(default=None, alias="validUntil")
    credentials: ServiceAccountCredentials
