# web_identity_schemas/jwk.py
"""JSON Web Key (RFC 7517) and JWK Set models."""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool

from .jwa import JwkAlgorithm, KeyOperation, KeyUse
from .primitives import Base64, Base64Url, EcCurve, OkpCurve, Url


class BaseJwk(BaseModel):
    """Members shared by every key type. Unknown members are kept."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    alg: Optional[JwkAlgorithm] = None
    ext: Optional[StrictBool] = None
    key_ops: Optional[List[KeyOperation]] = None
    kid: Optional[str] = None
    use: Optional[KeyUse] = None
    x5c: Optional[List[Base64]] = None
    x5t: Optional[Base64Url] = None
    x5t_s256: Optional[Base64Url] = Field(None, alias="x5t#S256")
    x5u: Optional[Url] = None


class RsaOtherPrime(BaseModel):
    model_config = ConfigDict(extra="allow")

    r: Base64Url
    d: Base64Url
    t: Optional[Base64Url] = None


class RsaJwk(BaseJwk):
    kty: Literal["RSA"]
    n: Base64Url
    e: Base64Url
    d: Optional[Base64Url] = None
    p: Optional[Base64Url] = None
    q: Optional[Base64Url] = None
    dp: Optional[Base64Url] = None
    dq: Optional[Base64Url] = None
    qi: Optional[Base64Url] = None
    oth: Optional[List[RsaOtherPrime]] = None


class EcJwk(BaseJwk):
    kty: Literal["EC"]
    crv: EcCurve
    x: Base64Url
    y: Base64Url
    d: Optional[Base64Url] = None


class OctJwk(BaseJwk):
    """Symmetric key; ``k`` holds the key bytes."""
    kty: Literal["oct"]
    k: Base64Url


class OkpJwk(BaseJwk):
    """Octet key pair (RFC 8037): Ed25519, Ed448, X25519 and X448."""
    kty: Literal["OKP"]
    crv: OkpCurve
    x: Base64Url
    d: Optional[Base64Url] = None


JsonWebKey = Annotated[Union[RsaJwk, EcJwk, OctJwk, OkpJwk], Field(discriminator="kty")]


class JsonWebKeySet(BaseModel):
    model_config = ConfigDict(extra="allow")

    keys: List[JsonWebKey]


def is_private_jwk(key: Union[RsaJwk, EcJwk, OctJwk, OkpJwk]) -> bool:
    """Whether a validated key carries private material."""
    if isinstance(key, OctJwk):
        return True
    return key.d is not None
