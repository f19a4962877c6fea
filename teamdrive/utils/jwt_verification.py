from functools import lru_cache
from typing import Any, Dict

import jwt
from jwt import PyJWKClient
from starlette.status import HTTP_401_UNAUTHORIZED

from teamdrive.configs.settings import settings
from teamdrive.core.exceptions import AppError


@lru_cache
def _jwk_client(jwks_url: str) -> PyJWKClient:
    """One client per JWKS URL so fetched signing keys are reused"""
    return PyJWKClient(jwks_url)


def _unauthorized(message: str) -> AppError:
    return AppError(message, status_code=HTTP_401_UNAUTHORIZED, code="unauthorized")


def decode_token(token: str) -> Dict[str, Any]:
    """Decode and verify a bearer JWT against the identity provider's JWKS"""
    try:
        signing_key = _jwk_client(settings.AUTH_JWKS_URL).get_signing_key_from_jwt(token)
        return jwt.decode(
            token,
            signing_key.key,
            algorithms=["RS256"],
            issuer=settings.AUTH_ISSUER or None,
            options={"verify_aud": False},
        )
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.PyJWKClientError as e:
        raise _unauthorized(f"Token verification failed: {str(e)}")
    except jwt.InvalidTokenError as e:
        raise _unauthorized(f"Invalid token: {str(e)}")
