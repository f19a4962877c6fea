from fastapi import Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from teamdrive.utils.jwt_verification import decode_token

security = HTTPBearer()

async def verify_token(authorization_credentials: HTTPAuthorizationCredentials = Security(security)):
    """Verify bearer JWT using the identity provider's JWKS"""
    token = authorization_credentials.credentials
    return decode_token(token)
