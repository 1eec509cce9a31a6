# dependencies/auth.py
from fastapi import HTTPException, Header
from typing import Optional
from magento_migration.config import config

async def verify_token(authorization: Optional[str] = Header(None)):
    """Simple bearer token verification"""
    if not authorization:
        raise HTTPException(
            status_code=403,
            detail="Authorization header missing"
        )

    try:
        token_type, token = authorization.split()
    except ValueError:
        raise HTTPException(
            status_code=403,
            detail="Invalid authorization header format"
        )

    if token_type.lower() != "bearer":
        raise HTTPException(
            status_code=403,
            detail="Invalid token type. Use Bearer"
        )

    if not config.API_TOKEN or token != config.API_TOKEN:
        raise HTTPException(
            status_code=403,
            detail="Invalid token"
        )

    return token
