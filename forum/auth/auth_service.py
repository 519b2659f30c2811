from __future__ import annotations
import os
from typing import Annotated, Optional, TypedDict
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from dotenv import load_dotenv

load_dotenv()

SECRET_KEY: str = os.getenv("SECRET_KEY", "change-me")
ALGORITHM: str = "HS256"

# Tokens are issued by the external identity provider; this service only reads them.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")


class JWTPayload(TypedDict, total=False):
    sub: str
    exp: int


def decode_token(token: str) -> JWTPayload:
    payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    return payload


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user_id(token: Annotated[str, Depends(oauth2_scheme)]) -> str:
    """Trusted user id of the caller. Not re-checked against the users table."""
    try:
        payload = decode_token(token)
        user_id: Optional[str] = payload.get("sub")
        if not user_id:
            raise _credentials_exception()
    except JWTError:
        raise _credentials_exception()
    return user_id
