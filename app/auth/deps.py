from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.jwt import decode_token

bearer = HTTPBearer(auto_error=False)


def _subject(creds: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    """Owner id from a valid access token, else None."""
    if not creds:
        return None
    try:
        data: Dict[str, Any] = decode_token(creds.credentials)
    except jwt.PyJWTError:
        return None
    if data.get("typ") != "access":
        return None
    sub = data.get("sub")
    return str(sub) if sub else None


def get_current_user_id(creds: HTTPAuthorizationCredentials = Depends(bearer)) -> str:
    user_id = _subject(creds)
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="unauthorized")
    return user_id


def get_user_id_optional(creds: HTTPAuthorizationCredentials = Depends(bearer)) -> Optional[str]:
    # signed-out callers get guest behaviour, so a bad token is not an error here
    return _subject(creds)
