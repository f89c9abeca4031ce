# hrms/core/security.py

"""
애플리케이션의 인증 관련 유틸리티 함수 및 의존성 주입을 정의하는 모듈입니다.

- JWT(JSON Web Token) 생성 및 검증.
- Bearer 토큰에서 호출자 정보(Identity: user_id, role) 획득.
- 사용자 역할(role) 기반 라우트 가드.

토큰 발급을 위한 로그인(비밀번호 검증)은 외부 인증 서비스가 담당합니다.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from hrms.core.config import settings
from hrms.core.access_policy import Identity
from hrms.domains.usr.models import UserRole

logger = logging.getLogger(__name__)

# auto_error=False: 토큰이 없을 때도 401 응답 형식을 직접 제어합니다.
bearer_scheme = HTTPBearer(auto_error=False)


# --- JWT 토큰 생성 및 검증 ---
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Access Token을 생성합니다. `data`에는 'sub'(user_id)와 'role' 클레임이 포함되어야 합니다.
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY.get_secret_value(), algorithm=settings.ALGORITHM)


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Identity:
    """
    JWT 토큰을 디코딩하고 검증하여 호출자 정보를 반환합니다.
    토큰이 없거나 유효하지 않으면 401 Unauthorized를 발생시킵니다.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None or not credentials.credentials:
        raise credentials_exception
    try:
        payload = jwt.decode(credentials.credentials, settings.SECRET_KEY.get_secret_value(), algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.info("Rejected access token: %s", e)
        raise credentials_exception

    user_id = payload.get("sub")
    role = payload.get("role")
    if not user_id or not isinstance(role, str):
        raise credentials_exception
    return Identity(user_id=str(user_id), role=role)


# --- 역할 기반 권한 부여 의존성 ---
def require_roles(*roles: UserRole):
    """
    호출자의 역할이 `roles` 중 하나인지 확인하는 의존성을 반환합니다.
    허용되지 않은 역할이면 403 Forbidden을 발생시킵니다.

    Example:
        @router.post("/payslips", dependencies=[Depends(require_roles(UserRole.HR, UserRole.ADMIN))])
    """
    allowed_roles = {role.value for role in roles}

    async def _guard(identity: Identity = Depends(get_current_identity)) -> Identity:
        if identity.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not enough permissions.",
            )
        return identity

    return _guard
