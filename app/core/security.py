from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

STUDENT_ROLE = "org:student"
TEACHER_ROLE = "org:teacher"


@dataclass
class CurrentUser:
    """Identity forwarded by the authentication gateway"""

    user_id: str
    role: str


def get_current_user(
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> CurrentUser:
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing user identity"
        )
    return CurrentUser(user_id=x_user_id, role=x_user_role or "")


def require_role(*roles: str):
    """Dependency factory that only lets the given roles through"""

    def dependency(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role '{user.role}' is not allowed to access this resource",
            )
        return user

    return dependency
