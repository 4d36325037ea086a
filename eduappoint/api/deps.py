from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Callable, Optional

from ..core.database import get_db
from ..core.exceptions import AuthenticationError
from ..core.permissions import ensure_admin, ensure_can_book, ensure_can_update_teacher_profile
from ..core.security import security, verify_token, UserRole, TokenPayload
from ..models.user import User

async def get_current_user_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> TokenPayload:
    """Extract and verify JWT token from Authorization header."""
    if credentials is None:
        raise AuthenticationError("Not authorized, no token")

    token_payload = verify_token(credentials.credentials)
    if not token_payload:
        raise AuthenticationError("Not authorized, token failed")

    if token_payload.token_type != "access":
        raise AuthenticationError("Invalid token type")

    return token_payload

async def get_current_user(
    token_payload: TokenPayload = Depends(get_current_user_token),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the token to a live user; deleted accounts are rejected."""
    if token_payload.user_id is None:
        raise AuthenticationError("Invalid token payload")

    user = db.query(User).filter(User.id == token_payload.user_id).first()
    if not user:
        raise AuthenticationError("Not authorized, user not found")

    return user

# Role-based access control dependencies
def require_policy(check: Callable[[UserRole], None]):
    """Create a dependency that applies a role check from ``core.permissions``."""
    async def role_checker(
        current_user: User = Depends(get_current_user)
    ) -> User:
        check(current_user.role)
        return current_user

    return role_checker

# Specific role dependencies
async def get_admin_user(
    current_user: User = Depends(require_policy(ensure_admin))
) -> User:
    """Require admin role."""
    return current_user

async def get_teacher_user(
    current_user: User = Depends(require_policy(ensure_can_update_teacher_profile))
) -> User:
    """Require teacher role."""
    return current_user

async def get_student_user(
    current_user: User = Depends(require_policy(ensure_can_book))
) -> User:
    """Require student role."""
    return current_user
