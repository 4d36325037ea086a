from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from ...core.database import get_db
from ...api.deps import get_current_user, get_admin_user, get_teacher_user
from ...services.auth_service import AuthService
from ...services.user_service import UserService
from ...schemas.auth import UserLogin, UserRegister, AuthResponse
from ...schemas.user import (
    UserResponse, TeacherProfileResponse, TeacherProfileUpdate,
    AdminUserCreate, AdminUserUpdate
)
from ...models.user import User

router = APIRouter(prefix="/users", tags=["Users"])

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    db: Session = Depends(get_db),
):
    """Register a new user and issue a token."""
    auth_service = AuthService(db)
    user = auth_service.register_user(user_data)
    return auth_service.issue_credentials(user)

@router.post("/login", response_model=AuthResponse)
async def login(
    login_data: UserLogin,
    db: Session = Depends(get_db),
):
    """Authenticate user and reissue a token."""
    auth_service = AuthService(db)
    user = auth_service.authenticate_user(login_data)
    return auth_service.issue_credentials(user)

@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """Get current user information."""
    return UserResponse.from_orm(current_user)

# Teachers
@router.get("/teacher", response_model=List[UserResponse])
async def list_teachers(db: Session = Depends(get_db)):
    """List every teacher (public)."""
    return [UserResponse.from_orm(user) for user in UserService(db).list_teachers()]

@router.put("/teacher/profile", response_model=TeacherProfileResponse)
async def update_teacher_profile(
    profile_data: TeacherProfileUpdate,
    current_user: User = Depends(get_teacher_user),
    db: Session = Depends(get_db)
):
    """Update the caller's own teacher profile."""
    user = UserService(db).update_teacher_profile(current_user, profile_data)
    return TeacherProfileResponse.from_orm(user)

@router.get("/teacher/{user_id}", response_model=UserResponse)
async def get_teacher(user_id: int, db: Session = Depends(get_db)):
    """Get one teacher by id (public)."""
    return UserResponse.from_orm(UserService(db).get_teacher(user_id))

# Admin routes
@router.post("/admin/user", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def admin_create_user(
    user_data: AdminUserCreate,
    current_user: User = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Create a user of any role (admin only)."""
    user = UserService(db).create_user(current_user, user_data)
    return UserResponse.from_orm(user)

@router.put("/admin/user/{user_id}", response_model=UserResponse)
async def admin_update_user(
    user_id: int,
    user_data: AdminUserUpdate,
    current_user: User = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Update any user record, including role and approval (admin only)."""
    user = UserService(db).update_user(current_user, user_id, user_data)
    return UserResponse.from_orm(user)

@router.delete("/admin/user/{user_id}")
async def admin_delete_user(
    user_id: int,
    current_user: User = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Delete a user (admin only)."""
    UserService(db).delete_user(current_user, user_id)
    return {"message": "User removed"}

@router.get("/admin/all", response_model=List[UserResponse])
async def admin_list_users(
    current_user: User = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """List all users (admin only)."""
    return [UserResponse.from_orm(user) for user in UserService(db).list_users()]
