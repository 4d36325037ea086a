from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from ..models.user import User
from ..core.exceptions import AuthenticationError, ConflictError
from ..core.security import verify_password, get_password_hash, create_access_token
from ..schemas.auth import UserLogin, UserRegister, AuthResponse
from ..schemas.user import UserResponse

logger = logging.getLogger(__name__)

class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def register_user(self, user_data: UserRegister) -> User:
        """Register a new user with the defaults of the requested role."""
        existing_user = self.db.query(User).filter(
            User.email == user_data.email
        ).first()

        if existing_user:
            raise ConflictError("User already exists")

        new_user = User.for_role(
            user_data.role,
            name=user_data.name,
            email=user_data.email,
            password_hash=get_password_hash(user_data.password),
        )

        self.db.add(new_user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("User already exists")
        self.db.refresh(new_user)

        logger.info(f"Registered {new_user.role.value} account {new_user.email} (id={new_user.id})")
        return new_user

    def authenticate_user(self, login_data: UserLogin) -> User:
        """Check credentials; unknown email and wrong password are indistinguishable."""
        user = self.db.query(User).filter(
            User.email == login_data.email
        ).first()

        if not user or not verify_password(login_data.password, user.password_hash):
            logger.warning(f"Failed login attempt for {login_data.email}")
            raise AuthenticationError("Invalid credentials")

        logger.info(f"User {user.id} logged in")
        return user

    def issue_credentials(self, user: User) -> AuthResponse:
        """Build the register/login payload with a freshly signed token."""
        token = create_access_token(user.id)
        return AuthResponse(
            **UserResponse.from_orm(user).model_dump(),
            token=token,
        )
