import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.constants import RoleEnum, SELF_REGISTRATION_ROLES
from app.core.exceptions import (
    DuplicateUser,
    Forbidden,
    Unauthenticated,
    UserNotFound,
    ValidationFailed,
)
from app.core.security import TokenCodec, get_password_hash, verify_password, token_codec as default_token_codec
from app.crud.role import role as crud_role
from app.crud.user import user as crud_user
from app.models.user import User
from app.schemas.token import AuthResponse, Token
from app.schemas.user import Identity, UserCreate, User as UserSchema

logger = logging.getLogger(__name__)


class Authenticator:
    """Resolves a bearer token to the identity of a live, active user.

    A missing token is ``Unauthenticated``; a token that does not verify is
    ``InvalidToken``; a token for an absent or deactivated user is
    ``UserNotFound``. Nothing is written.
    """

    def __init__(self, codec: TokenCodec):
        self.codec = codec

    def authenticate(self, db: Session, token: Optional[str]) -> Identity:
        if not token:
            raise Unauthenticated()

        user_id = self.codec.verify(token)

        user = crud_user.get(db, id=user_id)
        if not user or not user.is_active:
            raise UserNotFound()

        try:
            role_name = RoleEnum(user.role_name)
        except ValueError:
            raise Forbidden("User has an unrecognised role.")

        return Identity(user_id=user.id, role_name=role_name, username=user.username)


class AuthService:
    def __init__(self, codec: TokenCodec):
        self.codec = codec

    def _auth_response(self, user: User) -> AuthResponse:
        return AuthResponse(
            token=Token(access_token=self.codec.issue(user.id), token_type="bearer"),
            user=UserSchema.model_validate(user),
        )

    def register(self, db: Session, *, user_in: UserCreate) -> AuthResponse:
        role_name = RoleEnum(user_in.role)
        if role_name not in SELF_REGISTRATION_ROLES:
            raise ValidationFailed("Only student or tutor accounts can be self-registered.")

        if crud_user.get_by_email_or_username(db, email=user_in.email, username=user_in.username):
            raise DuplicateUser("User with this email or username already exists")

        role = crud_role.get_or_create(db, name=role_name.value)
        try:
            new_user = crud_user.create_with_password(
                db,
                username=user_in.username,
                email=user_in.email,
                hashed_password=get_password_hash(user_in.password),
                role=role,
                full_name=user_in.full_name,
            )
        except IntegrityError as exc:
            # a concurrent registration won the unique constraint
            raise DuplicateUser("User with this email or username already exists") from exc

        logger.info("Registered user %s (%s) as %s", new_user.id, new_user.username, role_name.value)
        return self._auth_response(new_user)

    def login(self, db: Session, *, email: str, password: str) -> AuthResponse:
        user = crud_user.get_by_email(db, email=email)
        if not user or not verify_password(password, user.hashed_password):
            raise Unauthenticated("Invalid credentials")

        if not user.is_active:
            raise UserNotFound("Account is deactivated")

        logger.info("User %s logged in", user.id)
        return self._auth_response(user)


authenticator = Authenticator(default_token_codec)
auth_service = AuthService(default_token_codec)
