import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.config import settings
from app.core.exceptions import InvalidToken

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # unknown or corrupted hash format
        return False


class TokenCodec:
    """Issues and verifies signed bearer tokens that carry a user id.

    Tokens are HS256 JWTs with ``sub`` set to the user id and an ``iat``
    claim. An ``exp`` claim is added only when ``expire_minutes`` is set.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: Optional[int] = None):
        if not secret_key:
            raise ValueError("TokenCodec requires a signing secret")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, user_id: int, *, expires_delta: Optional[timedelta] = None) -> str:
        now = datetime.now(timezone.utc)
        to_encode: Dict[str, Any] = {
            "sub": str(user_id),
            "iat": int(now.timestamp()),
        }
        if expires_delta is None and self.expire_minutes:
            expires_delta = timedelta(minutes=self.expire_minutes)
        if expires_delta is not None:
            to_encode["exp"] = int((now + expires_delta).timestamp())
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as exc:
            raise InvalidToken() from exc

        subject = payload.get("sub")
        try:
            return int(subject)
        except (TypeError, ValueError) as exc:
            raise InvalidToken("Invalid token payload") from exc


def build_token_codec() -> TokenCodec:
    if settings.USING_INSECURE_SECRET:
        logger.warning(
            "SECRET_KEY is not set; signing tokens with the insecure development fallback. "
            "Never run ENVIRONMENT=%s like this outside local development.",
            settings.ENVIRONMENT,
        )
    return TokenCodec(
        secret_key=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )


token_codec = build_token_codec()


def create_access_token(user_id: int) -> str:
    return token_codec.issue(user_id)
