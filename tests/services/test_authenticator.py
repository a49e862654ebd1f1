import pytest

from app.core.constants import RoleEnum
from app.core.exceptions import InvalidToken, Unauthenticated, UserNotFound
from app.core.security import TokenCodec
from app.services.auth import Authenticator

SECRET = "authenticator-secret"


@pytest.fixture
def codec():
    return TokenCodec(secret_key=SECRET)


@pytest.fixture
def authenticator(codec):
    return Authenticator(codec)


@pytest.mark.parametrize("token", [None, ""])
def test_missing_token_is_unauthenticated(db_session, authenticator, token):
    with pytest.raises(Unauthenticated):
        authenticator.authenticate(db_session, token)


def test_bad_token_is_invalid(db_session, authenticator, user_factory):
    user = user_factory(RoleEnum.STUDENT)
    foreign = TokenCodec(secret_key="wrong").issue(user.id)
    with pytest.raises(InvalidToken):
        authenticator.authenticate(db_session, foreign)


def test_returns_identity_for_active_user(db_session, authenticator, codec, user_factory):
    tutor = user_factory(RoleEnum.TUTOR)

    identity = authenticator.authenticate(db_session, codec.issue(tutor.id))

    assert identity.user_id == tutor.id
    assert identity.role_name == RoleEnum.TUTOR
    assert identity.username == tutor.username


def test_deactivated_user_is_rejected_despite_valid_token(db_session, authenticator, codec, user_factory):
    user = user_factory(RoleEnum.STUDENT, is_active=False)
    with pytest.raises(UserNotFound):
        authenticator.authenticate(db_session, codec.issue(user.id))


def test_unknown_user_is_rejected(db_session, authenticator, codec, roles):
    with pytest.raises(UserNotFound):
        authenticator.authenticate(db_session, codec.issue(999999))


def test_user_without_role_is_a_student(db_session, authenticator, codec, user_factory):
    user = user_factory(RoleEnum.ADMIN)
    user.role_id = None
    db_session.commit()

    identity = authenticator.authenticate(db_session, codec.issue(user.id))
    assert identity.role_name == RoleEnum.STUDENT


def test_authentication_writes_nothing(db_session, authenticator, codec, user_factory):
    user = user_factory(RoleEnum.STUDENT)
    authenticator.authenticate(db_session, codec.issue(user.id))
    assert not db_session.dirty
    assert not db_session.new
