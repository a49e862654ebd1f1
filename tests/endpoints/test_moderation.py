from app.core.constants import RoleEnum
from app.models.moderation_log import ModerationLog
from tests.helpers.asserts import api_call, assert_error


def test_moderator_deactivates_user(client, user_factory, auth_headers):
    moderator = user_factory(RoleEnum.MODERATOR)
    target = user_factory(RoleEnum.STUDENT)

    entry = api_call(
        client, "POST", f"/moderation/users/{target.id}/deactivate", headers=auth_headers(moderator),
        json={"details": "spam"},
    ).json()["data"]
    assert entry["action"] == "deactivate_user"
    assert entry["target_user_id"] == target.id
    assert entry["details"] == "spam"

    # the deactivated account can no longer authenticate
    assert client.get("/auth/me", headers=auth_headers(target)).status_code == 403


def test_moderator_unpublishes_course(client, user_factory, auth_headers, course_factory):
    moderator = user_factory(RoleEnum.MODERATOR)
    student = user_factory(RoleEnum.STUDENT)
    course = course_factory()

    api_call(client, "POST", f"/moderation/courses/{course.id}/unpublish", headers=auth_headers(moderator))

    assert client.get(f"/courses/{course.id}", headers=auth_headers(student)).status_code == 404
    logs = api_call(client, "GET", "/moderation/logs", headers=auth_headers(moderator)).json()["data"]
    assert logs[0]["action"] == "unpublish_course"
    assert logs[0]["target_course_id"] == course.id


def test_moderation_requires_moderator_or_admin(client, user_factory, auth_headers, course_factory):
    course = course_factory()
    for role in (RoleEnum.STUDENT, RoleEnum.TUTOR):
        response = client.post(f"/moderation/courses/{course.id}/unpublish", headers=auth_headers(user_factory(role)))
        assert response.status_code == 403

    admin = user_factory(RoleEnum.ADMIN)
    assert client.get("/moderation/logs", headers=auth_headers(admin)).status_code == 200


def test_moderator_cannot_deactivate_self(client, user_factory, auth_headers):
    moderator = user_factory(RoleEnum.MODERATOR)
    response = client.post(f"/moderation/users/{moderator.id}/deactivate", headers=auth_headers(moderator))
    assert response.status_code == 400


def test_moderator_cannot_deactivate_admin_or_peer(client, user_factory, auth_headers):
    moderator = user_factory(RoleEnum.MODERATOR)
    admin = user_factory(RoleEnum.ADMIN)
    peer = user_factory(RoleEnum.MODERATOR)

    for target in (admin, peer):
        response = client.post(f"/moderation/users/{target.id}/deactivate", headers=auth_headers(moderator))
        assert_error(response, 403, "FORBIDDEN")
        assert client.get("/auth/me", headers=auth_headers(target)).status_code == 200


def test_admin_deactivates_moderator(client, user_factory, auth_headers):
    admin = user_factory(RoleEnum.ADMIN)
    moderator = user_factory(RoleEnum.MODERATOR)

    api_call(client, "POST", f"/moderation/users/{moderator.id}/deactivate", headers=auth_headers(admin))
    assert client.get("/auth/me", headers=auth_headers(moderator)).status_code == 403

    other_admin = user_factory(RoleEnum.ADMIN)
    response = client.post(f"/moderation/users/{other_admin.id}/deactivate", headers=auth_headers(admin))
    assert_error(response, 403, "FORBIDDEN")


def test_log_survives_moderator_deletion(client, db_session, user_factory, auth_headers):
    admin = user_factory(RoleEnum.ADMIN)
    moderator = user_factory(RoleEnum.MODERATOR)
    target = user_factory(RoleEnum.STUDENT)

    entry = api_call(
        client, "POST", f"/moderation/users/{target.id}/deactivate", headers=auth_headers(moderator)
    ).json()["data"]
    api_call(client, "DELETE", f"/admin/users/{moderator.id}", headers=auth_headers(admin))

    db_session.expire_all()
    log = db_session.get(ModerationLog, entry["id"])
    assert log is not None
    assert log.moderator_id is None
    assert log.target_user_id == target.id

    logs = api_call(client, "GET", "/moderation/logs", headers=auth_headers(admin)).json()["data"]
    assert logs[0]["moderator_id"] is None
