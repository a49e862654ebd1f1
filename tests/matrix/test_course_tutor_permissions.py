import pytest

from app.core.constants import RoleEnum

MUTATIONS = [
    ("PUT", "/courses/{course_id}", {"title": "Changed"}),
    ("DELETE", "/courses/{course_id}", None),
    ("PUT", "/courses/{course_id}/tags", {"tags": ["x"]}),
    ("GET", "/courses/{course_id}/enrollments", None),
    ("POST", "/lessons/", {"course_id": "{course_id}", "title": "Extra"}),
]


def _fill(template, course_id):
    if isinstance(template, dict):
        return {k: (course_id if v == "{course_id}" else v) for k, v in template.items()}
    return template


@pytest.mark.parametrize("method,path,body", MUTATIONS, ids=[f"{m} {p}" for m, p, _ in MUTATIONS])
def test_non_owner_tutor_is_forbidden(client, user_factory, auth_headers, course_factory, method, path, body):
    course = course_factory(lessons=1)
    stranger = user_factory(RoleEnum.TUTOR)

    response = client.request(
        method, path.format(course_id=course.id), headers=auth_headers(stranger), json=_fill(body, course.id)
    )
    assert response.status_code == 403, response.text


@pytest.mark.parametrize("method,path,body", MUTATIONS, ids=[f"{m} {p}" for m, p, _ in MUTATIONS])
def test_owner_tutor_is_allowed(client, user_factory, auth_headers, course_factory, method, path, body):
    owner = user_factory(RoleEnum.TUTOR)
    course = course_factory(owner, lessons=1)

    response = client.request(
        method, path.format(course_id=course.id), headers=auth_headers(owner), json=_fill(body, course.id)
    )
    assert 200 <= response.status_code < 300, response.text
