from app.core.constants import RoleEnum
from app.models.course_note import CourseNote
from tests.helpers.asserts import api_call, assert_error
from tests.helpers.contract import validate_response_schema
from app.schemas.course_note import CourseNote as CourseNoteSchema


def _add_note(client, headers, course_id, title="Week 1", content="Read chapter one"):
    return api_call(
        client, "POST", "/course-notes/", headers=headers,
        json={"course_id": course_id, "title": title, "content": content},
        expected_status=201,
    ).json()["data"]


def test_owner_creates_updates_and_deletes_note(client, db_session, user_factory, auth_headers, course_factory):
    tutor = user_factory(RoleEnum.TUTOR)
    course = course_factory(tutor, title="Python Basics")

    note = _add_note(client, auth_headers(tutor), course.id)
    validate_response_schema(note, CourseNoteSchema)
    assert note["author_id"] == tutor.id
    assert note["course"]["title"] == "Python Basics"
    assert note["author"]["username"] == tutor.username

    updated = api_call(
        client, "PUT", f"/course-notes/{note['id']}", headers=auth_headers(tutor), json={"content": "Read chapter two"}
    ).json()["data"]
    assert updated["content"] == "Read chapter two"
    assert updated["title"] == "Week 1"

    deleted = api_call(client, "DELETE", f"/course-notes/{note['id']}", headers=auth_headers(tutor)).json()["data"]
    assert deleted["id"] == note["id"]
    db_session.expire_all()
    assert db_session.get(CourseNote, note["id"]) is None

    missing = client.delete(f"/course-notes/{note['id']}", headers=auth_headers(tutor))
    assert_error(missing, 404, "NOT_FOUND")


def test_other_tutor_and_students_cannot_write_notes(client, user_factory, auth_headers, course_factory):
    tutor = user_factory(RoleEnum.TUTOR)
    course = course_factory(tutor)
    note = _add_note(client, auth_headers(tutor), course.id)

    stranger = user_factory(RoleEnum.TUTOR)
    create = client.post(
        "/course-notes/", headers=auth_headers(stranger),
        json={"course_id": course.id, "title": "Mine", "content": "now"},
    )
    assert_error(create, 403, "FORBIDDEN")
    assert_error(
        client.put(f"/course-notes/{note['id']}", headers=auth_headers(stranger), json={"title": "Mine"}), 403
    )
    assert_error(client.delete(f"/course-notes/{note['id']}", headers=auth_headers(stranger)), 403)

    student = user_factory(RoleEnum.STUDENT)
    assert_error(
        client.post(
            "/course-notes/", headers=auth_headers(student),
            json={"course_id": course.id, "title": "Hi", "content": "there"},
        ),
        403,
    )


def test_create_validates_payload_and_course(client, user_factory, auth_headers, course_factory):
    tutor = user_factory(RoleEnum.TUTOR)
    course = course_factory(tutor)
    note = _add_note(client, auth_headers(tutor), course.id)

    blank = client.post(
        "/course-notes/", headers=auth_headers(tutor), json={"course_id": course.id, "title": "  ", "content": "x"}
    )
    assert_error(blank, 422, "VALIDATION_ERROR")

    null_title = client.put(f"/course-notes/{note['id']}", headers=auth_headers(tutor), json={"title": None})
    assert_error(null_title, 422, "VALIDATION_ERROR")

    no_course = client.post(
        "/course-notes/", headers=auth_headers(tutor), json={"course_id": 99999, "title": "T", "content": "C"}
    )
    assert_error(no_course, 404, "COURSE_NOT_FOUND")


def test_listing_is_scoped_to_own_courses_and_searchable(client, user_factory, auth_headers, course_factory):
    tutor = user_factory(RoleEnum.TUTOR)
    other_tutor = user_factory(RoleEnum.TUTOR)
    admin = user_factory(RoleEnum.ADMIN)
    first = course_factory(tutor)
    second = course_factory(tutor)
    foreign = course_factory(other_tutor)

    _add_note(client, auth_headers(tutor), first.id, title="Loops", content="for and while")
    _add_note(client, auth_headers(tutor), second.id, title="Functions", content="def and return")
    _add_note(client, auth_headers(other_tutor), foreign.id, title="Loops elsewhere", content="not yours")

    own = api_call(client, "GET", "/course-notes/", headers=auth_headers(tutor)).json()["data"]
    assert own["total"] == 2
    assert {n["course_id"] for n in own["items"]} == {first.id, second.id}

    searched = api_call(client, "GET", "/course-notes/?search=LOOP", headers=auth_headers(tutor)).json()["data"]
    assert [n["title"] for n in searched["items"]] == ["Loops"]

    by_course = api_call(
        client, "GET", f"/course-notes/?course_id={second.id}", headers=auth_headers(tutor)
    ).json()["data"]
    assert [n["title"] for n in by_course["items"]] == ["Functions"]

    everything = api_call(client, "GET", "/course-notes/?size=2", headers=auth_headers(admin)).json()["data"]
    assert everything["total"] == 3
    assert len(everything["items"]) == 2

    student = user_factory(RoleEnum.STUDENT)
    assert_error(client.get("/course-notes/", headers=auth_headers(student)), 403)


def test_enrolled_students_read_course_notes(client, user_factory, auth_headers, course_factory):
    tutor = user_factory(RoleEnum.TUTOR)
    course = course_factory(tutor)
    _add_note(client, auth_headers(tutor), course.id, title="Older")
    _add_note(client, auth_headers(tutor), course.id, title="Newer")

    student = user_factory(RoleEnum.STUDENT)
    assert_error(client.get(f"/course-notes/course/{course.id}", headers=auth_headers(student)), 403, "FORBIDDEN")

    api_call(client, "POST", f"/courses/{course.id}/enroll", headers=auth_headers(student))
    notes = api_call(client, "GET", f"/course-notes/course/{course.id}", headers=auth_headers(student)).json()["data"]
    assert [n["title"] for n in notes] == ["Newer", "Older"]

    assert_error(client.get("/course-notes/course/99999", headers=auth_headers(tutor)), 404, "COURSE_NOT_FOUND")


def test_deleting_course_removes_its_notes(client, db_session, user_factory, auth_headers, course_factory):
    tutor = user_factory(RoleEnum.TUTOR)
    course = course_factory(tutor)
    note = _add_note(client, auth_headers(tutor), course.id)

    api_call(client, "DELETE", f"/courses/{course.id}", headers=auth_headers(tutor))
    db_session.expire_all()
    assert db_session.get(CourseNote, note["id"]) is None
