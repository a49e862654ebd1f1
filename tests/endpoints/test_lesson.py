from app.core.constants import RoleEnum
from app.models.lesson_progress import LessonProgress
from tests.helpers.asserts import api_call, assert_error


def test_owner_manages_lessons(client, user_factory, auth_headers, course_factory):
    tutor = user_factory(RoleEnum.TUTOR)
    course = course_factory(tutor)

    created = api_call(
        client, "POST", "/lessons/", headers=auth_headers(tutor),
        json={"course_id": course.id, "title": "Variables", "order_index": 1},
    )
    lesson_id = created.json()["data"]["id"]

    updated = api_call(client, "PUT", f"/lessons/{lesson_id}", headers=auth_headers(tutor), json={"title": "Names"})
    assert updated.json()["data"]["title"] == "Names"

    api_call(client, "DELETE", f"/lessons/{lesson_id}", headers=auth_headers(tutor))
    assert client.get(f"/lessons/{lesson_id}", headers=auth_headers(tutor)).status_code == 404


def test_other_tutor_cannot_add_lessons(client, user_factory, auth_headers, course_factory):
    course = course_factory()
    stranger = user_factory(RoleEnum.TUTOR)
    response = client.post(
        "/lessons/", headers=auth_headers(stranger), json={"course_id": course.id, "title": "Sneaky"}
    )
    assert response.status_code == 403


def test_lessons_listed_in_order_with_student_progress(client, user_factory, auth_headers, course_factory):
    tutor = user_factory(RoleEnum.TUTOR)
    student = user_factory(RoleEnum.STUDENT)
    course = course_factory(tutor, lessons=3)
    api_call(client, "POST", f"/courses/{course.id}/enroll", headers=auth_headers(student))

    first_id = sorted(course.lessons, key=lambda lesson: lesson.order_index)[0].id
    api_call(client, "POST", f"/lessons/{first_id}/complete", headers=auth_headers(student))

    lessons = api_call(client, "GET", f"/lessons/?course_id={course.id}", headers=auth_headers(student)).json()["data"]
    assert [lesson["order_index"] for lesson in lessons] == [0, 1, 2]
    assert [lesson["is_completed"] for lesson in lessons] == [True, False, False]

    tutor_view = api_call(client, "GET", f"/lessons/?course_id={course.id}", headers=auth_headers(tutor)).json()["data"]
    assert [lesson["title"] for lesson in tutor_view] == ["Lesson 1", "Lesson 2", "Lesson 3"]


def test_unenrolled_student_cannot_view_lessons(client, user_factory, auth_headers, course_factory):
    course = course_factory(lessons=1)
    student = user_factory(RoleEnum.STUDENT)

    assert client.get(f"/lessons/?course_id={course.id}", headers=auth_headers(student)).status_code == 403
    assert client.get(f"/lessons/{course.lessons[0].id}", headers=auth_headers(student)).status_code == 403


def test_complete_lesson_reports_course_progress(client, user_factory, auth_headers, course_factory):
    student = user_factory(RoleEnum.STUDENT)
    course = course_factory(lessons=4)
    api_call(client, "POST", f"/courses/{course.id}/enroll", headers=auth_headers(student))

    response = api_call(client, "POST", f"/lessons/{course.lessons[0].id}/complete", headers=auth_headers(student))
    data = response.json()["data"]
    assert data["course_progress"] == 25
    assert data["progress"]["is_completed"] is True


def test_complete_lesson_without_enrollment(client, user_factory, auth_headers, course_factory):
    course = course_factory(lessons=1)
    student = user_factory(RoleEnum.STUDENT)

    response = client.post(f"/lessons/{course.lessons[0].id}/complete", headers=auth_headers(student))
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_ENROLLED"

    missing = client.post("/lessons/999999/complete", headers=auth_headers(student))
    assert missing.json()["error"]["code"] == "LESSON_NOT_FOUND"


def test_deleting_a_lesson_updates_enrolled_progress(client, db_session, user_factory, auth_headers, course_factory):
    tutor = user_factory(RoleEnum.TUTOR)
    student = user_factory(RoleEnum.STUDENT)
    course = course_factory(tutor, lessons=2)
    lesson_a, lesson_b = sorted(course.lessons, key=lambda lesson: lesson.order_index)
    lesson_b_id = lesson_b.id
    api_call(client, "POST", f"/courses/{course.id}/enroll", headers=auth_headers(student))
    api_call(client, "POST", f"/lessons/{lesson_a.id}/complete", headers=auth_headers(student))

    api_call(client, "DELETE", f"/lessons/{lesson_b_id}", headers=auth_headers(tutor))

    progress = api_call(client, "GET", "/courses/progress", headers=auth_headers(student)).json()["data"]
    assert progress[0]["rounded_progress"] == 100
    assert db_session.query(LessonProgress).filter_by(lesson_id=lesson_b_id).count() == 0


def test_update_rejects_explicit_null_title_or_order(client, user_factory, auth_headers, course_factory):
    tutor = user_factory(RoleEnum.TUTOR)
    course = course_factory(tutor, lessons=1)
    lesson_id = course.lessons[0].id

    for body in ({"title": None}, {"order_index": None}):
        response = client.put(f"/lessons/{lesson_id}", headers=auth_headers(tutor), json=body)
        assert_error(response, 422, "VALIDATION_ERROR")

    assert client.get(f"/lessons/{lesson_id}", headers=auth_headers(tutor)).json()["data"]["title"]
