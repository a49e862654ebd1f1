from app.core.constants import RoleEnum
from app.models.assignment import Assignment
from app.models.enrollment import Enrollment
from app.models.lesson import Lesson
from app.models.lesson_progress import LessonProgress
from app.models.submission import Submission
from tests.helpers.asserts import api_call


def test_deleting_course_removes_dependents(client, db_session, user_factory, auth_headers, course_factory):
    tutor = user_factory(RoleEnum.TUTOR)
    student = user_factory(RoleEnum.STUDENT)
    course = course_factory(tutor, lessons=2)
    course_id = course.id
    lesson_id = course.lessons[0].id

    api_call(client, "POST", f"/courses/{course_id}/enroll", headers=auth_headers(student))
    api_call(client, "POST", f"/lessons/{lesson_id}/complete", headers=auth_headers(student))
    assignment = api_call(
        client, "POST", "/assignments/", headers=auth_headers(tutor), json={"lesson_id": lesson_id, "title": "A"}
    ).json()["data"]
    api_call(
        client, "POST", f"/assignments/{assignment['id']}/submit", headers=auth_headers(student),
        json={"code_submission": "pass"},
    )

    api_call(client, "DELETE", f"/courses/{course_id}", headers=auth_headers(tutor))
    db_session.expire_all()

    assert db_session.query(Lesson).filter_by(course_id=course_id).count() == 0
    assert db_session.query(Enrollment).filter_by(course_id=course_id).count() == 0
    assert db_session.query(LessonProgress).count() == 0
    assert db_session.query(Assignment).count() == 0
    assert db_session.query(Submission).count() == 0
