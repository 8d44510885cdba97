# /tests/test_user_service.py

import pytest

from gradeflow.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from gradeflow.models import user_model
from gradeflow.models.principal_model import Role
from gradeflow.models.user_model import UserCreate, UserUpdate
from gradeflow.services import user_service


def test_admin_list_is_everyone_without_password_material(db_service, people, as_principal):
    """Scenario: the admin's list holds every user and the public model carries no password."""
    users = user_service.list_users(as_principal(people.admin), db_service)
    assert len(users) == 7

    serialized = [user_model.User.model_validate(u).model_dump() for u in users]
    assert {u["role"] for u in serialized} == {Role.ADMIN, Role.TEACHER, Role.STUDENT}
    assert all("hashed_password" not in u and "password" not in u for u in serialized)


def test_teacher_list_is_self_plus_assigned_students(db_service, people, as_principal):
    visible = {u.id for u in user_service.list_users(as_principal(people.teacher_1), db_service)}
    assert visible == {people.teacher_1.id, people.student_1.id, people.student_2.id}


def test_student_list_is_only_self(db_service, people, as_principal):
    visible = [u.id for u in user_service.list_users(as_principal(people.student_3), db_service)]
    assert visible == [people.student_3.id]


def test_create_user_enforces_unique_email_and_assignment(db_service, people, as_principal):
    admin = as_principal(people.admin)
    created = user_service.create_user(
        admin,
        UserCreate(name="New Kid", email="new.kid@school.edu", role=Role.STUDENT, assigned_teacher_id=people.teacher_2.id),
        db_service,
    )
    assert created.id.startswith("usr_")
    assert created.assigned_teacher_id == people.teacher_2.id

    with pytest.raises(ValidationError):
        user_service.create_user(
            admin, UserCreate(name="Dup", email="new.kid@school.edu", role=Role.STUDENT), db_service
        )
    with pytest.raises(ValidationError):
        user_service.create_user(
            admin,
            UserCreate(name="Bad Teacher", email="bad@school.edu", role=Role.TEACHER, assigned_teacher_id=people.teacher_1.id),
            db_service,
        )
    with pytest.raises(ValidationError):
        user_service.create_user(
            admin,
            UserCreate(name="Wrong Ref", email="wrong@school.edu", role=Role.STUDENT, assigned_teacher_id=people.student_1.id),
            db_service,
        )


def test_only_admin_mutates_users(db_service, people, as_principal):
    teacher = as_principal(people.teacher_1)
    with pytest.raises(ForbiddenError):
        user_service.create_user(teacher, UserCreate(name="Sneaky", email="s@school.edu", role=Role.STUDENT), db_service)
    with pytest.raises(ForbiddenError):
        user_service.update_user(teacher, people.student_1.id, UserUpdate(name="Renamed"), db_service)
    with pytest.raises(ForbiddenError):
        user_service.delete_user(teacher, people.student_1.id, db_service)


def test_reassign_and_unassign_student(db_service, people, as_principal):
    admin = as_principal(people.admin)
    moved = user_service.update_user(
        admin, people.student_1.id, UserUpdate(assigned_teacher_id=people.teacher_2.id), db_service
    )
    assert moved.assigned_teacher_id == people.teacher_2.id

    renamed = user_service.update_user(admin, people.student_1.id, UserUpdate(name="Samuel Student"), db_service)
    assert renamed.assigned_teacher_id == people.teacher_2.id

    unassigned = user_service.update_user(
        admin, people.student_1.id, UserUpdate.model_validate({"assigned_teacher_id": None}), db_service
    )
    assert unassigned.assigned_teacher_id is None


def test_teacher_cannot_be_assigned(db_service, people, as_principal):
    with pytest.raises(ValidationError):
        user_service.update_user(
            as_principal(people.admin), people.teacher_1.id, UserUpdate(assigned_teacher_id=people.teacher_2.id), db_service
        )


def test_delete_is_immediate(db_service, people, as_principal):
    admin = as_principal(people.admin)
    user_service.delete_user(admin, people.student_4.id, db_service)
    assert db_service.get_user_by_id(people.student_4.id) is None
    with pytest.raises(NotFoundError):
        user_service.delete_user(admin, people.student_4.id, db_service)


def test_update_missing_user_is_not_found(db_service, people, as_principal):
    with pytest.raises(NotFoundError):
        user_service.update_user(as_principal(people.admin), "usr_missing", UserUpdate(name="Nobody"), db_service)


def test_deleting_a_teacher_unassigns_their_students(db_service, people, as_principal):
    """
    GIVEN: teacher_1 with two assigned students.
    WHEN:  The admin deletes teacher_1.
    THEN:  Both students are kept but no longer point at the deleted teacher,
           and the other teacher's student is untouched.
    """
    user_service.delete_user(as_principal(people.admin), people.teacher_1.id, db_service)

    assert db_service.get_user_by_id(people.student_1.id).assigned_teacher_id is None
    assert db_service.get_user_by_id(people.student_2.id).assigned_teacher_id is None
    assert db_service.get_user_by_id(people.student_3.id).assigned_teacher_id == people.teacher_2.id
    assert db_service.get_students_by_teacher(people.teacher_1.id) == []
    print("\n✅ SUCCESS: test_deleting_a_teacher_unassigns_their_students passed.")


# --- my teacher / my team ---

def test_student_sees_their_teacher_profile(db_service, people, as_principal):
    profile = user_service.get_my_teacher(as_principal(people.student_1), db_service)
    assert profile.id == people.teacher_1.id
    assert profile.name == "James Wilson"
    assert profile.email == "usr_t1@school.edu"
    assert profile.student_count == 2


def test_unassigned_student_has_no_teacher_or_team(db_service, people, as_principal):
    lena = as_principal(people.student_4)
    assert user_service.get_my_teacher(lena, db_service) is None
    assert user_service.list_team_members(lena, db_service) == []


def test_team_is_classmates_of_the_same_teacher(db_service, people, as_principal):
    team = user_service.list_team_members(as_principal(people.student_1), db_service)
    assert [member.id for member in team] == [people.student_2.id]

    # student_3 is alone with teacher_2.
    assert user_service.list_team_members(as_principal(people.student_3), db_service) == []


def test_team_views_do_not_widen_the_user_list(db_service, people, as_principal):
    sam = as_principal(people.student_1)
    assert [u.id for u in user_service.list_users(sam, db_service)] == [people.student_1.id]


def test_staff_have_no_teacher_or_team_view(db_service, people, as_principal):
    for user in (people.admin, people.teacher_1):
        with pytest.raises(ForbiddenError):
            user_service.get_my_teacher(as_principal(user), db_service)
        with pytest.raises(ForbiddenError):
            user_service.list_team_members(as_principal(user), db_service)
