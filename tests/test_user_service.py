import uuid

import pytest

from app.core.exceptions import (
    AuthenticationFailedError,
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
)
from app.core.security import verify_password
from app.models import TaskStatus, User, UserRole

def test_register_hashes_password_and_defaults_to_user(user_service):
    user = user_service.register("alice1", "longpass1", "a@x.com")

    assert user.id is not None
    assert user.role == UserRole.USER
    assert user.password_hash != "longpass1"
    assert verify_password("longpass1", user.password_hash)

def test_register_admin_role(user_service):
    admin = user_service.register("root", "longpass1", "admin@x.com", role=UserRole.ADMIN)

    assert admin.role == UserRole.ADMIN

def test_duplicate_username_conflicts_without_second_record(user_service, db_session):
    user_service.register("alice1", "longpass1", "a@x.com")

    with pytest.raises(ConflictError) as exc_info:
        user_service.register("alice1", "longpass1", "b@x.com")

    assert exc_info.value.field == "username"
    assert "alice1" in exc_info.value.message
    assert db_session.query(User).count() == 1
    assert user_service.find_by_email("b@x.com") is None

def test_duplicate_email_conflicts(user_service):
    user_service.register("alice1", "longpass1", "a@x.com")

    with pytest.raises(ConflictError) as exc_info:
        user_service.register("alice2", "longpass1", "a@x.com")

    assert exc_info.value.field == "email"

def test_authenticate(user_service):
    user_service.register("alice1", "longpass1", "a@x.com")

    assert user_service.authenticate("a@x.com", "longpass1").username == "alice1"

    with pytest.raises(AuthenticationFailedError) as wrong_password:
        user_service.authenticate("a@x.com", "wrongpass")
    with pytest.raises(AuthenticationFailedError) as unknown_email:
        user_service.authenticate("nobody@x.com", "longpass1")

    assert wrong_password.value.message == unknown_email.value.message

def test_get_by_id_missing_raises(user_service):
    with pytest.raises(NotFoundError):
        user_service.get_by_id(uuid.uuid4())

def test_update_username_email(user_service):
    user = user_service.register("alice1", "longpass1", "a@x.com")

    user_service.update_username_email(user.id, "alice2", "a2@x.com")

    assert user_service.get_by_email("a2@x.com").username == "alice2"
    assert user_service.find_by_email("a@x.com") is None

def test_update_keeping_own_values_is_not_a_conflict(user_service):
    user = user_service.register("alice1", "longpass1", "a@x.com")

    updated = user_service.update_username_email(user.id, "alice1", "a@x.com")

    assert updated.email == "a@x.com"

def test_update_to_another_users_email_conflicts(user_service):
    user_service.register("alice1", "longpass1", "a@x.com")
    bob = user_service.register("bobby", "longpass1", "b@y.com")

    with pytest.raises(ConflictError) as exc_info:
        user_service.update_username_email(bob.id, "bobby", "a@x.com")

    assert exc_info.value.field == "email"

def test_update_password(user_service):
    user = user_service.register("alice1", "longpass1", "a@x.com")

    user_service.update_password(user.id, "longpass1", "newpass99")

    assert user_service.authenticate("a@x.com", "newpass99")

def test_wrong_old_password_leaves_hash_unchanged(user_service):
    user = user_service.register("alice1", "longpass1", "a@x.com")
    original_hash = user.password_hash

    with pytest.raises(InvalidCredentialsError):
        user_service.update_password(user.id, "wrongpass", "newpass99")

    assert user_service.get_by_id(user.id).password_hash == original_hash

def test_delete_removes_user_and_their_tasks(user_service, task_service):
    user = user_service.register("alice1", "longpass1", "a@x.com")
    other = user_service.register("bobby", "longpass1", "b@y.com")
    first = task_service.create(user.id, "One", "first", TaskStatus.PENDING)
    second = task_service.create(user.id, "Two", "second", TaskStatus.COMPLETED)
    kept = task_service.create(other.id, "Bob", "stays", TaskStatus.PENDING)
    user_id, first_id, second_id, kept_id = user.id, first.id, second.id, kept.id

    assert user_service.delete(user_id) is True

    with pytest.raises(NotFoundError):
        user_service.get_by_id(user_id)
    for task_id in (first_id, second_id):
        with pytest.raises(NotFoundError):
            task_service.get_by_id(task_id)
    assert task_service.get_by_id(kept_id).owner_id == other.id
    assert task_service.list_by_owner(user_id) == []

def test_delete_missing_user_returns_false(user_service):
    assert user_service.delete(uuid.uuid4()) is False

def skip_first_check(monkeypatch, repository, name):
    """Make the service-level uniqueness check miss once, as in a concurrent write"""
    real_check = getattr(repository, name)
    calls = []

    def check(*args, **kwargs):
        calls.append(args)
        return False if len(calls) == 1 else real_check(*args, **kwargs)

    monkeypatch.setattr(repository, name, check)

def test_unique_constraint_rejects_duplicate_email_missed_by_check(user_service, db_session, monkeypatch):
    user_service.register("alice1", "longpass1", "a@x.com")
    skip_first_check(monkeypatch, user_service.users, "exists_by_email")

    with pytest.raises(ConflictError) as exc_info:
        user_service.register("alice2", "longpass1", "a@x.com")

    assert exc_info.value.field == "email"
    assert db_session.query(User).count() == 1
    assert user_service.get_by_email("a@x.com").username == "alice1"

def test_unique_constraint_rejects_update_to_taken_username_missed_by_check(user_service, monkeypatch):
    user_service.register("alice1", "longpass1", "a@x.com")
    bob = user_service.register("bobby", "longpass1", "b@y.com")
    bob_id = bob.id
    skip_first_check(monkeypatch, user_service.users, "exists_by_username")

    with pytest.raises(ConflictError) as exc_info:
        user_service.update_username_email(bob_id, "alice1", "b@y.com")

    assert exc_info.value.field == "username"
    assert user_service.get_by_id(bob_id).username == "bobby"
