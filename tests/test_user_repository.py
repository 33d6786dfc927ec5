"""
User repository tests - identity, soft delete visibility, partial update, aggregates.
"""

import pytest
from sqlalchemy.exc import IntegrityError


@pytest.mark.asyncio
async def test_create_assigns_unique_ids_and_timestamps(make_user):
    first = await make_user("one@x.com")
    second = await make_user("two@x.com")

    assert first.id and second.id
    assert first.id != second.id
    assert first.created_at == first.updated_at
    assert first.deleted_at is None
    assert first.is_email_verified is False


@pytest.mark.asyncio
async def test_create_keeps_caller_supplied_id(user_repo):
    user = await user_repo.create(
        {"id": "fixed-id", "email": "fixed@x.com", "first_name": "Fi", "last_name": "Xed", "password": "pw123456"}
    )
    assert user.id == "fixed-id"


@pytest.mark.asyncio
async def test_find_one_returns_created_record_with_reports(user_repo, make_user, make_report):
    user = await make_user(phone_number="+15550100")
    await make_report(user.id)

    found = await user_repo.find_one(user.id)

    assert found is not None
    assert found.email == "alice@x.com"
    assert found.first_name == "Alice"
    assert found.last_name == "Anders"
    assert found.password == "password123"
    assert found.phone_number == "+15550100"
    assert found.date_of_birth is None
    assert found.full_name == "Alice Anders"
    assert [r.make for r in found.reports] == ["Toyota"]


@pytest.mark.asyncio
async def test_find_one_unknown_id_returns_none(user_repo):
    assert await user_repo.find_one("does-not-exist") is None


@pytest.mark.asyncio
async def test_soft_delete_hides_user_from_reads(user_repo, make_user):
    keep = await make_user("keep@x.com")
    gone = await make_user("gone@x.com")

    assert await user_repo.soft_delete(gone.id) is True

    assert await user_repo.find_one(gone.id) is None
    assert await user_repo.find_by_email("gone@x.com") is None
    assert [u.id for u in await user_repo.find_all()] == [keep.id]


@pytest.mark.asyncio
async def test_soft_delete_twice_or_unknown_returns_false(user_repo, make_user):
    user = await make_user()
    assert await user_repo.soft_delete(user.id) is True
    assert await user_repo.soft_delete(user.id) is False
    assert await user_repo.soft_delete("does-not-exist") is False


@pytest.mark.asyncio
async def test_soft_delete_leaves_reports_alone(user_repo, report_repo, make_user, make_report):
    user = await make_user()
    report = await make_report(user.id)

    await user_repo.soft_delete(user.id)

    still_there = await report_repo.find_one(report.id)
    assert still_there is not None
    assert still_there.deleted_at is None
    assert still_there.user_id == user.id


@pytest.mark.asyncio
async def test_update_changes_only_patched_fields(user_repo, make_user):
    user = await make_user()
    created_at = user.created_at
    updated_at = user.updated_at

    updated = await user_repo.update(user.id, {"first_name": "Alicia"})

    assert updated.first_name == "Alicia"
    assert updated.last_name == "Anders"
    assert updated.email == "alice@x.com"
    assert updated.password == "password123"
    assert updated.created_at == created_at
    assert updated.updated_at > updated_at


@pytest.mark.asyncio
async def test_update_unknown_or_deleted_returns_none(user_repo, make_user):
    user = await make_user()
    await user_repo.soft_delete(user.id)

    assert await user_repo.update(user.id, {"first_name": "Back"}) is None
    assert await user_repo.update("does-not-exist", {"first_name": "Nobody"}) is None
    # Not resurrected
    assert await user_repo.find_one(user.id) is None


@pytest.mark.asyncio
@pytest.mark.parametrize("patch", [{"id": "other"}, {"deleted_at": None}, {"nickname": "al"}])
async def test_update_rejects_server_and_unknown_fields(user_repo, make_user, patch):
    user = await make_user()
    with pytest.raises(ValueError):
        await user_repo.update(user.id, patch)


@pytest.mark.asyncio
async def test_find_by_email_is_exact_and_case_sensitive(user_repo, make_user):
    user = await make_user("alice@x.com")

    assert (await user_repo.find_by_email("alice@x.com")).id == user.id
    assert await user_repo.find_by_email("Alice@x.com") is None
    assert await user_repo.find_by_email("alice@x.co") is None


@pytest.mark.asyncio
async def test_duplicate_active_email_rejected_by_store(make_user):
    await make_user("dup@x.com")
    with pytest.raises(IntegrityError):
        await make_user("dup@x.com")


@pytest.mark.asyncio
async def test_email_reusable_after_soft_delete(user_repo, make_user):
    original = await make_user("reuse@x.com")
    await user_repo.soft_delete(original.id)

    replacement = await make_user("reuse@x.com")

    assert replacement.id != original.id
    assert (await user_repo.find_by_email("reuse@x.com")).id == replacement.id


@pytest.mark.asyncio
async def test_users_with_reports_count(user_repo, report_repo, make_user, make_report):
    alice = await make_user("alice@x.com")
    bob = await make_user("bob@x.com", first_name="Bob", last_name="Brown")
    carol = await make_user("carol@x.com")
    await make_report(alice.id)
    await make_report(alice.id, is_approved=False)
    deleted_report = await make_report(alice.id)
    await report_repo.soft_delete(deleted_report.id)
    await make_report(carol.id)
    await user_repo.soft_delete(carol.id)

    rows = await user_repo.find_users_with_reports_count()

    counts = {row.id: row.report_count for row in rows}
    assert counts == {alice.id: 2, bob.id: 0}
    bob_row = next(row for row in rows if row.id == bob.id)
    assert (bob_row.email, bob_row.first_name, bob_row.last_name) == ("bob@x.com", "Bob", "Brown")


@pytest.mark.asyncio
async def test_users_by_email_domain_matches_exact_domain(user_repo, make_user):
    match = await make_user("a@example.com")
    await make_user("a@sub.example.com")
    await make_user("a@notexample.com")
    await make_user("b@example.com.au")
    deleted = await make_user("c@example.com")
    await user_repo.soft_delete(deleted.id)

    found = await user_repo.find_users_by_email_domain("example.com")

    assert [u.id for u in found] == [match.id]


@pytest.mark.asyncio
async def test_users_by_email_domain_treats_wildcards_literally(user_repo, make_user):
    await make_user("a@example.com")
    assert await user_repo.find_users_by_email_domain("exampl_.com") == []
    assert await user_repo.find_users_by_email_domain("%") == []


@pytest.mark.asyncio
async def test_find_all_relation_excludes_deleted_reports(user_repo, report_repo, make_user, make_report):
    user = await make_user()
    kept = await make_report(user.id)
    dropped = await make_report(user.id, model="Corolla")
    await report_repo.soft_delete(dropped.id)

    (found,) = await user_repo.find_all()

    assert [r.id for r in found.reports] == [kept.id]
