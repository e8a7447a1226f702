from unittest.mock import AsyncMock, MagicMock

import pytest

from app.services.contact_service import ContactService
from tests.factories import ALICE, BOB, CAROL, GHOST, make_expense, make_group


def _service(expenses, groups, users):
    service = ContactService(MagicMock())
    service.expenses.list_personal_expenses = AsyncMock(return_value=expenses)
    service.groups.list_groups_for_member = AsyncMock(return_value=groups)
    service.users.get_users_by_ids = AsyncMock(
        side_effect=lambda ids: {uid: users[uid] for uid in ids if uid in users}
    )
    return service


@pytest.mark.asyncio
async def test_contacts_users_and_groups_sorted(users_by_id):
    service = _service(
        expenses=[
            make_expense(30, ALICE, [(ALICE, 10), (CAROL, 10), (BOB, 10)]),
            make_expense(20, BOB, [(ALICE, 20)]),
        ],
        groups=[
            make_group("g2", "zoo trip", [ALICE, BOB]),
            make_group("g1", "Apartment", [CAROL, ALICE, BOB], description="Rent"),
        ],
        users=users_by_id,
    )

    result = await service.get_contacts(ALICE)

    assert [u.name for u in result.users] == ["Bob", "carol"]
    assert all(u.type == "user" for u in result.users)
    assert result.users[0].email == "bob@example.com"
    assert [(g.id, g.name, g.member_count) for g in result.groups] == [
        ("g1", "Apartment", 3),
        ("g2", "zoo trip", 2),
    ]
    assert result.groups[0].description == "Rent"
    assert all(g.type == "group" for g in result.groups)


@pytest.mark.asyncio
async def test_contacts_drop_missing_users(users_by_id):
    service = _service(
        expenses=[make_expense(50, ALICE, [(GHOST, 25), (BOB, 25)])],
        groups=[],
        users=users_by_id,
    )

    result = await service.get_contacts(ALICE)

    assert [u.id for u in result.users] == [BOB]
    requested = service.users.get_users_by_ids.await_args.args[0]
    assert requested == {GHOST, BOB}


@pytest.mark.asyncio
async def test_contacts_empty(users_by_id):
    result = await _service([], [], users_by_id).get_contacts(ALICE)

    assert result.users == []
    assert result.groups == []
