import asyncio
import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.repositories.expense_repo import ExpenseRepository
from app.repositories.group_repo import GroupRepository
from app.repositories.user_repo import UserRepository
from app.schemas.contact import ContactGroup, ContactsResponse, ContactUser
from app.services.balance_calculator import counterpart_ids

logger = logging.getLogger(__name__)


class ContactService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.expenses = ExpenseRepository(db)
        self.groups = GroupRepository(db)
        self.users = UserRepository(db)

    async def get_contacts(self, subject_id: str) -> ContactsResponse:
        """
        People and groups the user has a financial relationship with.

        Users come from 1-to-1 expenses, groups from membership. Ids that no
        longer resolve to a user are left out. Both lists are sorted by name.
        """
        expenses, groups = await asyncio.gather(
            self.expenses.list_personal_expenses(subject_id),
            self.groups.list_groups_for_member(subject_id),
        )

        ids = counterpart_ids(subject_id, expenses)
        users = await self.users.get_users_by_ids(ids)

        missing = ids - users.keys()
        if missing:
            logger.debug("Skipping %d unknown contact id(s): %s", len(missing), sorted(missing))

        contact_users = [
            ContactUser(
                id=user.id,
                name=user.name,
                email=user.email,
                image_url=user.image_url
            )
            for user in users.values()
        ]
        contact_groups = [
            ContactGroup(
                id=group.id,
                name=group.name,
                description=group.description,
                member_count=group.member_count
            )
            for group in groups
        ]

        contact_users.sort(key=lambda u: (u.name.casefold(), u.id))
        contact_groups.sort(key=lambda g: (g.name.casefold(), g.id))

        return ContactsResponse(users=contact_users, groups=contact_groups)
