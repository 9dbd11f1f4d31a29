"""Organization directory: creation, membership, listing and search."""

from __future__ import annotations

import logging

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from org_directory.config import get_settings
from org_directory.database import SessionLocal, translate_storage_errors
from org_directory.exceptions import (
    AccountNotFoundError,
    DuplicateMembershipError,
    LastOwnerError,
    MembershipNotFoundError,
    NameTakenError,
    OrganizationNotFoundError,
    ValidationError,
)
from org_directory.models.account import Account, AccountKind
from org_directory.models.membership import Membership
from org_directory.models.team import Team, TeamAccess, TeamMembership
from org_directory.schemas.organizations import (
    CreateOrganizationOptions,
    ListOrganizationsOptions,
    Organization,
)
from org_directory.schemas.users import User
from org_directory.services.names import validate_account_name
from org_directory.services.ordering import parse_order_by
from org_directory.services.users import ensure_name_available

logger = logging.getLogger(__name__)


class OrganizationDirectory:
    """Persistence and query layer for organizations and their members.

    Holds no mutable state; every call opens its own session from the
    factory and all consistency is delegated to the database.

    Parameters
    ----------
    session_factory : async_sessionmaker[AsyncSession] | None, default=None
        Factory for per-operation sessions. Defaults to ``SessionLocal``.
    """

    def __init__(
        self, session_factory: async_sessionmaker[AsyncSession] | None = None
    ) -> None:
        self._session_factory = session_factory or SessionLocal

    async def create(
        self,
        name: str,
        creator_id: int,
        options: CreateOrganizationOptions | None = None,
    ) -> Organization:
        """Create an organization owned by ``creator_id``.

        The organization, the owner membership, the owners team and its
        team membership are committed together or not at all.

        Parameters
        ----------
        name : str
            Unique organization name.
        creator_id : int
            Identifier of the founding account.
        options : CreateOrganizationOptions | None, default=None
            Optional descriptive fields.

        Returns
        -------
        Organization
            Created organization record.
        """
        options = options or CreateOrganizationOptions()
        name = validate_account_name(name)

        async with self._session_factory() as session:
            with translate_storage_errors():
                async with session.begin():
                    await ensure_name_available(session, name)
                    creator = await session.get(Account, creator_id)
                    if creator is None:
                        raise AccountNotFoundError(account_id=creator_id)
                    if creator.is_organization:
                        raise ValidationError(
                            f"Organization {creator_id} cannot own an organization"
                        )

                    org = Account(
                        kind=AccountKind.ORGANIZATION,
                        name=name,
                        lower_name=name.lower(),
                        full_name=options.full_name or name,
                        lower_full_name=(options.full_name or name).lower(),
                        description=options.description,
                        website=options.website,
                        location=options.location,
                        num_members=1,
                        num_teams=1,
                    )
                    session.add(org)
                    try:
                        await session.flush()
                    except IntegrityError as exc:
                        raise NameTakenError(name) from exc

                    session.add(
                        Membership(
                            org_id=org.id,
                            account_id=creator_id,
                            is_owner=True,
                            is_public=False,
                        )
                    )
                    await self._create_owners_team(session, org.id, creator_id)
                    await session.flush()
                    created = Organization.model_validate(org)

        logger.info(
            "Created organization %s (id=%d) owned by account %d",
            created.name,
            created.id,
            creator_id,
        )
        return created

    async def _create_owners_team(
        self, session: AsyncSession, org_id: int, owner_id: int
    ) -> Team:
        team_name = get_settings().owner_team_name
        team = Team(
            org_id=org_id,
            name=team_name,
            lower_name=team_name.lower(),
            authorize=TeamAccess.OWNER,
            num_members=1,
        )
        session.add(team)
        await session.flush()
        session.add(TeamMembership(org_id=org_id, team_id=team.id, account_id=owner_id))
        return team

    async def add_member(self, org_id: int, account_id: int) -> None:
        """Add a non-owner, private membership.

        Duplicates are rejected by the ``(org_id, account_id)`` unique
        constraint rather than by a prior lookup.

        Parameters
        ----------
        org_id : int
            Organization identifier.
        account_id : int
            Account joining the organization.

        Returns
        -------
        None
            Raises ``DuplicateMembershipError`` if already a member.
        """
        async with self._session_factory() as session:
            with translate_storage_errors():
                async with session.begin():
                    await self._get_org_row(session, org_id)
                    account = await session.get(Account, account_id)
                    if account is None:
                        raise AccountNotFoundError(account_id=account_id)
                    if account.is_organization:
                        raise ValidationError(
                            f"Organization {account_id} cannot join an organization"
                        )

                    session.add(
                        Membership(
                            org_id=org_id,
                            account_id=account_id,
                            is_owner=False,
                            is_public=False,
                        )
                    )
                    try:
                        await session.flush()
                    except IntegrityError as exc:
                        raise DuplicateMembershipError(org_id, account_id) from exc

                    await session.execute(
                        update(Account)
                        .where(Account.id == org_id)
                        .values(num_members=Account.num_members + 1)
                    )

        logger.info("Added account %d to organization %d", account_id, org_id)

    async def remove_member(self, org_id: int, account_id: int) -> None:
        """Remove a membership and the account's teams in the organization.

        Parameters
        ----------
        org_id : int
            Organization identifier.
        account_id : int
            Member to remove.

        Returns
        -------
        None
            Raises ``LastOwnerError`` when removing the only owner.
        """
        async with self._session_factory() as session:
            with translate_storage_errors():
                async with session.begin():
                    result = await session.execute(
                        select(Membership).where(
                            Membership.org_id == org_id,
                            Membership.account_id == account_id,
                        )
                    )
                    membership = result.scalar_one_or_none()
                    if membership is None:
                        raise MembershipNotFoundError(org_id, account_id)

                    if membership.is_owner:
                        owners = await session.execute(
                            select(func.count())
                            .select_from(Membership)
                            .where(
                                Membership.org_id == org_id,
                                Membership.is_owner.is_(True),
                            )
                        )
                        if owners.scalar_one() <= 1:
                            raise LastOwnerError(org_id, account_id)

                    team_ids = (
                        await session.execute(
                            select(TeamMembership.team_id).where(
                                TeamMembership.org_id == org_id,
                                TeamMembership.account_id == account_id,
                            )
                        )
                    ).scalars().all()
                    if team_ids:
                        await session.execute(
                            delete(TeamMembership).where(
                                TeamMembership.org_id == org_id,
                                TeamMembership.account_id == account_id,
                            )
                        )
                        await session.execute(
                            update(Team)
                            .where(Team.id.in_(team_ids))
                            .values(num_members=Team.num_members - 1)
                        )

                    await session.delete(membership)
                    await session.execute(
                        update(Account)
                        .where(Account.id == org_id)
                        .values(num_members=Account.num_members - 1)
                    )

        logger.info("Removed account %d from organization %d", account_id, org_id)

    async def set_member_visibility(
        self, org_id: int, account_id: int, is_public: bool
    ) -> None:
        """Set whether a membership is publicly visible.

        Parameters
        ----------
        org_id : int
            Organization identifier.
        account_id : int
            Member account identifier.
        is_public : bool
            New visibility.

        Returns
        -------
        None
            Raises ``MembershipNotFoundError`` if no membership matched.
        """
        async with self._session_factory() as session:
            with translate_storage_errors():
                async with session.begin():
                    result = await session.execute(
                        update(Membership)
                        .where(
                            Membership.org_id == org_id,
                            Membership.account_id == account_id,
                        )
                        .values(is_public=is_public)
                    )
                    if result.rowcount == 0:
                        raise MembershipNotFoundError(org_id, account_id)

        logger.info(
            "Set membership visibility of account %d in organization %d to %s",
            account_id,
            org_id,
            "public" if is_public else "private",
        )

    async def list(self, options: ListOrganizationsOptions) -> list[Organization]:
        """List organizations the member belongs to, oldest first.

        Parameters
        ----------
        options : ListOrganizationsOptions
            Member filter and visibility switch.

        Returns
        -------
        list[Organization]
            Matching organizations ordered by id; empty for unknown members.
        """
        logger.debug(
            "Listing organizations for account %d (include_private=%s)",
            options.member_id,
            options.include_private_members,
        )
        query = (
            select(Account)
            .join(Membership, Membership.org_id == Account.id)
            .where(
                Account.kind == AccountKind.ORGANIZATION,
                Membership.account_id == options.member_id,
            )
            .distinct()
            .order_by(Account.id.asc())
        )
        if not options.include_private_members:
            query = query.where(Membership.is_public.is_(True))

        async with self._session_factory() as session:
            with translate_storage_errors():
                result = await session.execute(query)
                return [Organization.model_validate(row) for row in result.scalars()]

    async def search_by_name(
        self, keyword: str, page: int, page_size: int, order_by: str = ""
    ) -> tuple[list[Organization], int]:
        """Search organizations by name or full name.

        Matching is a case-insensitive substring test on either field.

        Parameters
        ----------
        keyword : str
            Substring to look for.
        page : int
            1-indexed page number; values below 1 mean the first page.
        page_size : int
            Maximum rows returned.
        order_by : str, default=""
            Optional clause such as ``"id DESC"``; defaults to ``id ASC``.

        Returns
        -------
        tuple[list[Organization], int]
            The requested page and the count of all matching rows.
        """
        if page_size < 1:
            raise ValidationError("Page size must be at least 1")
        if not keyword.strip():
            return [], 0
        keyword = keyword.lower()

        ordering = parse_order_by(order_by)
        page = max(page, 1)
        logger.debug(
            "Searching organizations for %r (page=%d, page_size=%d, order_by=%r)",
            keyword,
            page,
            page_size,
            order_by,
        )

        criteria = (
            Account.kind == AccountKind.ORGANIZATION,
            or_(
                Account.lower_name.contains(keyword, autoescape=True),
                Account.lower_full_name.contains(keyword, autoescape=True),
            ),
        )
        async with self._session_factory() as session:
            with translate_storage_errors():
                total = await session.execute(
                    select(func.count()).select_from(Account).where(*criteria)
                )
                count = total.scalar_one()
                result = await session.execute(
                    select(Account)
                    .where(*criteria)
                    .order_by(*ordering)
                    .limit(page_size)
                    .offset((page - 1) * page_size)
                )
                orgs = [Organization.model_validate(row) for row in result.scalars()]
        return orgs, count

    async def count_by_user(self, account_id: int) -> int:
        """Count organizations an account belongs to.

        Parameters
        ----------
        account_id : int
            Account identifier; unknown ids count zero.

        Returns
        -------
        int
            Number of memberships of any visibility.
        """
        async with self._session_factory() as session:
            with translate_storage_errors():
                result = await session.execute(
                    select(func.count())
                    .select_from(Membership)
                    .where(Membership.account_id == account_id)
                )
                return result.scalar_one()

    async def get_by_id(self, org_id: int) -> Organization:
        """Return an organization by id."""
        async with self._session_factory() as session:
            with translate_storage_errors():
                org = await self._get_org_row(session, org_id)
                return Organization.model_validate(org)

    async def get_by_name(self, name: str) -> Organization:
        """Return an organization by case-insensitive name."""
        async with self._session_factory() as session:
            with translate_storage_errors():
                result = await session.execute(
                    select(Account).where(
                        Account.lower_name == name.lower(),
                        Account.kind == AccountKind.ORGANIZATION,
                    )
                )
                org = result.scalar_one_or_none()
                if org is None:
                    raise OrganizationNotFoundError(name=name)
                return Organization.model_validate(org)

    async def has_member(self, org_id: int, account_id: int) -> tuple[bool, bool]:
        """Return ``(is_member, is_public)`` for an account."""
        async with self._session_factory() as session:
            with translate_storage_errors():
                result = await session.execute(
                    select(Membership.is_public).where(
                        Membership.org_id == org_id,
                        Membership.account_id == account_id,
                    )
                )
                is_public = result.scalar_one_or_none()
        if is_public is None:
            return False, False
        return True, is_public

    async def is_owned_by(self, org_id: int, account_id: int) -> bool:
        """Return whether the account holds an owner membership."""
        async with self._session_factory() as session:
            with translate_storage_errors():
                result = await session.execute(
                    select(Membership.id).where(
                        Membership.org_id == org_id,
                        Membership.account_id == account_id,
                        Membership.is_owner.is_(True),
                    )
                )
                return result.scalar_one_or_none() is not None

    async def list_members(
        self, org_id: int, include_private_members: bool = True
    ) -> list[User]:
        """List member accounts of an organization ordered by id.

        Parameters
        ----------
        org_id : int
            Organization identifier; unknown ids yield an empty list.
        include_private_members : bool, default=True
            Whether private memberships are included.

        Returns
        -------
        list[User]
            Member records.
        """
        query = (
            select(Account)
            .join(Membership, Membership.account_id == Account.id)
            .where(Membership.org_id == org_id)
            .order_by(Account.id.asc())
        )
        if not include_private_members:
            query = query.where(Membership.is_public.is_(True))

        async with self._session_factory() as session:
            with translate_storage_errors():
                result = await session.execute(query)
                return [User.model_validate(row) for row in result.scalars()]

    @staticmethod
    async def _get_org_row(session: AsyncSession, org_id: int) -> Account:
        org = await session.get(Account, org_id)
        if org is None or not org.is_organization:
            raise OrganizationNotFoundError(org_id=org_id)
        return org
