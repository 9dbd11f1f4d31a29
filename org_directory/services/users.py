"""Individual account store."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from org_directory.database import SessionLocal, translate_storage_errors
from org_directory.exceptions import (
    AccountNotFoundError,
    EmailTakenError,
    NameTakenError,
    ValidationError,
)
from org_directory.models.account import Account, AccountKind
from org_directory.schemas.users import CreateUserOptions, User
from org_directory.services.names import validate_account_name

logger = logging.getLogger(__name__)


async def ensure_name_available(session: AsyncSession, name: str) -> None:
    """Ensure no account of any kind already uses a name.

    Parameters
    ----------
    session : AsyncSession
        Active database session.
    name : str
        Candidate account name.

    Returns
    -------
    None
        Raises ``NameTakenError`` on collision.
    """
    result = await session.execute(
        select(Account.id).where(Account.lower_name == name.lower())
    )
    if result.scalar_one_or_none() is not None:
        raise NameTakenError(name)


class UsersStore:
    """Create and resolve individual accounts.

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
        self, name: str, email: str, options: CreateUserOptions | None = None
    ) -> User:
        """Create an individual account.

        Parameters
        ----------
        name : str
            Unique account name.
        email : str
            Unique email address, stored lower-cased.
        options : CreateUserOptions | None, default=None
            Optional profile fields.

        Returns
        -------
        User
            Created user record.
        """
        options = options or CreateUserOptions()
        name = validate_account_name(name)
        email = email.strip().lower()
        if not email:
            raise ValidationError("Email must not be empty")

        async with self._session_factory() as session:
            with translate_storage_errors():
                async with session.begin():
                    await ensure_name_available(session, name)
                    existing = await session.execute(
                        select(Account.id).where(Account.email == email)
                    )
                    if existing.scalar_one_or_none() is not None:
                        raise EmailTakenError(email)

                    account = Account(
                        kind=AccountKind.INDIVIDUAL,
                        name=name,
                        lower_name=name.lower(),
                        full_name=options.full_name or name,
                        lower_full_name=(options.full_name or name).lower(),
                        email=email,
                        website=options.website,
                        location=options.location,
                    )
                    session.add(account)
                    try:
                        await session.flush()
                    except IntegrityError as exc:
                        if "email" in str(exc.orig).lower():
                            raise EmailTakenError(email) from exc
                        raise NameTakenError(name) from exc
                    user = User.model_validate(account)

        logger.info("Created user %s (id=%d)", user.name, user.id)
        return user

    async def get_by_id(self, account_id: int) -> User:
        """Return a user by id.

        Parameters
        ----------
        account_id : int
            Account identifier.

        Returns
        -------
        User
            Matching user record.
        """
        return await self._get_one(
            Account.id == account_id, AccountNotFoundError(account_id=account_id)
        )

    async def get_by_name(self, name: str) -> User:
        """Return a user by case-insensitive name.

        Parameters
        ----------
        name : str
            Account name.

        Returns
        -------
        User
            Matching user record.
        """
        return await self._get_one(
            Account.lower_name == name.lower(), AccountNotFoundError(name=name)
        )

    async def _get_one(self, criterion, not_found: AccountNotFoundError) -> User:
        async with self._session_factory() as session:
            with translate_storage_errors():
                result = await session.execute(
                    select(Account).where(
                        criterion, Account.kind == AccountKind.INDIVIDUAL
                    )
                )
                account = result.scalar_one_or_none()
                if account is None:
                    raise not_found
                return User.model_validate(account)
