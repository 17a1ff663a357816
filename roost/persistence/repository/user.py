"""PostgreSQL implementation of User repository."""

from typing import List, Optional, Sequence

import logfire
from sqlalchemy import desc, func, insert, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from roost.domain.model import User
from roost.domain.repository import UserRepository
from roost.domain.value import Handle, UserId
from roost.persistence.integrity import USER_CONSTRAINTS, conflict_from
from roost.persistence.mappers import row_to_user, user_to_dict
from roost.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_user(row._asdict()) if row else None

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> List[User]:
        """Find several users in one query."""
        if not user_ids:
            return []
        stmt = select(users_table).where(users_table.c.id.in_(user_ids))
        result = await self.session.execute(stmt)
        return [row_to_user(row._asdict()) for row in result.fetchall()]

    async def find_by_handle(self, handle: Handle) -> Optional[User]:
        """Find a user by handle."""
        stmt = select(users_table).where(users_table.c.handle == handle.root)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_user(row._asdict()) if row else None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email (case-insensitive)."""
        stmt = select(users_table).where(
            func.lower(users_table.c.email) == email.lower()
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_user(row._asdict()) if row else None

    async def find_all(self, limit: int, offset: int) -> List[User]:
        """List users, newest first."""
        stmt = (
            select(users_table)
            .order_by(desc(users_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_user(row._asdict()) for row in result.fetchall()]

    async def count(self) -> int:
        """Count all users."""
        stmt = select(func.count()).select_from(users_table)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def search(self, query: str, limit: int, offset: int) -> List[User]:
        """Find users whose handle or display name contains the query."""
        with logfire.span("user_repository.search", query=query):
            stmt = (
                select(users_table)
                .where(_matches(query))
                .order_by(desc(users_table.c.created_at))
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            return [row_to_user(row._asdict()) for row in result.fetchall()]

    async def count_search(self, query: str) -> int:
        """Count users matching a search query."""
        stmt = select(func.count()).select_from(users_table).where(_matches(query))
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def add(self, user: User) -> User:
        """Insert a new user.

        The insert runs in a savepoint so a uniqueness violation leaves the
        request transaction usable.
        """
        try:
            async with self.session.begin_nested():
                await self.session.execute(
                    insert(users_table).values(**user_to_dict(user))
                )
        except IntegrityError as e:
            raise conflict_from(e, USER_CONSTRAINTS) from e
        return user

    async def save(self, user: User) -> User:
        """Update a user's mutable fields."""
        stmt = (
            update(users_table)
            .where(users_table.c.id == user.id)
            .values(
                display_name=user.display_name,
                icon=user.icon,
                is_admin=user.is_admin,
                is_banned=user.is_banned,
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return user


def _matches(query: str):
    return or_(
        func.lower(users_table.c.handle).contains(query, autoescape=True),
        func.lower(users_table.c.display_name).contains(query, autoescape=True),
    )
