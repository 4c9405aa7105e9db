"""
Portfolio Store - durable home of the portfolio aggregate

Handles:
- Creation with a unique, URL-safe slug derived from the title
- Owner-scoped and public (by slug) fetches of the full aggregate
- Full replace: partial update of root fields, About upsert, and
  delete-all-then-recreate of every collection present in the payload
- Delete and publish

Absence and "owned by someone else" are reported identically
(PortfolioNotFoundError) so callers cannot probe for other users' ids.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, delete, exists
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from devlink.core.config import settings
from devlink.core.exceptions import (
    ValidationError,
    PortfolioNotFoundError,
    StorageError,
    SlugAllocationError,
    SlugConflictError,
)
from devlink.core.logging_config import logger
from devlink.models.portfolio import Portfolio, About, SECTION_MODELS
from devlink.schemas.portfolio import (
    PortfolioUpdate,
    ROOT_FIELDS,
    NON_NULLABLE_ROOT_FIELDS,
    SECTION_FIELDS,
)
from devlink.utils.slug import slugify, candidate_slugs

TITLE_MAX_LENGTH = Portfolio.__table__.c.title.type.length


class PortfolioStore:
    """Persistence operations on one portfolio aggregate at a time"""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ==================== QUERIES ====================

    @staticmethod
    def _with_sections(stmt):
        # populate_existing: a session that already holds the root must see
        # the collections as they are now, not as they were first loaded
        return stmt.options(
            selectinload(Portfolio.about),
            selectinload(Portfolio.skills),
            selectinload(Portfolio.projects),
            selectinload(Portfolio.experience),
            selectinload(Portfolio.education),
            selectinload(Portfolio.certifications),
        ).execution_options(populate_existing=True)

    async def _get_owned_root(self, portfolio_id: str, owner_id: str) -> Portfolio:
        result = await self.db.execute(
            select(Portfolio).where(
                Portfolio.id == portfolio_id,
                Portfolio.user_id == owner_id,
            )
        )
        portfolio = result.scalar_one_or_none()
        if not portfolio:
            raise PortfolioNotFoundError(portfolio_id)
        return portfolio

    async def _slug_taken(self, slug: str) -> bool:
        result = await self.db.execute(select(exists().where(Portfolio.slug == slug)))
        return bool(result.scalar())

    async def _allocate_slug(self, base_slug: str) -> str:
        """First free slug in base, base-1, base-2, ...; bounded by SLUG_MAX_PROBES"""
        for slug in candidate_slugs(base_slug, settings.SLUG_MAX_PROBES):
            if not await self._slug_taken(slug):
                return slug
        raise SlugAllocationError(base_slug, settings.SLUG_MAX_PROBES)

    async def get_owned(self, portfolio_id: str, owner_id: str) -> Portfolio:
        """Full aggregate, only if owner_id owns it"""
        result = await self.db.execute(
            self._with_sections(
                select(Portfolio).where(
                    Portfolio.id == portfolio_id,
                    Portfolio.user_id == owner_id,
                )
            )
        )
        portfolio = result.scalar_one_or_none()
        if not portfolio:
            raise PortfolioNotFoundError(portfolio_id)
        return portfolio

    async def get_public(self, slug: str) -> Portfolio:
        """Full aggregate by slug, only once published. No ownership check."""
        result = await self.db.execute(
            self._with_sections(
                select(Portfolio).where(
                    Portfolio.slug == slug,
                    Portfolio.is_public.is_(True),
                )
            )
        )
        portfolio = result.scalar_one_or_none()
        if not portfolio:
            raise PortfolioNotFoundError(slug)
        return portfolio

    async def get_for_export(self, portfolio_id: str) -> Portfolio:
        """Full aggregate by id without an ownership check"""
        result = await self.db.execute(
            self._with_sections(select(Portfolio).where(Portfolio.id == portfolio_id))
        )
        portfolio = result.scalar_one_or_none()
        if not portfolio:
            raise PortfolioNotFoundError(portfolio_id)
        return portfolio

    async def list_owned(self, owner_id: str) -> List[Portfolio]:
        """Root records of every portfolio owned by owner_id, most recently updated first"""
        result = await self.db.execute(
            select(Portfolio)
            .where(Portfolio.user_id == owner_id)
            .order_by(Portfolio.updated_at.desc())
        )
        return list(result.scalars().all())

    # ==================== COMMANDS ====================

    async def create(
        self,
        owner_id: str,
        title: Optional[str],
        template: Optional[str] = None
    ) -> Portfolio:
        """
        Create an empty portfolio.

        Args:
            owner_id: Owning user ID
            title: Display title, also the source of the slug
            template: Visual template id (defaults to DEFAULT_TEMPLATE)

        Returns:
            The new root record (private, no sections)

        The slug probe is only a hint; the unique index on portfolios.slug is
        what guarantees uniqueness. Losing the race to a concurrent create
        rolls back and probes again, at most SLUG_INSERT_RETRIES times before
        giving up with SlugConflictError.
        """
        if not title or not title.strip():
            raise ValidationError("Title is required", field="title")
        if len(title) > TITLE_MAX_LENGTH:
            raise ValidationError(f"Title must be at most {TITLE_MAX_LENGTH} characters", field="title")

        base_slug = slugify(title)

        for attempt in range(1, settings.SLUG_INSERT_RETRIES + 1):
            slug = await self._allocate_slug(base_slug)
            portfolio = Portfolio(
                user_id=owner_id,
                title=title,
                slug=slug,
                template=template or settings.DEFAULT_TEMPLATE,
                is_public=False,
            )
            self.db.add(portfolio)

            try:
                await self.db.commit()
            except IntegrityError as e:
                await self.db.rollback()
                if not await self._slug_taken(slug):
                    # Not a slug collision (e.g. unknown owner)
                    logger.log_error_with_context(e, "portfolio_store.create", owner=owner_id)
                    raise StorageError("create") from e
                logger.warning(
                    f"Slug '{slug}' claimed concurrently, retrying ({attempt}/{settings.SLUG_INSERT_RETRIES})"
                )
                continue
            except SQLAlchemyError as e:
                await self.db.rollback()
                logger.log_error_with_context(e, "portfolio_store.create", owner=owner_id)
                raise StorageError("create") from e

            logger.log_portfolio_event("created", portfolio.id, slug=slug, owner=owner_id)
            return portfolio

        raise SlugConflictError(slug)

    async def replace(
        self,
        portfolio_id: str,
        owner_id: str,
        payload: PortfolioUpdate
    ) -> Portfolio:
        """
        Replace the aggregate's content in one transaction.

        - Root scalar keys present in the payload are assigned; None for
          title/template/is_public is ignored
        - about present: upsert keyed on portfolio_id
        - each collection present: delete every existing row, insert the
          supplied items as new rows (new ids). [] clears; absent is untouched

        Returns the root record only; dependents are not re-fetched.
        """
        portfolio = await self._get_owned_root(portfolio_id, owner_id)
        sent = payload.model_dump(exclude_unset=True)
        title = sent.get("title")
        if title is not None and not title.strip():
            raise ValidationError("Title cannot be blank", field="title")

        try:
            for field in ROOT_FIELDS:
                if field not in sent:
                    continue
                value = sent[field]
                if value is None and field in NON_NULLABLE_ROOT_FIELDS:
                    continue
                setattr(portfolio, field, value)
            portfolio.updated_at = datetime.utcnow()

            if payload.about is not None:
                await self._upsert_about(portfolio.id, payload.about.content)

            for section in SECTION_FIELDS:
                items = getattr(payload, section)
                if items is None:
                    continue
                model = SECTION_MODELS[section]
                await self.db.execute(
                    delete(model)
                    .where(model.portfolio_id == portfolio.id)
                    .execution_options(synchronize_session=False)
                )
                self.db.add_all(
                    [model(portfolio_id=portfolio.id, **item.model_dump()) for item in items]
                )

            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.log_error_with_context(e, "portfolio_store.replace", resource_id=portfolio_id)
            raise StorageError("replace") from e

        logger.log_portfolio_event(
            "replaced",
            portfolio_id,
            sections=",".join(s for s in SECTION_FIELDS if getattr(payload, s) is not None) or "-",
        )
        return portfolio

    async def _upsert_about(self, portfolio_id: str, content: Optional[str]) -> None:
        result = await self.db.execute(select(About).where(About.portfolio_id == portfolio_id))
        about = result.scalar_one_or_none()
        if about:
            about.content = content
        else:
            self.db.add(About(portfolio_id=portfolio_id, content=content))

    async def delete(self, portfolio_id: str, owner_id: str) -> None:
        """Remove the portfolio and every dependent row in one transaction"""
        portfolio = await self._get_owned_root(portfolio_id, owner_id)

        try:
            for model in (About, *SECTION_MODELS.values()):
                await self.db.execute(
                    delete(model)
                    .where(model.portfolio_id == portfolio_id)
                    .execution_options(synchronize_session=False)
                )
            await self.db.execute(
                delete(Portfolio)
                .where(Portfolio.id == portfolio_id)
                .execution_options(synchronize_session=False)
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.log_error_with_context(e, "portfolio_store.delete", resource_id=portfolio_id)
            raise StorageError("delete") from e

        self.db.expunge(portfolio)
        logger.log_portfolio_event("deleted", portfolio_id)

    async def publish(self, portfolio_id: str, owner_id: str) -> Portfolio:
        """Make the portfolio reachable by slug. Publishing twice is a no-op."""
        portfolio = await self._get_owned_root(portfolio_id, owner_id)

        if portfolio.is_public:
            return portfolio

        try:
            portfolio.is_public = True
            portfolio.updated_at = datetime.utcnow()
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.log_error_with_context(e, "portfolio_store.publish", resource_id=portfolio_id)
            raise StorageError("publish") from e

        logger.log_portfolio_event("published", portfolio_id, slug=portfolio.slug)
        return portfolio
