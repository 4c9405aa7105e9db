import io
from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import StreamingResponse
from starlette.concurrency import run_in_threadpool

from devlink.core.config import settings
from devlink.core.logging_config import logger
from devlink.models.user import User
from devlink.schemas.portfolio import (
    PortfolioCreate,
    PortfolioUpdate,
    PortfolioResponse,
    PortfolioDetailResponse,
    PortfolioEnvelope,
    PortfolioDetailEnvelope,
    PortfolioListResponse,
    PublishResponse,
)
from devlink.schemas.export import ExportRequest
from devlink.modules.auth.dependencies import get_current_user, get_portfolio_store
from devlink.services.portfolio_store import PortfolioStore
from devlink.services.portfolio_export import portfolio_exporter

router = APIRouter()


@router.get("", response_model=PortfolioListResponse)
async def list_portfolios(
    current_user: User = Depends(get_current_user),
    store: PortfolioStore = Depends(get_portfolio_store)
):
    """List the current user's portfolios, most recently updated first"""
    portfolios = await store.list_owned(current_user.id)
    return PortfolioListResponse(
        portfolios=[PortfolioResponse.model_validate(p) for p in portfolios]
    )


@router.post("", response_model=PortfolioEnvelope, status_code=status.HTTP_201_CREATED)
async def create_portfolio(
    portfolio_data: PortfolioCreate,
    current_user: User = Depends(get_current_user),
    store: PortfolioStore = Depends(get_portfolio_store)
):
    """
    Create an empty, private portfolio.

    The slug is derived from the title (lowercase, non-alphanumerics
    collapsed to '-') and suffixed -1, -2, ... until unique.
    """
    portfolio = await store.create(
        owner_id=current_user.id,
        title=portfolio_data.title,
        template=portfolio_data.template,
    )
    return PortfolioEnvelope(portfolio=PortfolioResponse.model_validate(portfolio))


@router.get("/public/{slug}", response_model=PortfolioDetailEnvelope)
async def get_public_portfolio(
    slug: str,
    store: PortfolioStore = Depends(get_portfolio_store)
):
    """Published portfolio by slug; unpublished ones are 404 for everyone"""
    portfolio = await store.get_public(slug)
    return PortfolioDetailEnvelope(portfolio=PortfolioDetailResponse.model_validate(portfolio))


@router.get("/{portfolio_id}", response_model=PortfolioDetailEnvelope)
async def get_portfolio(
    portfolio_id: str,
    current_user: User = Depends(get_current_user),
    store: PortfolioStore = Depends(get_portfolio_store)
):
    """Full portfolio with every section"""
    portfolio = await store.get_owned(portfolio_id, current_user.id)
    return PortfolioDetailEnvelope(portfolio=PortfolioDetailResponse.model_validate(portfolio))


@router.put("/{portfolio_id}", response_model=PortfolioEnvelope)
async def update_portfolio(
    portfolio_id: str,
    portfolio_data: PortfolioUpdate,
    current_user: User = Depends(get_current_user),
    store: PortfolioStore = Depends(get_portfolio_store)
):
    """
    Replace portfolio content.

    Root fields sent are updated; each section array sent replaces that
    whole section (items get new ids); sections not sent are untouched.
    Returns the root record only.
    """
    portfolio = await store.replace(portfolio_id, current_user.id, portfolio_data)
    return PortfolioEnvelope(portfolio=PortfolioResponse.model_validate(portfolio))


@router.delete("/{portfolio_id}")
async def delete_portfolio(
    portfolio_id: str,
    current_user: User = Depends(get_current_user),
    store: PortfolioStore = Depends(get_portfolio_store)
):
    """Delete portfolio and all of its sections"""
    await store.delete(portfolio_id, current_user.id)
    return {"message": "Portfolio deleted successfully"}


@router.post("/{portfolio_id}/publish", response_model=PublishResponse)
async def publish_portfolio(
    portfolio_id: str,
    current_user: User = Depends(get_current_user),
    store: PortfolioStore = Depends(get_portfolio_store)
):
    """Make the portfolio public at /portfolios/public/{slug}. Idempotent."""
    portfolio = await store.publish(portfolio_id, current_user.id)
    return PublishResponse(
        portfolio=PortfolioResponse.model_validate(portfolio),
        public_url=settings.get_public_portfolio_url(portfolio.slug),
    )


@router.post("/{portfolio_id}/export")
async def export_portfolio(
    portfolio_id: str,
    export_request: Optional[ExportRequest] = None,
    store: PortfolioStore = Depends(get_portfolio_store)
):
    """
    Download the portfolio as PDF or HTML.

    No session required. An unknown portfolio is 404 before the
    format is looked at; an unknown format is 400.
    """
    portfolio = await store.get_for_export(portfolio_id)
    fmt = export_request.format if export_request else None

    document = await run_in_threadpool(portfolio_exporter.export, portfolio, fmt)

    logger.log_portfolio_event("exported", portfolio_id, export_format=fmt, size=len(document.content))

    return StreamingResponse(
        io.BytesIO(document.content),
        media_type=document.media_type,
        headers={
            "Content-Disposition": document.content_disposition,
            "Content-Length": str(len(document.content)),
        }
    )
