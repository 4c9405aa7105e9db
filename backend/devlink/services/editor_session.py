"""
Portfolio Editor Session
========================
An in-memory working copy ("mirror") of one portfolio aggregate.

Edits only touch the mirror. ``save()`` sends the whole mirror to the
backend's full-replace operation and then re-hydrates from a fresh fetch, so
every collection item comes back with its new server-side id. A failed save
leaves the mirror exactly as it was.

There is no concurrency control: two sessions saving the same portfolio
overwrite each other, per collection present in each payload.

Usage:
    store = PortfolioStore(db)
    session = PortfolioEditorSession(StoreEditorBackend(store, user.id))
    session.hydrate(await store.get_owned(portfolio_id, user.id))

    session.set_scalar("name", "Jane Doe")
    session.add_item("skills", {"name": "Go", "level": 4})
    await session.save()
"""

import copy
import time
from typing import Any, Dict, Optional, Protocol

import httpx
from pydantic import BaseModel, ValidationError as PydanticValidationError

from devlink.core.exceptions import (
    ValidationError,
    AuthenticationError,
    PortfolioNotFoundError,
    InternalError,
)
from devlink.core.logging_config import logger
from devlink.schemas.portfolio import PortfolioDetailResponse, PortfolioUpdate, SECTION_FIELDS
from devlink.services.portfolio_store import PortfolioStore


SINGULAR_SECTIONS = ("about",)


def snapshot_of(portfolio: Any) -> Dict[str, Any]:
    """JSON-shaped dict of an aggregate given as a dict, pydantic model or ORM object"""
    if isinstance(portfolio, dict):
        return copy.deepcopy(portfolio)
    if isinstance(portfolio, BaseModel):
        return portfolio.model_dump(mode="json")
    return PortfolioDetailResponse.model_validate(portfolio).model_dump(mode="json")


class EditorBackend(Protocol):
    """Where an editor session loads from and saves to"""

    async def replace(self, portfolio_id: str, payload: Dict[str, Any]) -> Any:
        ...

    async def fetch(self, portfolio_id: str) -> Any:
        ...


class StoreEditorBackend:
    """In-process backend on top of PortfolioStore"""

    def __init__(self, store: PortfolioStore, owner_id: str):
        self.store = store
        self.owner_id = owner_id

    async def replace(self, portfolio_id: str, payload: Dict[str, Any]):
        try:
            update = PortfolioUpdate.model_validate(payload)
        except PydanticValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ()))
            raise ValidationError(first.get("msg", "Invalid portfolio data"), field=field or None) from e
        return await self.store.replace(portfolio_id, self.owner_id, update)

    async def fetch(self, portfolio_id: str):
        return await self.store.get_owned(portfolio_id, self.owner_id)


class HttpEditorBackend:
    """
    Backend that talks to a running DevLink API.

    Args:
        base_url: Server root, e.g. "http://localhost:8000"
        access_token: Bearer token from /auth/login
        client: Optional preconfigured httpx.AsyncClient (tests pass one
            wired to the ASGI app)
    """

    def __init__(
        self,
        base_url: str,
        access_token: str,
        client: Optional[httpx.AsyncClient] = None,
        api_prefix: str = "/api/v1",
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_prefix = api_prefix
        self.headers = {"Authorization": f"Bearer {access_token}"}
        self._client = client
        self.timeout = timeout

    def _url(self, portfolio_id: str) -> str:
        return f"{self.base_url}{self.api_prefix}/portfolios/{portfolio_id}"

    async def _request(self, method: str, portfolio_id: str, **kwargs) -> Dict[str, Any]:
        if self._client is not None:
            response = await self._client.request(
                method, self._url(portfolio_id), headers=self.headers, **kwargs
            )
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method, self._url(portfolio_id), headers=self.headers, **kwargs
                )

        if response.status_code == 400:
            raise ValidationError(_error_message(response, "Invalid portfolio data"))
        if response.status_code == 401:
            raise AuthenticationError()
        if response.status_code == 404:
            raise PortfolioNotFoundError(portfolio_id)
        if response.status_code >= 400:
            logger.error(f"{method} {self._url(portfolio_id)} failed: {response.status_code}")
            raise InternalError()

        return response.json()

    async def replace(self, portfolio_id: str, payload: Dict[str, Any]):
        return (await self._request("PUT", portfolio_id, json=payload))["portfolio"]

    async def fetch(self, portfolio_id: str):
        return (await self._request("GET", portfolio_id))["portfolio"]


def _error_message(response: httpx.Response, default: str) -> str:
    try:
        return response.json().get("message") or default
    except ValueError:
        return default


class PortfolioEditorSession:
    """Working copy of one portfolio; exclusively owned by one open editor"""

    def __init__(self, backend: EditorBackend, portfolio: Any = None):
        self.backend = backend
        self.mirror: Dict[str, Any] = {}
        if portfolio is not None:
            self.hydrate(portfolio)

    @property
    def portfolio_id(self) -> Optional[str]:
        return self.mirror.get("id")

    def hydrate(self, portfolio: Any) -> Dict[str, Any]:
        """Replace the whole mirror with a copy of the given snapshot"""
        self.mirror = snapshot_of(portfolio)
        return self.mirror

    # ==================== EDITS (mirror only) ====================

    def set_scalar(self, field: str, value: Any) -> None:
        if field in SECTION_FIELDS or field in SINGULAR_SECTIONS:
            raise ValidationError(f"'{field}' is a section, not a field", field=field)
        self.mirror[field] = value

    def set_section_field(self, section: str, field: str, value: Any) -> None:
        """Nested assignment on a singular section such as about.content"""
        if section not in SINGULAR_SECTIONS:
            raise ValidationError(f"Unknown section '{section}'", field=section)
        if not isinstance(self.mirror.get(section), dict):
            self.mirror[section] = {}
        self.mirror[section][field] = value

    def _collection(self, section: str) -> list:
        if section not in SECTION_FIELDS:
            raise ValidationError(f"Unknown section '{section}'", field=section)
        if not isinstance(self.mirror.get(section), list):
            self.mirror[section] = []
        return self.mirror[section]

    @staticmethod
    def _check_index(items: list, index: int) -> None:
        if index < 0 or index >= len(items):
            raise IndexError(f"Item {index} out of range (0..{len(items) - 1})")

    def add_item(self, section: str, template: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Append a copy of template, stamped with a temporary millisecond id"""
        items = self._collection(section)
        item = copy.deepcopy(template) if template else {}
        item["id"] = int(time.time() * 1000)
        items.append(item)
        return item

    def update_item(self, section: str, index: int, field: str, value: Any) -> None:
        items = self._collection(section)
        self._check_index(items, index)
        items[index][field] = value

    def remove_item(self, section: str, index: int) -> Dict[str, Any]:
        items = self._collection(section)
        self._check_index(items, index)
        return items.pop(index)

    # ==================== PERSISTENCE ====================

    async def save(self) -> Dict[str, Any]:
        """Send the whole mirror as a full replace, then re-hydrate from a fresh fetch"""
        portfolio_id = self.portfolio_id
        if not portfolio_id:
            raise ValidationError("Editor session has no portfolio loaded", field="id")

        payload = copy.deepcopy(self.mirror)
        await self.backend.replace(portfolio_id, payload)
        fresh = await self.backend.fetch(portfolio_id)

        logger.debug(f"Editor session saved portfolio {portfolio_id}")
        return self.hydrate(fresh)
