# Authentication module

from devlink.modules.auth.dependencies import (
    get_current_user,
    get_portfolio_store,
)

__all__ = [
    "get_current_user",
    "get_portfolio_store",
]
