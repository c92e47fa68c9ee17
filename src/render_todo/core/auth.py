# src/render_todo/core/auth.py

from __future__ import annotations

import logging

from .errors import AuthorizationError
from .ports import AccountId

logger = logging.getLogger(__name__)


class SessionAuthenticator:
    """
    Authorizes exactly the accounts that signed the current session.

    The console signs in with /login; library callers use `sign_in`/`sign_out`.
    Signature verification itself happens outside this program.
    """

    def __init__(self, signers: set[AccountId] | None = None) -> None:
        self._signers: set[AccountId] = set(signers or ())

    @property
    def signers(self) -> frozenset[AccountId]:
        return frozenset(self._signers)

    def sign_in(self, account: AccountId) -> None:
        if not account:
            raise ValueError("account is required")
        self._signers.add(account)
        logger.debug("Session signer added account=%s", account)

    def sign_out(self, account: AccountId | None = None) -> None:
        if account is None:
            self._signers.clear()
        else:
            self._signers.discard(account)

    def require_auth(self, account: AccountId) -> None:
        if account not in self._signers:
            logger.info("Authorization refused account=%s", account)
            raise AuthorizationError(account)


class OpenAuthenticator:
    """Trusts every caller. Local development only (TODO_AUTH_MODE=open)."""

    def require_auth(self, account: AccountId) -> None:
        if not account:
            raise AuthorizationError(account)
