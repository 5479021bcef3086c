"""Identity services used by the reviewer policy filters.

Blame yields author emails; reviewers are GitHub logins. These services
answer three questions about an identity: which organizations it belongs
to, what its canonical login is, and whether the account was suspended.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable

from blamewho.config import BotConfig
from blamewho.github.client import GitHubClient

logger = logging.getLogger("blamewho.identity")

Resolver = Callable[[str], Awaitable[str | None]]


class IdentityServices(ABC):
    """Abstract identity lookups. Implementations may raise on failure."""

    @abstractmethod
    async def orgs_of(self, identity: str) -> set[str]:
        """Organizations the identity is a member of."""
        ...

    @abstractmethod
    async def resolve_to_canonical(self, identity: str) -> str:
        """Canonical login for an identity (usually an email)."""
        ...

    @abstractmethod
    async def is_deactivated(self, identity: str) -> bool:
        """Whether the account behind the identity was suspended."""
        ...


class GitHubIdentityServices(IdentityServices):
    """Identity lookups backed by the GitHub API and the bot config.

    Emails are resolved by trying, in order: the configured alias table,
    stripping the enterprise email domain, and GitHub's user search. The
    first resolver that returns a login wins; unresolved identities are
    returned unchanged.
    """

    def __init__(self, client: GitHubClient, config: BotConfig) -> None:
        self.client = client
        self.config = config
        self.resolvers: list[Resolver] = [
            self._from_alias,
            self._from_enterprise_domain,
            self._from_email_search,
        ]

    async def orgs_of(self, identity: str) -> set[str]:
        return await self.client.user_orgs(identity)

    async def resolve_to_canonical(self, identity: str) -> str:
        for resolver in self.resolvers:
            login = await resolver(identity)
            if login:
                return login
        return identity

    async def is_deactivated(self, identity: str) -> bool:
        if "@" in identity:
            # Unresolved email, nothing to look up
            return False
        user = await self.client.get_user(identity)
        return user.get("suspended_at") is not None

    async def _from_alias(self, identity: str) -> str | None:
        return self.config.email_aliases.get(identity)

    async def _from_enterprise_domain(self, identity: str) -> str | None:
        domain = self.config.ghe.email_domain
        suffix = f"@{domain}"
        if domain and identity.endswith(suffix):
            return identity[: -len(suffix)]
        return None

    async def _from_email_search(self, identity: str) -> str | None:
        if "@" not in identity:
            return None
        login = await self.client.search_user_by_email(identity)
        if login is None:
            logger.debug(f"No GitHub user found for {identity}")
        return login
