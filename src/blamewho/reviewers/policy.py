"""Organization, identity and liveness filtering of ranked candidates."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence

from blamewho.config import RepoConfig
from blamewho.github.identity import IdentityServices

logger = logging.getLogger("blamewho.policy")


def dedupe(names: Iterable[str]) -> list[str]:
    """Drop repeated names, keeping the first occurrence."""
    return list(dict.fromkeys(names))


def drop_excluded(names: Iterable[str], excluded: Iterable[str]) -> list[str]:
    excluded = set(excluded)
    return [name for name in names if name not in excluded]


async def filter_required_orgs(
    candidates: Sequence[str],
    required_orgs: Sequence[str],
    identity: IdentityServices,
) -> list[str]:
    """Keep candidates that belong to at least one of `required_orgs`."""
    async def orgs(name: str) -> set[str]:
        try:
            return set(await identity.orgs_of(name))
        except Exception as e:
            logger.warning(f"Could not get organizations of {name}: {e}")
            return set()

    memberships = await asyncio.gather(*(orgs(name) for name in candidates))
    required = set(required_orgs)
    return [
        name for name, member_of in zip(candidates, memberships)
        if member_of & required
    ]


async def resolve_identities(
    candidates: Sequence[str],
    identity: IdentityServices,
) -> list[str]:
    """Map every candidate to its canonical login; failures keep the input."""
    async def resolve(name: str) -> str:
        try:
            return await identity.resolve_to_canonical(name) or name
        except Exception as e:
            logger.warning(f"Could not resolve {name}: {e}")
            return name

    return list(await asyncio.gather(*(resolve(name) for name in candidates)))


async def drop_deactivated(
    candidates: Sequence[str],
    identity: IdentityServices,
) -> list[str]:
    """Remove suspended accounts; a failed check counts as active."""
    async def deactivated(name: str) -> bool:
        try:
            return await identity.is_deactivated(name)
        except Exception as e:
            logger.debug(f"Could not check whether {name} is active: {e}")
            return False

    flags = await asyncio.gather(*(deactivated(name) for name in candidates))
    return [name for name, dead in zip(candidates, flags) if not dead]


async def apply_policy(
    candidates: Sequence[str],
    repo_config: RepoConfig,
    identity: IdentityServices,
    default_owners: Sequence[str] = (),
    creator: str | None = None,
) -> list[str]:
    """Run ranked candidates through the repository's reviewer policy.

    Required organizations are checked first, then identities are resolved
    to logins and deduplicated. The creator and ``user_blacklist`` are
    matched again against the resolved logins, and the rest are checked for
    suspension. The survivors are cut to ``max_reviewers`` and the default
    owners, minus the same exclusions, are appended on top of that.
    """
    owners = list(candidates)

    if repo_config.required_orgs:
        owners = await filter_required_orgs(owners, repo_config.required_orgs, identity)

    owners = dedupe(await resolve_identities(owners, identity))
    excluded = list(repo_config.user_blacklist)
    if creator:
        excluded.append(creator)
    owners = drop_excluded(owners, excluded)
    owners = await drop_deactivated(owners, identity)

    return dedupe(
        owners[: repo_config.max_reviewers] + drop_excluded(default_owners, excluded)
    )
