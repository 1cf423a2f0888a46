"""
Follower avatars and the pool of avatars hidden under mines.

The engine treats avatars as opaque; this module decides which followers
end up on the board. A follower source that fails or returns too few
followers is topped up with well-known default accounts so a game can
always be played.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .cache import TTLCache

logger = logging.getLogger(__name__)


# ============================================================================
# Avatar Record
# ============================================================================

@dataclass(frozen=True)
class AvatarRecord:
    """
    Public profile of a follower.

    Attributes:
        fid: Stable, unique account identifier.
        username: Handle used in mentions.
        display_name: Human readable name.
        pfp_url: Profile picture URL, empty if unknown.
        follower_count: Followers of this account.
        following_count: Accounts this account follows.
        verified_addresses: Verified wallet addresses.
    """

    fid: int
    username: str
    display_name: str = ""
    pfp_url: str = ""
    follower_count: int = 0
    following_count: int = 0
    verified_addresses: Tuple[str, ...] = ()

    @property
    def identifier(self) -> int:
        """Stable identifier used for uniqueness."""
        return self.fid

    @property
    def mention(self) -> str:
        """Handle as written in a cast."""
        return f"@{self.username}"

    @classmethod
    def placeholder(cls, fid: int) -> "AvatarRecord":
        """Stand-in for an account whose profile could not be loaded."""
        return cls(fid=fid, username=f"user{fid}", display_name=f"User {fid}")


# ============================================================================
# Avatar Sources
# ============================================================================

class AvatarSourceError(RuntimeError):
    """Raised by a source when followers cannot be retrieved."""


class AvatarSource(ABC):
    """
    Abstract provider of followers from a social graph.

    Implementations wrap the remote social graph service; they may raise
    AvatarSourceError on network or API failures.
    """

    @abstractmethod
    def fetch_followers(self, user_id: str, limit: int) -> List[AvatarRecord]:
        """
        Fetch the most recent followers of a user.

        Args:
            user_id: Account whose followers are wanted.
            limit: Maximum number of records.

        Returns:
            Ordered list of follower records.
        """
        pass

    def lookup_avatar(self, fid: int) -> Optional[AvatarRecord]:
        """Look up a single profile; None when unknown."""
        return None

    def fetch_top_avatars(self, user_id: str, limit: int) -> List[AvatarRecord]:
        """First `limit` followers of a user."""
        return self.fetch_followers(user_id, limit)[:limit]


class StaticAvatarSource(AvatarSource):
    """In-memory source, for offline play and tests."""

    def __init__(
        self,
        followers: Optional[Mapping[str, Sequence[AvatarRecord]]] = None,
        directory: Iterable[AvatarRecord] = (),
    ) -> None:
        self.followers: Dict[str, List[AvatarRecord]] = {
            user_id: list(records)
            for user_id, records in (followers or {}).items()
        }
        self.directory: Dict[int, AvatarRecord] = {
            record.fid: record for record in directory
        }

    def fetch_followers(self, user_id: str, limit: int) -> List[AvatarRecord]:
        return self.followers.get(user_id, [])[:limit]

    def lookup_avatar(self, fid: int) -> Optional[AvatarRecord]:
        return self.directory.get(fid)


# ============================================================================
# Pool Builder
# ============================================================================

@dataclass
class AvatarPoolConfig:
    """
    Configuration for building an avatar pool.

    Attributes:
        pool_size: Avatars wanted, one per mine.
        fetch_limit: Followers fetched to pick from.
        default_fids: Accounts used to fill missing slots.
        cache_ttl_seconds: Lifetime of cached follower lists.
    """

    pool_size: int = 8
    fetch_limit: int = 20
    default_fids: Tuple[int, ...] = (
        4753, 3, 12, 99, 1075899, 1350, 2233, 1188544,
    )
    cache_ttl_seconds: float = 30 * 60

    def __post_init__(self) -> None:
        if self.pool_size < 0:
            raise ValueError("Pool size cannot be negative")
        if self.fetch_limit < self.pool_size:
            raise ValueError("fetch_limit must be at least pool_size")
        if len(set(self.default_fids)) != len(self.default_fids):
            raise ValueError("default_fids must not repeat")


class AvatarPoolBuilder:
    """
    Build the ordered avatar list handed to a new game.

    Picks followers at random, tops up with default accounts, and shuffles
    the result. Follower lists are cached per user.
    """

    def __init__(
        self,
        source: AvatarSource,
        config: Optional[AvatarPoolConfig] = None,
        rng: Optional[np.random.Generator] = None,
        cache: Optional[TTLCache] = None,
    ) -> None:
        """
        Initialize the builder.

        Args:
            source: Follower source.
            config: Pool settings (default: 8 avatars from 20 followers).
            rng: Random generator for selection and shuffling.
            cache: Follower cache; one is created from the config if absent.
        """
        self.source = source
        self.config = config or AvatarPoolConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        if cache is None:
            cache = TTLCache(self.config.cache_ttl_seconds)
        self.cache = cache

    def build(self, user_id: str) -> List[AvatarRecord]:
        """
        Build the avatar pool for a user.

        Args:
            user_id: Player whose followers become mines.

        Returns:
            Up to pool_size avatars with unique identifiers.
        """
        followers = self._unique(self._followers(user_id))
        selected = self._sample(followers, self.config.pool_size)

        remaining = self.config.pool_size - len(selected)
        if remaining > 0:
            logger.info(
                "User %s has %d followers, filling %d slots with defaults",
                user_id, len(followers), remaining,
            )
            selected.extend(self._defaults(selected, remaining))

        return self._sample(selected, len(selected))

    def _followers(self, user_id: str) -> List[AvatarRecord]:
        """Followers from cache, fetching on miss."""
        cached = self.cache.get(user_id)
        if cached is not None:
            return cached

        try:
            followers = self.source.fetch_top_avatars(
                user_id, self.config.fetch_limit
            )
        except AvatarSourceError as exc:
            logger.warning(
                "Could not fetch followers for %s: %s", user_id, exc
            )
            return []

        self.cache.set(user_id, followers)
        return followers

    def _defaults(
        self, taken: Sequence[AvatarRecord], count: int
    ) -> List[AvatarRecord]:
        """Resolve `count` random default accounts not already taken."""
        used = {record.fid for record in taken}
        candidates = [fid for fid in self.config.default_fids if fid not in used]
        chosen = self._sample(candidates, count)

        defaults = []
        for fid in chosen:
            try:
                record = self.source.lookup_avatar(fid)
            except AvatarSourceError as exc:
                logger.warning("Could not look up default %d: %s", fid, exc)
                record = None
            if record is None:
                record = AvatarRecord.placeholder(fid)
            defaults.append(record)
        return defaults

    def _sample(self, items: Sequence, count: int) -> List:
        """Random subset of `count` items in random order."""
        count = min(count, len(items))
        if count == 0:
            return []
        indices = self.rng.permutation(len(items))[:count]
        return [items[int(index)] for index in indices]

    @staticmethod
    def _unique(records: Iterable[AvatarRecord]) -> List[AvatarRecord]:
        seen = set()
        unique = []
        for record in records:
            if record.fid not in seen:
                seen.add(record.fid)
                unique.append(record)
        return unique
