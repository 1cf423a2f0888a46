"""
Social collaborators of the game engine.

Provides follower avatars and the pool builder, a TTL cache for follower
lists, and render/share sinks for finished games.
"""
from .avatar import (
    AvatarPoolBuilder,
    AvatarPoolConfig,
    AvatarRecord,
    AvatarSource,
    AvatarSourceError,
    StaticAvatarSource,
)
from .cache import CacheStats, TTLCache
from .share import (
    AnsiBoardRenderer,
    CastBoardRenderer,
    RenderSink,
    compose_cast_text,
    format_solving_time,
)

__all__ = [
    "AvatarPoolBuilder",
    "AvatarPoolConfig",
    "AvatarRecord",
    "AvatarSource",
    "AvatarSourceError",
    "StaticAvatarSource",
    "CacheStats",
    "TTLCache",
    "AnsiBoardRenderer",
    "CastBoardRenderer",
    "RenderSink",
    "compose_cast_text",
    "format_solving_time",
]
