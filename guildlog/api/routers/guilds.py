"""
GuildLog - Guild Config Router
==============================

Read and write the per-guild logging configuration.

DESIGN:
    Writes go straight to the database. The bot's config cache is not
    touched, so a save takes effect within one cache TTL.
"""

import asyncio
import sqlite3
from typing import List

from fastapi import APIRouter, Depends

from guildlog.core.database import DatabaseManager
from guildlog.core.logger import logger
from guildlog.services.server_logs.categories import CATEGORY_DESCRIPTIONS
from guildlog.api.dependencies import get_database, require_auth, require_guild_admin
from guildlog.api.errors import APIError, ErrorCode
from guildlog.api.models.auth import GuildBrief, SessionPayload
from guildlog.api.models.base import APIResponse
from guildlog.api.models.guilds import (
    GuildConfigPayload,
    GuildConfigSaved,
    GuildConfigView,
    LogCategoryInfo,
    UserGuild,
)


router = APIRouter(prefix="/api", tags=["Guilds"])


@router.get("/categories", response_model=APIResponse[List[LogCategoryInfo]])
async def list_categories() -> APIResponse[List[LogCategoryInfo]]:
    """Every log category a guild can enable, in display order."""
    return APIResponse(
        success=True,
        data=[
            LogCategoryInfo(key=category.value, description=description)
            for category, description in CATEGORY_DESCRIPTIONS.items()
        ],
    )


@router.get("/user/guilds", response_model=List[UserGuild])
async def list_user_guilds(
    session: SessionPayload = Depends(require_auth),
    db: DatabaseManager = Depends(get_database),
) -> List[UserGuild]:
    """Guilds the user administers, each flagged with whether it has a config."""
    try:
        configured = await asyncio.to_thread(
            db.get_configured_guild_ids,
            [int(g.id) for g in session.guilds],
        )
    except sqlite3.Error as e:
        logger.error("Guild List Query Failed", [
            ("User", str(session.sub)),
            ("Error", str(e)[:100]),
        ])
        raise APIError(ErrorCode.SERVER_DATABASE_ERROR)

    return [
        UserGuild(id=g.id, name=g.name, icon=g.icon, configured=int(g.id) in configured)
        for g in session.guilds
    ]


@router.get("/guild/{guild_id}/config", response_model=APIResponse[GuildConfigView])
async def get_guild_config(
    guild_id: str,
    guild: GuildBrief = Depends(require_guild_admin),
    db: DatabaseManager = Depends(get_database),
) -> APIResponse[GuildConfigView]:
    try:
        record = await asyncio.to_thread(db.get_guild_config, int(guild_id))
    except sqlite3.Error as e:
        logger.error("Guild Config Read Failed", [
            ("Guild ID", guild_id),
            ("Error", str(e)[:100]),
        ])
        raise APIError(ErrorCode.SERVER_DATABASE_ERROR)

    view = GuildConfigView.from_record(record) if record else GuildConfigView.empty(guild_id)
    return APIResponse(success=True, data=view)


@router.post("/guild/{guild_id}/config", response_model=GuildConfigSaved)
async def save_guild_config(
    guild_id: str,
    payload: GuildConfigPayload,
    guild: GuildBrief = Depends(require_guild_admin),
    session: SessionPayload = Depends(require_auth),
    db: DatabaseManager = Depends(get_database),
) -> GuildConfigSaved:
    """Create or replace the guild's config."""
    try:
        record = await asyncio.to_thread(
            db.save_guild_config,
            int(guild_id),
            payload.logs,
            payload.logChannels,
            payload.logChannelId,
        )
    except sqlite3.Error as e:
        logger.error("Guild Config Save Failed", [
            ("Guild ID", guild_id),
            ("User", str(session.sub)),
            ("Error", str(e)[:100]),
        ])
        raise APIError(ErrorCode.SERVER_DATABASE_ERROR)

    logger.tree("Dashboard Config Saved", [
        ("Guild", f"{guild.name} ({guild_id})"),
        ("By", f"{session.username} ({session.sub})"),
    ], emoji="🛠️")

    return GuildConfigSaved(success=True, config=GuildConfigView.from_record(record))


__all__ = ["router"]
