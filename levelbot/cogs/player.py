from __future__ import annotations

import logging
from typing import Any, Mapping

import discord
from discord import app_commands
from discord.ext import commands

from ..adjustments import ExperienceCommands
from ..models import Creature, ModelValidationError, PlayerSession
from ..rewards import KillEventHandler, RewardGrant
from .base import LevelCog

log = logging.getLogger(__name__)


class PlayerCog(LevelCog):
    """Kill rewards and the player-facing ``/mylevel`` command."""

    def __init__(self, bot: commands.Bot):
        super().__init__(bot)
        self.kills = KillEventHandler(self.store, self.rewards, self.state)
        self.experience = ExperienceCommands(self.store, self.state)

    @commands.Cog.listener()
    async def on_session_joined(self, session: PlayerSession) -> None:
        self.state.register_session(session)
        log.info("Session %s joined as %s", session.index, session.name)

    @commands.Cog.listener()
    async def on_session_left(self, index: int) -> None:
        session = self.state.remove_session(index)
        if session is not None:
            log.info("Session %s (%s) left", index, session.name)

    @commands.Cog.listener()
    async def on_creature_killed(
        self, creature: Creature | Mapping[str, Any] | None
    ) -> RewardGrant | None:
        if creature is not None and not isinstance(creature, Creature):
            try:
                creature = Creature.from_dict(creature)
            except ModelValidationError as exc:
                log.warning("Ignoring malformed kill payload: %s", "; ".join(exc.errors) or exc)
                return None
        grant = self.kills.handle(creature)
        if grant is not None:
            await self.deliver([grant.feedback])
        return grant

    @app_commands.command(name="mylevel", description="Show your current EXP")
    async def mylevel(self, interaction: discord.Interaction) -> None:
        session = self.session_for_user(interaction.user)
        feedback = self.experience.my_level(session)
        await interaction.response.send_message(feedback.text, ephemeral=True)


async def setup(bot: commands.Bot) -> None:
    await bot.add_cog(PlayerCog(bot))
