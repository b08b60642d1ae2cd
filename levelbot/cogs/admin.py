from __future__ import annotations

import logging
from typing import Callable

import discord
from discord import app_commands
from discord.ext import commands

from ..adjustments import AdjustmentResult, ExperienceCommands
from ..models import ResolutionError, ValidationError
from .base import LevelCog, require_admin

log = logging.getLogger(__name__)


class AdminCog(LevelCog):
    """Operator commands for adjusting a connected player's EXP."""

    def __init__(self, bot: commands.Bot):
        super().__init__(bot)
        self.experience = ExperienceCommands(self.store, self.state)

    async def _run(
        self,
        interaction: discord.Interaction,
        action: Callable[[str], AdjustmentResult],
    ) -> None:
        operator = interaction.user.display_name
        try:
            result = action(operator)
        except (ValidationError, ResolutionError) as exc:
            await interaction.response.send_message(str(exc), ephemeral=True)
            return
        await interaction.response.send_message(
            result.operator_message.text, ephemeral=True
        )
        await self.deliver(result.messages)

    @app_commands.command(name="setlevel", description="Set a player's EXP")
    @require_admin()
    @app_commands.guild_only()
    @app_commands.describe(player="Name or index of a connected player", exp="New EXP total")
    async def setlevel(
        self, interaction: discord.Interaction, player: str, exp: str
    ) -> None:
        await self._run(
            interaction,
            lambda operator: self.experience.set_level(operator, player, exp),
        )

    @app_commands.command(name="addlevel", description="Add EXP to a player")
    @require_admin()
    @app_commands.guild_only()
    @app_commands.describe(player="Name or index of a connected player", exp="EXP to add")
    async def addlevel(
        self, interaction: discord.Interaction, player: str, exp: str
    ) -> None:
        await self._run(
            interaction,
            lambda operator: self.experience.add_level(operator, player, exp),
        )

    @app_commands.command(name="minuslevel", description="Remove EXP from a player")
    @require_admin()
    @app_commands.guild_only()
    @app_commands.describe(player="Name or index of a connected player", exp="EXP to remove")
    async def minuslevel(
        self, interaction: discord.Interaction, player: str, exp: str
    ) -> None:
        await self._run(
            interaction,
            lambda operator: self.experience.subtract_level(operator, player, exp),
        )

    @app_commands.command(name="resetlevel", description="Reset a player's EXP to 0")
    @require_admin()
    @app_commands.guild_only()
    @app_commands.describe(player="Name or index of a connected player")
    async def resetlevel(self, interaction: discord.Interaction, player: str) -> None:
        await self._run(
            interaction,
            lambda operator: self.experience.reset_level(operator, player),
        )


async def setup(bot: commands.Bot) -> None:
    await bot.add_cog(AdminCog(bot))
