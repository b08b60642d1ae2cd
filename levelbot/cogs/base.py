"""Shared helpers for cogs."""

from __future__ import annotations

import logging
from typing import Iterable

import discord
from discord import app_commands
from discord.ext import commands

from ..game import GameState
from ..models import Feedback, PlayerSession
from ..rewards import RewardCalculator
from ..storage import ExperienceStore

log = logging.getLogger(__name__)

TRANSIENT_SESSION_INDEX = -1


def require_admin() -> app_commands.Check:
    """Check ensuring the invoker is a guild administrator or holds an admin role."""

    async def predicate(interaction: discord.Interaction) -> bool:
        guild = interaction.guild
        if guild is None:
            raise app_commands.CheckFailure("This command can only be used in a guild.")

        member: discord.Member | None
        user = interaction.user
        if isinstance(user, discord.Member):
            member = user
        else:
            member = guild.get_member(user.id)
            if member is None:
                try:
                    member = await guild.fetch_member(user.id)
                except discord.HTTPException:
                    member = None

        if member is not None and member.guild_permissions.administrator:
            return True

        config = getattr(interaction.client, "config", None)
        admin_roles = set(getattr(config, "admin_roles", ()))
        if member is not None and any(role.name in admin_roles for role in member.roles):
            return True

        raise app_commands.CheckFailure(
            "Only server administrators or level admins may use this command."
        )

    return app_commands.check(predicate)


class LevelCog(commands.Cog):
    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @property
    def store(self) -> ExperienceStore:
        return self.bot.store  # type: ignore[return-value]

    @property
    def state(self) -> GameState:
        return self.bot.state  # type: ignore[return-value]

    @property
    def rewards(self) -> RewardCalculator:
        return self.bot.rewards  # type: ignore[return-value]

    def session_for_user(self, user: discord.abc.User) -> PlayerSession:
        """Return the game session linked to ``user``.

        Users without a connected session still own their account identity, so
        a transient session carrying their id is returned instead.
        """

        session = self.state.session_for_account(user.id)
        if session is not None:
            return session
        return PlayerSession(
            index=TRANSIENT_SESSION_INDEX,
            name=getattr(user, "display_name", None) or user.name,
            account_id=user.id,
            active=False,
        )

    async def deliver(self, messages: Iterable[Feedback]) -> None:
        """Send feedback addressed to player sessions as direct messages."""

        for message in messages:
            session = message.recipient
            if session is None:
                continue
            user = None
            if session.account_id is not None:
                user = self.bot.get_user(session.account_id)
            if user is None:
                log.info("No reachable user for %s: %s", session.name, message.text)
                continue
            try:
                await user.send(message.text)
            except discord.HTTPException:
                log.warning("Failed to deliver feedback to %s", session.name, exc_info=True)

    async def cog_app_command_error(
        self,
        interaction: discord.Interaction,
        error: app_commands.AppCommandError,
    ) -> None:
        # Anything else falls through to the tree's error handler.
        if not isinstance(error, app_commands.CheckFailure):
            return
        message = str(error) or "You cannot use this command."
        if interaction.response.is_done():
            await interaction.followup.send(message, ephemeral=True)
        else:
            await interaction.response.send_message(message, ephemeral=True)
