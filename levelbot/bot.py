"""Entry point for the Level System Discord bot."""

from __future__ import annotations

import asyncio
import logging
import random
from pathlib import Path

import discord
from discord.ext import commands

from .config import BotConfig
from .game import GameState
from .rewards import RewardCalculator
from .storage import ExperienceStore, resolve_storage_root

log = logging.getLogger(__name__)

PROJECT_BASE = Path(__file__).resolve().parent.parent


class LevelBot(commands.Bot):
    def __init__(self, config: BotConfig):
        intents = discord.Intents.default()
        super().__init__(command_prefix="!", intents=intents)
        self.config = config
        self.state = GameState()
        storage_root = resolve_storage_root(PROJECT_BASE)
        self.store = ExperienceStore(storage_root / config.database_file)
        self.rewards = RewardCalculator(random.Random(config.reward_seed))
        self._synced = False

    async def setup_hook(self) -> None:
        await self.load_extension("levelbot.cogs.player")
        await self.load_extension("levelbot.cogs.admin")

    async def on_ready(self) -> None:
        if not self.store.is_open:
            self.store.open()
        if not self._synced:
            await self.tree.sync()
            for guild in self.guilds:
                await self.tree.sync(guild=guild)
            self._synced = True
            log.info("Application commands synced")
        if self.user:
            log.info("Connected as %s (%s)", self.user, self.user.id)

    async def close(self) -> None:
        self.store.close()
        await super().close()


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    config = BotConfig.from_env()
    bot = LevelBot(config)
    async with bot:
        await bot.start(config.token)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
