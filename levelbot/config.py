"""Bot configuration utilities."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .storage import DEFAULT_DATABASE_FILE

DEFAULT_ADMIN_ROLE = "level.admin"


def env(name: str, default: str | None = None) -> str:
    value = os.getenv(name, default)
    if value is None:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


@dataclass(slots=True)
class BotConfig:
    token: str
    database_file: str = DEFAULT_DATABASE_FILE
    reward_seed: int | None = None
    admin_roles: tuple[str, ...] = (DEFAULT_ADMIN_ROLE,)

    @classmethod
    def from_env(cls) -> "BotConfig":
        token = env("DISCORD_TOKEN")
        database_file = os.getenv("LEVEL_DATABASE_FILE", DEFAULT_DATABASE_FILE).strip()
        raw_seed = os.getenv("LEVEL_REWARD_SEED", "").strip()
        reward_seed = int(raw_seed) if raw_seed else None
        raw_roles = os.getenv("LEVEL_ADMIN_ROLES", DEFAULT_ADMIN_ROLE)
        admin_roles = tuple(
            role.strip() for role in raw_roles.split(",") if role.strip()
        )

        return cls(
            token=token,
            database_file=database_file or DEFAULT_DATABASE_FILE,
            reward_seed=reward_seed,
            admin_roles=admin_roles,
        )


__all__ = ["BotConfig"]
