"""Discord cogs exposing the level system."""
