"""Level System: experience rewards and persistence for a multiplayer game server."""
