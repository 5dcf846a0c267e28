"""Player-day models."""

from .player import OptimizedPlayerDay, PlayerDay, parse_positions

__all__ = ["OptimizedPlayerDay", "PlayerDay", "parse_positions"]
