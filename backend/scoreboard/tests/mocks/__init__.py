from scoreboard.tests.mocks.game_store import MemoryGameStore

__all__ = ["MemoryGameStore"]
