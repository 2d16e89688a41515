from abc import ABC, abstractmethod

class BaseDatabaseDriver(ABC):
    """Store handle provider: owns the engine and hands out sessions."""

    @abstractmethod
    async def connect(self):
        pass

    @abstractmethod
    async def disconnect(self):
        pass

    @abstractmethod
    async def create_all(self):
        pass

    @abstractmethod
    def get_session(self):
        """Async generator yielding one session per logical operation."""
