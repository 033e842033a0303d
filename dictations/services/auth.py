from abc import ABC, abstractmethod


class Authenticator(ABC):
    @abstractmethod
    async def authenticate(self, user: str) -> None:
        """Raise ``AuthenticationError`` when ``user`` may not write."""
        raise NotImplementedError


class AllowAllAuthenticator(Authenticator):
    # No user authentication yet; every caller is accepted.
    async def authenticate(self, user: str) -> None:
        return None
