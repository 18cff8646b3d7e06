"""External client interfaces."""

from abc import ABC, abstractmethod
from uuid import UUID


class SessionClient(ABC):
    """
    Abstract client for the external session provider.

    Turns a bearer token into the id of the signed-in user.
    """

    @abstractmethod
    async def resolve(self, token: str) -> UUID:
        """
        Resolve a bearer token.

        Args:
            token: The raw bearer token

        Returns:
            The id of the user the session belongs to

        Raises:
            AuthenticationError: If the token is unknown or expired
            SessionProviderException: If the provider returns an error
            SessionProviderTimeoutException: If the request times out
        """
        ...
