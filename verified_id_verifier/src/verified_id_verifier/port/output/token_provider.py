"""Token provider port - Interface for obtaining access tokens for the request service"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from returns.result import Result


@dataclass(frozen=True)
class AccessToken:
    """
    Bearer token for the Verified ID request service.

    Attributes:
        token: Bearer token value
        expires_at: When the token stops being valid
    """

    token: str
    expires_at: datetime

    def __repr__(self) -> str:
        return f"AccessToken(expires_at={self.expires_at.isoformat()})"


class TokenAcquisitionError(Exception):
    """Error while obtaining an access token"""

    pass


class TokenProvider(ABC):
    """
    Source of bearer credentials for calling the request service.

    Implementations may cache tokens; a call never retries on failure.
    """

    @abstractmethod
    async def acquire_token(self) -> Result[AccessToken, TokenAcquisitionError]:
        """
        Obtain an access token.

        Returns:
            Success(AccessToken) or Failure(TokenAcquisitionError)
        """
        pass
