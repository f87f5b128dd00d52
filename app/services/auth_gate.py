from app.core.errors import UnauthenticatedError
from app.models import CallerIdentity
from app.services.identity_service import IdentityService

BEARER_PREFIX = "Bearer"


class AuthenticationGate:
    """
    Turns an ``Authorization`` header into the caller's identity.

    Checks run in a fixed order and stop at the first failure:

    1. the header carries a bearer token
    2. the token verifies (expired and invalid tokens raise distinct errors)
    3. the token's subject still exists

    Nothing is cached between requests, so deleting a user invalidates
    every token issued for them on the next call.
    """

    def __init__(self, identity_service: IdentityService):
        self._identity_service = identity_service

    @staticmethod
    def extract_token(authorization: str | None) -> str | None:
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            return None
        parts = authorization.split(" ")
        if len(parts) < 2 or not parts[1]:
            return None
        return parts[1]

    async def authenticate(self, authorization: str | None) -> CallerIdentity:
        token = self.extract_token(authorization)
        if token is None:
            raise UnauthenticatedError()

        user_id = self._identity_service.verify_token(token)

        user = await self._identity_service.resolve_identity(user_id)
        if user is None:
            raise UnauthenticatedError(
                "The user belonging to this token no longer exists."
            )

        return CallerIdentity.model_validate(user)
