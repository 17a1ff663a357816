"""Session resolution provider."""

from dataclasses import dataclass

from dishka import Scope, provide
from fastapi import Request

from roost.config import AuthSettings
from roost.domain.service import JWTService
from roost.util.di.base import ProviderBase


@dataclass(frozen=True)
class Session:
    """The caller's session, resolved from the auth cookie.

    Attributes:
        user_id: Signed-in user ID as a string, None for anonymous callers
    """

    user_id: str | None = None


class ProdSessionProvider(ProviderBase):
    """Resolves the request's session cookie - concrete, no mocks needed.

    Invalid or expired tokens resolve to an anonymous session; endpoints that
    need a user reject it later with 401.
    """

    @provide(scope=Scope.REQUEST)
    def get_session(
        self,
        request: Request,
        jwt_service: JWTService,
        auth_settings: AuthSettings,
    ) -> Session:
        """Provide the current request's session."""
        token = request.cookies.get(auth_settings.cookie_name)
        user_id = jwt_service.get_user_id_from_token(token)
        return Session(user_id=str(user_id) if user_id else None)
