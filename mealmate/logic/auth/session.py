"""Signed-in session lifecycle: restore at start, login/signup/logout, re-validate on resume."""
import logging
from typing import Optional

from mealmate.domain.User import User
from mealmate.infra.api_client import ApiClient, ApiError, AuthExpiredError
from mealmate.infra.Session_Storage import SessionStorage
from mealmate.utilities.constants import ENDPOINTS
from mealmate.utilities.validators import LoginInput, SignupInput

logger = logging.getLogger(__name__)

AUTH = ENDPOINTS["auth"]
BACKGROUND_STATES = ("inactive", "background")


class AuthSession:
    def __init__(self, client: ApiClient, storage: SessionStorage):
        self.client = client
        self.storage = storage
        self.user: Optional[User] = None
        self.is_loading = True
        client.on_auth_expired = self.handle_auth_expired

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def handle_auth_expired(self) -> None:
        logger.info("Auth expired, clearing user state")
        self.user = None

    async def restore(self) -> Optional[User]:
        """Bring back a previous session at app start (cached user first, then the server)."""
        try:
            if self.storage.get_token():
                stored = self.storage.get_user()
                if stored is not None:
                    self.user = stored
                else:
                    self.user = await self.get_current_user()
                    if self.user is None:
                        self.storage.clear_auth()
        finally:
            self.is_loading = False
        return self.user

    async def _authenticate(self, action: str, body) -> User:
        data = await self.client.post(f"{AUTH}/{action}", json=body.to_payload(), auth=False)
        user = User.from_dict(data["user"])
        self.storage.set_token(data["token"])
        self.storage.set_user(user)
        self.user = user
        return user

    async def login(self, email: str, password: str) -> User:
        body = LoginInput(email=email, password=password)
        logger.info("Attempting login for %s", body.email)
        try:
            user = await self._authenticate("login", body)
        except ApiError as e:
            logger.error("Login error: %s", e)
            raise
        logger.info("Login successful")
        return user

    async def signup(self, email: str, password: str, name: str) -> User:
        body = SignupInput(email=email, password=password, name=name)
        try:
            return await self._authenticate("register", body)
        except ApiError as e:
            logger.error("Signup error: %s", e)
            raise

    def logout(self) -> None:
        try:
            self.storage.clear_auth()
        finally:
            # Always clear user state, even if storage clear fails
            self.user = None

    async def get_current_user(self) -> Optional[User]:
        if not self.storage.get_token():
            return None
        try:
            data = await self.client.get(f"{AUTH}/me")
        except ApiError:
            return None
        return User.from_dict(data["user"]) if data and data.get("user") else None

    async def refresh_user(self) -> Optional[User]:
        user = await self.get_current_user()
        if user is not None:
            self.user = user
            self.storage.set_user(user)
        return self.user

    async def refresh_token(self) -> Optional[str]:
        try:
            data = await self.client.post(f"{AUTH}/refresh")
        except ApiError as e:
            logger.warning("Token refresh failed: %s", e)
            self.storage.clear_auth()
            return None
        self.storage.set_token(data["token"])
        self.user = User.from_dict(data["user"])
        self.storage.set_user(self.user)
        return data["token"]

    async def validate_on_resume(self) -> bool:
        """Check the stored token after the app returns to the foreground.

        Only a server rejection ends the session; network or server errors
        keep it, since they may be temporary.
        """
        if not self.storage.get_token():
            if self.user is not None:
                logger.info("No token found on resume, clearing user")
                self.user = None
            return False
        try:
            data = await self.client.get(f"{AUTH}/me")
        except AuthExpiredError:
            # the client already cleared storage and called handle_auth_expired
            return False
        except ApiError as e:
            logger.info("Error validating auth on resume: %s", e)
            return self.is_authenticated
        if not data or not data.get("user"):
            logger.info("Token invalid on resume, clearing auth")
            self.storage.clear_auth()
            self.user = None
            return False
        return True

    async def on_app_state_change(self, previous: str, current: str) -> None:
        if previous in BACKGROUND_STATES and current == "active":
            logger.info("App came to foreground, validating auth")
            await self.validate_on_resume()
