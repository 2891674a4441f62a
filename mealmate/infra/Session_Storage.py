"""Device-local key-value storage for the auth token and the cached user.

The token goes to the secure store when the platform offers one (owner-only
file permissions on POSIX) and to the general store otherwise. The cached
user is not secret and always lives in the general store.
"""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from mealmate.domain.User import User
from mealmate.infra.paths import SECURE_SESSION_FILE, SESSION_FILE

logger = logging.getLogger(__name__)

TOKEN_KEY = "auth_token"
USER_KEY = "user_data"


class KeyValueStore:
    """String values keyed by name, persisted as one JSON object on disk."""

    file_mode = 0o644

    def __init__(self, path):
        self.path = Path(path)

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}

    def _atomic_write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".session_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(data, tmp, indent=2, ensure_ascii=False)
            os.chmod(tmp_path, self.file_mode)
            shutil.move(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._atomic_write(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._atomic_write(data)


class SecureKeyValueStore(KeyValueStore):
    """KeyValueStore readable and writable by the owning user only."""

    file_mode = 0o600

    @staticmethod
    def is_available() -> bool:
        return os.name == "posix"


class SessionStorage:
    """Token and cached-user slots shared by every request in the process."""

    def __init__(self, general: Optional[KeyValueStore] = None,
                 secure: Optional[KeyValueStore] = None):
        self.general = general or KeyValueStore(SESSION_FILE)
        if secure is None and SecureKeyValueStore.is_available():
            secure = SecureKeyValueStore(SECURE_SESSION_FILE)
        self.token_store = secure or self.general

    # --- token ---
    def get_token(self) -> Optional[str]:
        try:
            return self.token_store.get_item(TOKEN_KEY)
        except (OSError, ValueError) as e:
            logger.error("Error getting token: %s", e)
            return None

    def set_token(self, token: str) -> None:
        try:
            self.token_store.set_item(TOKEN_KEY, token)
        except OSError as e:
            logger.error("Error setting token: %s", e)
            raise

    def remove_token(self) -> None:
        try:
            self.token_store.remove_item(TOKEN_KEY)
        except (OSError, ValueError) as e:
            logger.error("Error removing token: %s", e)

    # --- cached user ---
    def get_user(self) -> Optional[User]:
        try:
            raw = self.general.get_item(USER_KEY)
            return User.from_dict(json.loads(raw)) if raw else None
        except (OSError, ValueError) as e:
            logger.error("Error getting user: %s", e)
            return None

    def set_user(self, user: User) -> None:
        try:
            self.general.set_item(USER_KEY, json.dumps(user.to_dict()))
        except OSError as e:
            logger.error("Error setting user: %s", e)
            raise

    def remove_user(self) -> None:
        try:
            self.general.remove_item(USER_KEY)
        except (OSError, ValueError) as e:
            logger.error("Error removing user: %s", e)

    def clear_auth(self) -> None:
        """Drop both the token and the cached user."""
        self.remove_token()
        self.remove_user()
