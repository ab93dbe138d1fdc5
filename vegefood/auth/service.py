"""Auth service: user registry and current session kept in storage."""
from typing import List, Optional

from vegefood.db import Storage, StorageKeys
from vegefood.errors import (
    ERROR_DUPLICATE_EMAIL,
    ERROR_INVALID_CREDENTIALS,
    ERROR_WEAK_PASSWORD,
    MESSAGE_LOGGED_IN,
    MESSAGE_REGISTERED,
    OperationResult,
)
from vegefood.logging import get_logger, sanitize_string_for_logging
from vegefood.state import StateHolder
from .models import LoginData, RegisterData, User
from .session import create_session_token
from .validators import MIN_PASSWORD_LENGTH

logger = get_logger(__name__)


class AuthService:
    """
    Registration, login and logout against the storage-backed user registry.

    Passwords are stored and compared in cleartext and the session token is
    a reversible encoding. This is a placeholder flow, not an auth system.
    """

    def __init__(self, storage: Storage, hydrate: bool = True):
        self.storage = storage
        self.current_user: StateHolder[Optional[User]] = StateHolder(None)
        if hydrate:
            self.hydrate()

    def hydrate(self) -> None:
        self.current_user.publish(self._load_current_user())

    def _load_current_user(self) -> Optional[User]:
        data = self.storage.read_json(StorageKeys.CURRENT_USER)
        if data is None:
            return None
        try:
            return User.from_dict(data).public()
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Corrupted currentUser data: {e}")
            self.storage.remove_item(StorageKeys.CURRENT_USER)
            return None

    @property
    def current_user_value(self) -> Optional[User]:
        return self.current_user.value

    @property
    def token(self) -> Optional[str]:
        return self.storage.get_item(StorageKeys.AUTH_TOKEN)

    @property
    def is_authenticated(self) -> bool:
        return self.current_user.value is not None and bool(self.token)

    def _read_registry(self) -> list:
        """Raw registry records, or [] if the stored value is not a list."""
        data = self.storage.read_json(StorageKeys.REGISTERED_USERS, default=[])
        if not isinstance(data, list):
            logger.warning("registeredUsers is not a list, ignoring it")
            return []
        return data

    @staticmethod
    def _parse_users(records: list) -> List[User]:
        users = []
        for raw in records:
            try:
                users.append(User.from_dict(raw))
            except (KeyError, TypeError, AttributeError):
                logger.warning("Skipping malformed registered user record")
        return users

    def get_registered_users(self) -> List[User]:
        return self._parse_users(self._read_registry())

    def register(self, data: RegisterData) -> OperationResult:
        """
        Append a new user to the registry.

        Records that cannot be parsed are skipped for the duplicate check but
        written back untouched.
        """
        records = self._read_registry()

        if any(u.email == data.email for u in self._parse_users(records)):
            return OperationResult.fail(ERROR_DUPLICATE_EMAIL)

        if len(data.password) < MIN_PASSWORD_LENGTH:
            return OperationResult.fail(ERROR_WEAK_PASSWORD)

        new_user = User(username=data.username, email=data.email, password=data.password)
        self.storage.write_json(StorageKeys.REGISTERED_USERS, records + [new_user.to_dict()])
        logger.info(f"Registered user {sanitize_string_for_logging(data.email)}")
        return OperationResult.ok(MESSAGE_REGISTERED)

    def login(self, data: LoginData) -> OperationResult:
        user = next(
            (u for u in self.get_registered_users()
             if u.email == data.email and u.password == data.password),
            None,
        )
        if user is None:
            return OperationResult.fail(ERROR_INVALID_CREDENTIALS)

        session_user = user.public()
        self.storage.write_json(StorageKeys.CURRENT_USER, session_user.to_dict())
        self.storage.set_item(StorageKeys.AUTH_TOKEN, create_session_token(user.email))
        self.current_user.publish(session_user)
        return OperationResult.ok(MESSAGE_LOGGED_IN)

    def logout(self) -> None:
        self.storage.remove_item(StorageKeys.CURRENT_USER)
        self.storage.remove_item(StorageKeys.AUTH_TOKEN)
        self.current_user.publish(None)
