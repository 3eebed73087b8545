"""Auth session store: user, token, loading and error, persisted in storage."""
import json
import logging

from client.api import ApiClient, ApiError
from client.reactive import Observable
from client.router import Router
from client.storage import MemoryStorage

LOG = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


class AuthStore(Observable):
    """
    Holds the signed-in session. `token` is read by the ApiClient on every request,
    so clearing it here is enough to stop sending credentials.
    """

    def __init__(self, api: ApiClient, router: Router, storage: MemoryStorage | None = None) -> None:
        super().__init__()
        self.api = api
        self.router = router
        self.storage = storage if storage is not None else MemoryStorage()
        self.user: dict | None = None
        self.token: str | None = None
        self.loading = False
        self.error: str | None = None

    def is_logged_in(self) -> bool:
        return bool(self.token)

    def check_auth(self) -> None:
        """Rehydrate from storage at startup. Malformed user data is discarded, never raised."""
        stored_token = self.storage.get_item(TOKEN_KEY)
        stored_user = self.storage.get_item(USER_KEY)
        if not (stored_token and stored_user):
            return
        self.token = stored_token
        try:
            user = json.loads(stored_user)
            if not isinstance(user, dict):
                raise ValueError("stored user is not an object")
            self.user = user
        except ValueError as e:
            LOG.error("Failed to parse user data from storage: %s", e)
            self.storage.remove_item(USER_KEY)
            self.user = None
        self.notify()

    def _start_session(self, data: dict) -> None:
        self.token = data["token"]
        self.user = data["user"]
        self.storage.set_item(TOKEN_KEY, self.token)
        self.storage.set_item(USER_KEY, json.dumps(self.user))

    def _authenticate(self, call, fallback: str, unexpected: str, **kwargs) -> bool:
        self.loading = True
        self.error = None
        self.notify()
        try:
            self._start_session(call(**kwargs))
            self.router.push("/dashboard")
            return True
        except ApiError as e:
            self.error = e.message or fallback
            return False
        except (KeyError, TypeError) as e:
            LOG.exception("Malformed auth response: %s", e)
            self.error = unexpected
            return False
        finally:
            self.loading = False
            self.notify()

    def login(self, email: str, password: str) -> bool:
        """Sign in; on success persist the session and go to the dashboard."""
        return self._authenticate(
            self.api.login,
            "Login failed. Please check your credentials.",
            "An unexpected error occurred during login.",
            email=email,
            password=password,
        )

    def register(self, name: str, email: str, password: str) -> bool:
        """Create an account; on success persist the session and go to the dashboard."""
        return self._authenticate(
            self.api.register,
            "Registration failed. Please try again.",
            "An unexpected error occurred during registration.",
            name=name,
            email=email,
            password=password,
        )

    def logout(self) -> None:
        """Clear state and storage, then go to the login page."""
        self.token = None
        self.user = None
        self.storage.remove_item(TOKEN_KEY)
        self.storage.remove_item(USER_KEY)
        self.notify()
        self.router.push("/login")
