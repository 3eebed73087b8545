"""Wire the client together: API client, router, stores."""
from dataclasses import dataclass

import httpx

from client.api import DEFAULT_API_URL, ApiClient
from client.router import Router
from client.storage import MemoryStorage
from client.stores.auth import AuthStore
from client.stores.dashboard import DashboardStore
from client.stores.stations import StationStore


@dataclass
class ClientApp:
    api: ApiClient
    router: Router
    auth: AuthStore
    stations: StationStore
    dashboard: DashboardStore


def create_client_app(
    api_url: str = DEFAULT_API_URL,
    storage: MemoryStorage | None = None,
    http: httpx.Client | None = None,
) -> ClientApp:
    """Build the client and rehydrate any persisted session."""
    api = ApiClient(api_url, http=http)
    router = Router()
    auth = AuthStore(api, router, storage)
    api.token_provider = lambda: auth.token
    router.auth_check = auth.is_logged_in
    auth.check_auth()
    return ClientApp(
        api=api,
        router=router,
        auth=auth,
        stations=StationStore(api),
        dashboard=DashboardStore(api),
    )
