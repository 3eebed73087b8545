"""Dashboard aggregate store."""
from client.api import ApiClient, ApiError
from client.reactive import Observable


class DashboardStore(Observable):
    def __init__(self, api: ApiClient) -> None:
        super().__init__()
        self.api = api
        self.summary: dict | None = None
        self.loading = False
        self.error: str | None = None

    def fetch(self) -> dict | None:
        self.loading = True
        self.error = None
        try:
            self.summary = self.api.dashboard()
        except ApiError as e:
            self.error = e.message or "Failed to load dashboard."
        finally:
            self.loading = False
            self.notify()
        return self.summary
