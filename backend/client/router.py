"""Client-side route table and navigation with an auth guard."""
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field

from client.reactive import Observable

LOG = logging.getLogger(__name__)

LOGIN_PATH = "/login"


@dataclass(frozen=True)
class Route:
    """A named path. `:name` segments capture params; path "*" matches anything."""

    name: str
    path: str
    requires_auth: bool = False


# Order matters: first match wins, catch-all last.
ROUTES: tuple[Route, ...] = (
    Route("home", "/"),
    Route("login", "/login"),
    Route("register", "/register"),
    Route("dashboard", "/dashboard", requires_auth=True),
    Route("stations", "/stations", requires_auth=True),
    Route("station-new", "/stations/new", requires_auth=True),
    Route("station-detail", "/stations/:id", requires_auth=True),
    Route("station-edit", "/stations/:id/edit", requires_auth=True),
    Route("map", "/map"),
    Route("not-found", "*"),
)


@dataclass(frozen=True)
class RouteMatch:
    route: Route
    path: str
    params: dict[str, str] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.route.name


def _compile(path: str) -> re.Pattern:
    if path == "*":
        return re.compile(r"^.*$")
    parts = []
    for segment in path.strip("/").split("/"):
        if segment.startswith(":"):
            parts.append(rf"(?P<{segment[1:]}>[^/]+)")
        elif segment:
            parts.append(re.escape(segment))
    return re.compile("^/" + "/".join(parts) + "$")


class Router(Observable):
    """Resolves paths to routes and navigates, redirecting to /login when a route requires auth."""

    def __init__(
        self,
        routes: tuple[Route, ...] = ROUTES,
        auth_check: Callable[[], bool] | None = None,
    ) -> None:
        super().__init__()
        self._routes = [(r, _compile(r.path)) for r in routes]
        self.auth_check = auth_check or (lambda: False)
        self.current: RouteMatch | None = None
        self.history: list[str] = []

    def resolve(self, path: str) -> RouteMatch:
        """Match a path (query string ignored, trailing slash tolerated) to the first route."""
        clean = path.split("?", 1)[0].split("#", 1)[0]
        if len(clean) > 1:
            clean = clean.rstrip("/")
        clean = clean or "/"
        for route, pattern in self._routes:
            m = pattern.match(clean)
            if m:
                return RouteMatch(route=route, path=clean, params=m.groupdict())
        raise LookupError(f"No route matches {path!r}")

    def push(self, path: str) -> RouteMatch:
        """Navigate to path, applying the auth guard. Returns the route actually entered."""
        match = self.resolve(path)
        if match.route.requires_auth and not self.auth_check():
            LOG.info("Route %s requires auth; redirecting to %s", match.name, LOGIN_PATH)
            match = self.resolve(LOGIN_PATH)
        self.current = match
        self.history.append(match.path)
        self.notify()
        return match
