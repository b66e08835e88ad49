"""Protocol for icon resolvers."""

from typing import Optional, Protocol

from linkmark.icons.models import FetchedPage, IconQuery, IconResult


class Resolver(Protocol):
    """A component turning a bookmark URL and title into an icon."""

    async def resolve_icon(
        self, query: IconQuery, page: Optional[FetchedPage] = None
    ) -> IconResult:  # pragma: no cover
        """Resolve the icon of `query`. Implementations never raise for network failures.

        `page` is the already fetched page of `query.url`, if the caller has one.
        """
        ...

    async def close(self) -> None:  # pragma: no cover
        """Release any underlying resources."""
        ...
