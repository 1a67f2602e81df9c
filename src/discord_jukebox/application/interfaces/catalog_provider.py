"""Port interface for music catalogs that list songs but do not serve audio."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from discord_jukebox.domain.shared.types import NonEmptyStr


@dataclass(frozen=True)
class CatalogEntry:
    """One song listed by a catalog."""

    name: str
    artist: str

    @property
    def search_query(self) -> str:
        return f'"{self.name}" "{self.artist}"'


@dataclass(frozen=True)
class CatalogListing:
    """Songs referenced by one catalog link (track, album, playlist or artist)."""

    kind: str
    title: str
    entries: list[CatalogEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)


class CatalogProvider(ABC):
    """Interface for reading song listings from a catalog such as Spotify."""

    @abstractmethod
    async def get_listing(self, link: NonEmptyStr) -> CatalogListing:
        """Fetch the full listing a link refers to.

        Raises:
            ResolutionError: If the link is not supported.
            ProviderError: If the catalog could not be reached.
        """
        ...
