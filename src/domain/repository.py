"""Domain entities for GitHub repositories."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Repository:
    """Immutable repository entity."""
    
    name: str
    url: str
    has_wiki: bool
    is_public: bool
    
    @property
    def wiki_url(self) -> str:
        """URL of the repository's wiki home."""
        return self.url + "/wiki"
