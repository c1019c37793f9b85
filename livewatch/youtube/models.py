from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class LiveItem:
    video_id: str
    title: str
    channel_title: str = ""
    published_at: str = ""
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_search_result(cls, item: Dict[str, Any]) -> "LiveItem":
        if not isinstance(item, dict):
            raise ValueError(f"search result is not an object: {item!r}")
        ident = item.get("id") or {}
        snippet = item.get("snippet") or {}
        if not isinstance(ident, dict) or not isinstance(snippet, dict):
            raise ValueError(f"search result has malformed id or snippet: {item!r}")
        return cls(
            video_id=ident.get("videoId", ""),
            title=snippet.get("title", ""),
            channel_title=snippet.get("channelTitle", ""),
            published_at=snippet.get("publishedAt", ""),
            raw=item,
        )

    @property
    def url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.video_id}"
