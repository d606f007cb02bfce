"""Post model - source documents the ideas were extracted from."""

from dataclasses import dataclass


@dataclass
class Post:
    """
    A source document, keyed by the ``source_id`` of its ideas.

    Only the metadata the runtime needs is modeled; the raw HTML and
    chunk offsets are carried through untouched in ``extra``.
    """

    id: str
    title: str
    subtitle: str = ""
    date: str | None = None
    extra: dict | None = None

    def to_dict(self) -> dict:
        data = dict(self.extra or {})
        data.update({"title": self.title, "subtitle": self.subtitle, "date": self.date})
        return data

    @classmethod
    def from_dict(cls, post_id: str, data: dict) -> "Post":
        """Create from a posts.json entry (the key is the post id)."""
        extra = {k: v for k, v in data.items() if k not in ("title", "subtitle", "date")}
        return cls(
            id=post_id,
            title=data.get("title") or "",
            subtitle=data.get("subtitle") or "",
            date=data.get("date"),
            extra=extra or None,
        )
