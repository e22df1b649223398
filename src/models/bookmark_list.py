"""BookmarkList model for storing named, ordered collections of bookmarks."""
from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin


class BookmarkList(Base, TimestampMixin):
    """
    BookmarkList model - a name plus an ordered sequence of bookmark references.

    The sequence lives in bookmark_list_items, one row per reference, ordered
    by position.
    """

    __tablename__ = "bookmark_lists"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    items: Mapped[list["BookmarkListItem"]] = relationship(
        back_populates="bookmark_list",
        order_by="BookmarkListItem.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def bookmark_ids(self) -> list[int]:
        """Referenced bookmark ids in list order."""
        return [item.bookmark_id for item in self.items]


class BookmarkListItem(Base):
    """A single bookmark reference inside a list."""

    __tablename__ = "bookmark_list_items"

    list_id: Mapped[int] = mapped_column(
        ForeignKey("bookmark_lists.id", ondelete="CASCADE"),
        primary_key=True,
    )
    bookmark_id: Mapped[int] = mapped_column(
        ForeignKey("bookmarks.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    bookmark_list: Mapped["BookmarkList"] = relationship(back_populates="items")
