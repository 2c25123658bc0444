# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""UserSettings ORM model – start-page layout preferences, one row per user."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from database import Base


class UserSettings(Base):
    __tablename__ = "user_settings"

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    max_number_of_links = Column(Integer, nullable=True)
    link_in_new_tab = Column(Boolean, nullable=True)
    use_bg_image = Column(Boolean, nullable=True)
    bg_image = Column(String(2048), nullable=True)    # URL or data reference
    columns = Column(Integer, nullable=True)
    card_style = Column(String(64), nullable=True)
    enable_neon_shadows = Column(Boolean, nullable=True)
    card_position = Column(String(64), nullable=True)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    user = relationship("User", back_populates="settings")


# Column names exposed through the API, in display order
SETTINGS_FIELDS = (
    "max_number_of_links",
    "link_in_new_tab",
    "use_bg_image",
    "bg_image",
    "columns",
    "card_style",
    "enable_neon_shadows",
    "card_position",
)
