from datetime import datetime
from typing import List, Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from sqlalchemy import ARRAY, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column


class SidebarItem(Base):
    """Navigation entry shown to the roles listed in ``user_access``."""

    __tablename__ = "sidebar_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    icon: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    user_access: Mapped[List[int]] = mapped_column(
        ARRAY(Integer), nullable=False, default=list
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )

    def __repr__(self):
        return f"<SidebarItem {self.name}>"
