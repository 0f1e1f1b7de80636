from typing import Optional

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from .Base import Base


class Contact(Base):
    __tablename__ = "contacts"
    id: Mapped[int] = mapped_column(sa.Integer, default=None, primary_key=True)
    name: Mapped[str] = mapped_column(sa.String(128), nullable=False, index=True)
    telephone: Mapped[Optional[str]] = mapped_column(sa.String(32), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(sa.String(128), nullable=True)

    def to_line(self) -> str:
        return f"{self.name} Tele: {self.telephone or ''} Email: <{self.email or ''}>"

    def __str__(self) -> str:
        return self.__repr__()

    def __repr__(self) -> str:
        return f"Contact(id={self.id}, name={self.name}, telephone={self.telephone}, email={self.email})"
