from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, RecordMixin


class User(RecordMixin, Base):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(18), unique=True, nullable=False)
    codeword_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    symbol: Mapped[str] = mapped_column(String(16), nullable=False)
    profile_image: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_game_master: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
