from sqlalchemy import CheckConstraint, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from ..database import Base


class Book(Base):
    __tablename__ = "books"
    __table_args__ = (
        CheckConstraint("rating >= 0 AND rating <= 5", name="ck_books_rating_range"),
        Index("ix_books_genre_id", "genre_id"),
        Index("ix_books_rating", "rating"),
    )
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    author: Mapped[str] = mapped_column(String, nullable=False)
    # Слабая ссылка на жанр: без внешнего ключа
    genre_id: Mapped[int] = mapped_column(Integer, nullable=False)
    rating: Mapped[float] = mapped_column(Float, nullable=False)
