from __future__ import annotations

import datetime as dt
from enum import StrEnum
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, StrIdMixin, TimestampMixin


class Language(StrEnum):
    EN = "en"
    ID = "id"


class Status(StrEnum):
    DRAFT = "draft"
    PUBLISHED = "published"
    REJECTED = "rejected"
    IN_REVIEW = "in_review"


class User(StrIdMixin, TimestampMixin, Base):
    __tablename__ = "users"
    name: Mapped[str] = mapped_column(String(255))
    username: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), unique=True, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    about: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class Topic(StrIdMixin, TimestampMixin, Base):
    __tablename__ = "topics"
    title: Mapped[str] = mapped_column(String(255))
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    language: Mapped[str] = mapped_column(String(8), default=Language.EN)


class Article(StrIdMixin, TimestampMixin, Base):
    __tablename__ = "articles"
    language: Mapped[str] = mapped_column(String(8), default=Language.EN, index=True)
    title: Mapped[str] = mapped_column(String(255))
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    excerpt: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    content: Mapped[str] = mapped_column(Text, default="")
    featured_image: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    status: Mapped[str] = mapped_column(String(16), default=Status.DRAFT, index=True)

    topics: Mapped[list["ArticleTopic"]] = relationship(lazy="raise")
    authors: Mapped[list["ArticleAuthor"]] = relationship(lazy="raise")
    editors: Mapped[list["ArticleEditor"]] = relationship(lazy="raise")


class ArticleTopic(Base):
    __tablename__ = "article_topics"
    article_id: Mapped[str] = mapped_column(ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True)
    topic_id: Mapped[str] = mapped_column(ForeignKey("topics.id", ondelete="CASCADE"), primary_key=True)


class ArticleAuthor(Base):
    __tablename__ = "article_authors"
    article_id: Mapped[str] = mapped_column(ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)


class ArticleEditor(Base):
    __tablename__ = "article_editors"
    article_id: Mapped[str] = mapped_column(ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)


class Genre(StrIdMixin, TimestampMixin, Base):
    __tablename__ = "genres"
    tmdb_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    title: Mapped[str] = mapped_column(String(255))
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True)


class Overview(StrIdMixin, TimestampMixin, Base):
    __tablename__ = "overviews"
    language: Mapped[str] = mapped_column(String(8), default=Language.EN)
    content: Mapped[str] = mapped_column(Text)


class ProductionCompany(StrIdMixin, TimestampMixin, Base):
    __tablename__ = "production_companies"
    tmdb_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    name: Mapped[str] = mapped_column(String(255))
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    logo: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    origin_country: Mapped[Optional[str]] = mapped_column(String(8), nullable=True)


class Movie(StrIdMixin, TimestampMixin, Base):
    __tablename__ = "movies"
    tmdb_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    imdb_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    title: Mapped[str] = mapped_column(String(255))
    original_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    release_date: Mapped[Optional[dt.datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    runtime: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    poster: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    backdrop: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    status: Mapped[str] = mapped_column(String(16), default=Status.DRAFT, index=True)

    genres: Mapped[list["MovieGenre"]] = relationship(lazy="raise")
    production_companies: Mapped[list["MovieProductionCompany"]] = relationship(lazy="raise")


class MovieGenre(Base):
    __tablename__ = "movie_genres"
    movie_id: Mapped[str] = mapped_column(ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True)
    genre_id: Mapped[str] = mapped_column(ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True)


class MovieOverview(Base):
    __tablename__ = "movie_overviews"
    movie_id: Mapped[str] = mapped_column(ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True)
    overview_id: Mapped[str] = mapped_column(ForeignKey("overviews.id", ondelete="CASCADE"), primary_key=True)


class MovieProductionCompany(Base):
    __tablename__ = "movie_production_companies"
    movie_id: Mapped[str] = mapped_column(ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True)
    production_company_id: Mapped[str] = mapped_column(
        ForeignKey("production_companies.id", ondelete="CASCADE"), primary_key=True
    )
