# Public DB API exports
from .settings import DBSettings, get_db_settings
from .engine import DBEngine
from .base import Base, StrIdMixin, TimestampMixin
from .models import (
    Article,
    ArticleAuthor,
    ArticleEditor,
    ArticleTopic,
    Genre,
    Language,
    Movie,
    MovieGenre,
    MovieOverview,
    MovieProductionCompany,
    Overview,
    ProductionCompany,
    Status,
    Topic,
    User,
)
from .repository import Repository, apply_filters, fetch_rows, page_window, to_dict

__all__ = [
    "DBSettings",
    "get_db_settings",
    "DBEngine",
    "Base",
    "StrIdMixin",
    "TimestampMixin",
    "Article",
    "ArticleAuthor",
    "ArticleEditor",
    "ArticleTopic",
    "Genre",
    "Language",
    "Movie",
    "MovieGenre",
    "MovieOverview",
    "MovieProductionCompany",
    "Overview",
    "ProductionCompany",
    "Status",
    "Topic",
    "User",
    "Repository",
    "apply_filters",
    "fetch_rows",
    "page_window",
    "to_dict",
]
