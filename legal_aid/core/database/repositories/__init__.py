"""
Repositories for the Legal Aid database layer.

Each module groups the repositories of one business domain; ``bundle``
exposes all of them bound to a single session.
"""

from .base import BaseRepository, QueryBuilder
from .bundle import RepoBundle, build_repos

__all__ = ["BaseRepository", "QueryBuilder", "RepoBundle", "build_repos"]
