"""
Database Repositories Package
"""
from database.repositories.base_repository import BaseRepository
from database.repositories.domain_repository import DomainRepository
from database.repositories.search_repository import SearchRepository

__all__ = [
    "BaseRepository",
    "DomainRepository",
    "SearchRepository"
]
