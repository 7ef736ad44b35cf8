"""
Repositories package

Each repository encapsulates database operations for a model:
- content_repository.py
- download_link_repository.py
- season_repository.py
- etc.

Usage:
    from repositories.content_repository import ContentRepository
    content = ContentRepository.get_by_id(content_id)
"""
