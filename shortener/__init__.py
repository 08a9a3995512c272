"""Core business logic for URL shortener."""

from .shortcode import ShortCodeGenerator
from .registry import CodeRegistry
from .resolution import ResolutionService
from .service import URLShortenerService

__all__ = ["ShortCodeGenerator", "CodeRegistry", "ResolutionService", "URLShortenerService"]
