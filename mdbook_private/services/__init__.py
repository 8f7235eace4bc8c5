"""Service layer for the private preprocessor.

Provides the section transformer, the chapter filter, the preprocessor
that combines them for one build, and an HTML preview renderer.
"""

from .section_service import SectionService, transform
from .filter_service import DanglingLink, FilterResult, FilterService, filter_chapters
from .preprocessor_service import PrivatePreprocessor
from .render_service import RenderService

__all__ = [
    "SectionService",
    "transform",
    "DanglingLink",
    "FilterResult",
    "FilterService",
    "filter_chapters",
    "PrivatePreprocessor",
    "RenderService",
]
