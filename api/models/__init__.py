# Models module
from .blog_content import BlogContentModel

__all__ = ["BlogContentModel"]
