"""blogsearch - instant search over a blog's aggregate index."""

__version__ = "0.1.0"
