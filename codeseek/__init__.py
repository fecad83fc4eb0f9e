# codeseek/__init__.py
"""
codeseek - incremental codebase indexing for remote semantic search.

Walks a local project, splits its text files into content-addressed blobs,
uploads only the blobs the backend has not seen yet, and forwards
natural-language queries against the resulting index.

Examples:
    >>> from codeseek import load_config, build_search_delegate
    >>> config = load_config()
    >>> delegate = build_search_delegate(config)
    >>> print(delegate.query("/home/me/project", "where is auth handled?"))
"""

from codeseek.core.config import CodeseekConfig, load_config
from codeseek.index.executor import IndexExecutor, IndexResult, IndexStatus, build_executor
from codeseek.search.delegate import SearchDelegate, build_search_delegate

__version__ = "0.3.0"

__all__ = [
    "CodeseekConfig",
    "load_config",
    "IndexExecutor",
    "IndexResult",
    "IndexStatus",
    "build_executor",
    "SearchDelegate",
    "build_search_delegate",
    "__version__",
]
