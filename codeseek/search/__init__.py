# codeseek/search/__init__.py
"""Query forwarding against an always-fresh index."""

from codeseek.search.delegate import NO_RESULTS_MESSAGE, SearchDelegate, build_search_delegate

__all__ = ["SearchDelegate", "NO_RESULTS_MESSAGE", "build_search_delegate"]
