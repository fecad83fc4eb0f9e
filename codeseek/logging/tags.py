# codeseek/logging/tags.py
"""
Log message tags.

Prefix messages with a tag so a single log stream can be filtered by stage:

    logger.info(f"{UPLOAD} Uploading batch 1/3 (10 blobs)")
"""

CLI = "[CLI]"
CONFIG = "[CONFIG]"
SCAN = "[SCAN]"
CHUNKING = "[CHUNKING]"
INDEX = "[INDEX]"
UPLOAD = "[UPLOAD]"
STATE = "[STATE]"
BACKEND = "[BACKEND]"
SEARCH = "[SEARCH]"

__all__ = [
    "CLI",
    "CONFIG",
    "SCAN",
    "CHUNKING",
    "INDEX",
    "UPLOAD",
    "STATE",
    "BACKEND",
    "SEARCH",
]
