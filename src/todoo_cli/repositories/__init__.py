"""Repository interfaces for the Todoo CLI.

Implementations (Adapters) are in:
- todoo_cli.adapters.json_file (JSON files on disk)
- todoo_cli.adapters.memory (in-process dict)
"""

from .repository import DEFAULT_NAMESPACE, UserDataRepository, build_key

__all__ = [
    "UserDataRepository",
    "DEFAULT_NAMESPACE",
    "build_key",
]
