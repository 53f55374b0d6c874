"""CLI command modules.

Command Groups:
- users: create/drop the application role (run as the postgres OS account)
- database: create, drop, dump and restore the application database
"""

from .database import (
    create_database,
    drop_database,
    dump_database,
    restore_database,
)
from .users import create_user, drop_user

__all__ = [
    "create_user",
    "drop_user",
    "create_database",
    "drop_database",
    "dump_database",
    "restore_database",
]
