"""
reset_user_management.py — Reset the instance to its default user state.

Same as the `user-management-reset` console script, runnable from a checkout.

Example (from backend/):
    python scripts/reset_user_management.py --database-url sqlite:///./instance.db
"""

from __future__ import annotations

import sys
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parent.parent
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from app.commands.user_management_reset import main  # noqa: E402


if __name__ == "__main__":
    sys.exit(main())
