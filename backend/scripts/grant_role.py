#!/usr/bin/env python3
"""Grant a role (admin by default) to an existing user, identified by email."""
from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from anggota.core.config import get_settings
from anggota.db.base import Base
from anggota.db.session import engine, get_session
from anggota.services.users import get_user_by_email, grant_role


async def main(email: str, role: str) -> int:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        async with get_session() as session:
            user = await get_user_by_email(session, email)
            if not user:
                print(f"No user with email {email}", file=sys.stderr)
                return 1
            await grant_role(session, user, role)
            await session.commit()
    finally:
        await engine.dispose()

    print(f"Granted role {role!r} to {email}")
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("usage: grant_role.py EMAIL [ROLE]", file=sys.stderr)
        sys.exit(2)
    role_name = sys.argv[2] if len(sys.argv) > 2 else get_settings().admin_role
    sys.exit(asyncio.run(main(sys.argv[1], role_name)))
