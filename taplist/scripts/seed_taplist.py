"""
Seed Taplist Script
Creates the fixed tap rows and the display settings row when missing, and can
grant the admin role to an existing account so the first admin can sign in.

    python -m taplist.scripts.seed_taplist --admin-email owner@example.com
"""

import argparse
import logging
from typing import List, Optional

from supabase import Client

from taplist.config import settings
from taplist.database.supabase_client import get_supabase
from taplist.modules.users.schemas import ADMIN_ROLE

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def seed_taps(supabase: Client) -> List[int]:
    """Insert empty taps for every missing id in 1..tap_count"""
    logger.info("Seeding taps...")

    existing = supabase.table("taps").select("id").execute()
    existing_ids = {t["id"] for t in existing.data or []}
    created = []

    for tap_id in range(1, settings.tap_count + 1):
        if tap_id in existing_ids:
            logger.debug(f"Tap {tap_id} already exists")
            continue
        supabase.table("taps").insert({
            "id": tap_id,
            "beverage_id": None,
            "is_active": False
        }).execute()
        created.append(tap_id)

    logger.info(f"Taps: {len(created)} created, {settings.tap_count - len(created)} already present")
    return created


def seed_settings(supabase: Client) -> bool:
    """Insert the display settings row if there is none"""
    logger.info("Seeding display settings...")

    existing = supabase.table("taplist_settings").select("id").limit(1).execute()
    if existing.data:
        logger.info("Display settings already present")
        return False

    supabase.table("taplist_settings").insert({"title": settings.default_title}).execute()
    logger.info("Display settings created")
    return True


def grant_admin(supabase: Client, email: str) -> Optional[str]:
    """Give the admin role to the account with this email. Returns its user id."""
    logger.info(f"Granting admin to {email}...")

    users = supabase.auth.admin.list_users()
    user = next((u for u in users if (u.email or "").lower() == email.lower()), None)
    if user is None:
        logger.error(f"No account with email {email}")
        return None

    existing = supabase.table("user_roles")\
        .select("id")\
        .eq("user_id", user.id)\
        .eq("role", ADMIN_ROLE)\
        .execute()
    if existing.data:
        logger.info(f"{email} is already an admin")
        return user.id

    supabase.table("user_roles").insert({"user_id": user.id, "role": ADMIN_ROLE}).execute()
    logger.info(f"{email} is now an admin")
    return user.id


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Seed taps and display settings")
    parser.add_argument("--admin-email", help="Grant the admin role to this existing account")
    args = parser.parse_args(argv)

    supabase = get_supabase()
    try:
        seed_taps(supabase)
        seed_settings(supabase)
        if args.admin_email and not grant_admin(supabase, args.admin_email):
            return 1
    except Exception as e:
        logger.error(f"Seeding failed: {e}")
        return 1

    logger.info("Seeding complete")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
