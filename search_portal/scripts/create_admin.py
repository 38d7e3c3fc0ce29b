"""
Create an admin account, or promote an existing user to admin.
Usage: python -m search_portal.scripts.create_admin <username> [password]
"""
import sys

from search_portal.core.security import hash_password
from search_portal.database import SessionLocal, ensure_tables_exist
from search_portal.repos.user_repo import get_by_username, create, update


def main():
    if len(sys.argv) < 2:
        print("Usage: python -m search_portal.scripts.create_admin <username> [password]")
        sys.exit(1)
    username = sys.argv[1].strip()
    password = sys.argv[2] if len(sys.argv) > 2 else None
    ensure_tables_exist()
    db = SessionLocal()
    try:
        user = get_by_username(db, username)
        if user:
            update(
                db,
                user.id,
                role="admin",
                is_active=True,
                password_hash=hash_password(password) if password else None,
            )
            print(f"Promoted {username} to admin.")
            return
        if not password or len(password) < 8:
            print("A password of at least 8 characters is required to create a new admin.")
            sys.exit(1)
        create(db, username, password, role="admin")
        print(f"Created admin {username}.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
