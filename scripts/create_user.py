"""Create a user (or change an existing user's role) directly in MongoDB.

Usage:
  python scripts/create_user.py --email alice@example.com --name Alice --role admin

This is how the first admin gets seeded: `PATCH /users/{email}` itself
requires an admin.
"""

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from innovation_server.auth.crud import create_user_if_absent, get_user_by_email, update_user_role
from innovation_server.config import load_config
from innovation_server.db import connect, ensure_indexes, get_database, public_doc


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--email", required=True)
    ap.add_argument("--name", default=None)
    ap.add_argument("--role", default=None, help="e.g. admin; omitted leaves the role unset")
    args = ap.parse_args()

    cfg = load_config()
    client = connect(cfg.MONGO_URI, strict=cfg.MONGO_SERVER_API_STRICT)
    try:
        db = get_database(client, cfg.MONGO_DB_NAME)
        ensure_indexes(db)

        user = {"email": args.email}
        if args.name:
            user["name"] = args.name
        if create_user_if_absent(db, user) is None:
            print("User already exists.")
        if args.role:
            update_user_role(db, args.email, args.role)

        print("User:")
        print(public_doc(get_user_by_email(db, args.email)))
    finally:
        client.close()


if __name__ == "__main__":
    main()
