"""Storefront management CLI.

Creates and drops the database schema and bootstraps administrator
accounts.

Usage:
    python src/manage.py setup-db
    python src/manage.py drop-db
    python src/manage.py create-admin --name Admin --email admin@example.com --password s3cret!
"""

import argparse
import sys


def setup_database():
    from storefront.domain import init_storefront
    from storefront.utils.db import setup_db

    print("Initializing storefront domain...")
    storefront = init_storefront()
    print("Creating storefront database schema...")
    setup_db(storefront)
    print("Done.")


def drop_database():
    from storefront.domain import init_storefront
    from storefront.utils.db import drop_db

    print("Initializing storefront domain...")
    storefront = init_storefront()
    print("Dropping storefront database schema...")
    drop_db(storefront)
    print("Done.")


def ensure_admin(name, email, password):
    """Register an administrator, or promote the existing account that owns ``email``.

    Runs inside an active domain context and returns the user id.
    """
    from protean.utils.globals import current_domain

    from storefront.identity.user.registration import RegisterUser
    from storefront.identity.user.roles import ChangeUserRole
    from storefront.identity.user.user import User, UserRole, normalize_email

    existing = current_domain.repository_for(User)._dao.query.filter(email=normalize_email(email)).all().items
    if existing:
        user_id = str(existing[0].id)
        current_domain.process(
            ChangeUserRole(user_id=user_id, role=UserRole.ADMIN.value),
            asynchronous=False,
        )
        print(f"Promoted {email} to admin ({user_id}).")
    else:
        user_id = current_domain.process(
            RegisterUser(name=name, email=email, password=password, role=UserRole.ADMIN.value),
            asynchronous=False,
        )
        print(f"Created admin {email} ({user_id}).")
    return user_id


def create_admin(name, email, password):
    from storefront.domain import init_storefront

    storefront = init_storefront()
    with storefront.domain_context():
        return ensure_admin(name, email, password)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    admin_parser = subparsers.add_parser("create-admin", help="Create or promote an administrator")
    admin_parser.add_argument("--name", default="Administrator")
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", required=True)

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "create-admin":
        create_admin(args.name, args.email, args.password)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
