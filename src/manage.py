"""Storefront management CLI.

Creates and drops the database schema, and bootstraps an administrator
account (new accounts always start as customers).

Usage:
    python src/manage.py setup-db
    python src/manage.py drop-db
    python src/manage.py create-admin --email admin@example.com --password ... --full-name "Site Admin"
"""

import argparse
import sys


def _domain():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    domain = _domain()
    print("Creating storefront database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    domain = _domain()
    print("Dropping storefront database schema...")
    drop_db(domain)
    print("Done.")


def create_admin(email, password, full_name):
    """Register ``email`` if needed, then grant it the Admin role."""
    from storefront.identity.profile import PromoteUser
    from storefront.identity.registration import RegisterUser
    from storefront.identity.user import User

    domain = _domain()
    with domain.domain_context():
        user = domain.repository_for(User).find_by_email(email)
        if user is None:
            user_id = domain.process(
                RegisterUser(email=email, password=password, full_name=full_name),
                asynchronous=False,
            )
        else:
            user_id = str(user.id)

        if user is not None and user.is_admin:
            print(f"{email} is already an admin.")
            return user_id

        domain.process(PromoteUser(user_id=user_id), asynchronous=False)
        print(f"{email} is now an admin.")
        return user_id


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    admin_parser = subparsers.add_parser("create-admin", help="Create or promote an administrator")
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", required=True)
    admin_parser.add_argument("--full-name", default="Administrator")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "create-admin":
        create_admin(args.email, args.password, args.full_name)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
