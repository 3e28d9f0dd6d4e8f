# path: src/manage.py
from __future__ import annotations

import argparse
import asyncio
from getpass import getpass

from src.app_logging import get_logger
from src.core.exceptions import WasteBankError
from src.core.models.db_helper import db_helper
from src.core.models.enums import UserRole
from src.core.schemas.user import UserCreate
from src.core.services.auth_service import AuthService
from src.scripts.seed import seed_database

log = get_logger("manage")


async def _cmd_seed() -> None:
    async with db_helper.session_factory() as session:
        report = await seed_database(session)
        await session.commit()
    await db_helper.dispose()

    print(f"✔ Categories created: {report.categories_created}")
    print(f"✔ Waste items created: {report.items_created}, updated: {report.items_updated}")
    print(f"✔ Users created: {', '.join(report.users_created) or '-'}")


async def _cmd_create_admin() -> None:
    print("Create admin")
    name = input("Name: ").strip()
    email = input("E-mail: ").strip()
    password = getpass("Password: ")
    phone = input("Phone: ").strip()
    address = input("Address: ").strip()

    data = UserCreate(
        name=name,
        email=email,
        password=password,
        phone=phone,
        address=address,
        role=UserRole.ADMIN,
    )
    try:
        async with db_helper.session_factory() as session:
            user = await AuthService().register_user(session, data)
    except WasteBankError as e:
        log.info({"event": "create_admin_fail", "code": e.code, "email": email})
        print(f"✘ {e.message}")
        return
    finally:
        await db_helper.dispose()

    log.info({"event": "create_admin_ok", "user_id": user.id, "email": user.email})
    print(f"✔ Admin created: id={user.id}, email={user.email}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="src.manage", description="Management commands")
    parser.add_argument("--seed", action="store_true", help="Insert default categories, waste items and demo accounts")
    parser.add_argument("--create_admin", action="store_true", help="Create an admin account")
    args = parser.parse_args(argv)

    if args.seed:
        asyncio.run(_cmd_seed())
    elif args.create_admin:
        asyncio.run(_cmd_create_admin())
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
