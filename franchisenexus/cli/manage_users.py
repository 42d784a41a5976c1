#!/usr/bin/env python3
"""
CLI tool to manage platform users.

Registration over HTTP is open to every role; this tool is the usual way to
bootstrap administrators directly against the database.

Usage:
    python -m franchisenexus.cli.manage_users create --email admin@example.com --role admin --password SecurePass123
    python -m franchisenexus.cli.manage_users create --email admin@example.com --role admin --interactive
    python -m franchisenexus.cli.manage_users list
    python -m franchisenexus.cli.manage_users change-password --email admin@example.com

Examples:
    # Create an admin with a generated password (printed once)
    python -m franchisenexus.cli.manage_users create --email admin@example.com --role admin

    # Create a franchisor interactively (prompts for password)
    python -m franchisenexus.cli.manage_users create --email owner@example.com --role franchisor --interactive
"""
import asyncio
import argparse
import sys
import getpass
import secrets
from typing import Optional

from franchisenexus.config import settings
from franchisenexus.db.connection import create_engine_for_url
from franchisenexus.db.models import Base, UserModel
from franchisenexus.domain.roles import Role
from franchisenexus.domain.unit_of_work import SQLAlchemyUnitOfWork
from franchisenexus.utils.password_hash import hash_password
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

MIN_PASSWORD_LENGTH = 8

ROLE_CHOICES = {
    "admin": Role.ADMIN,
    "franchisor": Role.FRANCHISOR,
    "franchisee": Role.FRANCHISEE,
}


def _prompt_password(prompt: str = "Enter password: ") -> Optional[str]:
    """Ask twice; return None (after printing why) if unusable."""
    password = getpass.getpass(prompt)
    password_confirm = getpass.getpass("Confirm password: ")

    if password != password_confirm:
        print("[ERROR] Passwords do not match")
        return None

    if len(password) < MIN_PASSWORD_LENGTH:
        print(f"[ERROR] Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return None

    return password


async def _open_session(database_url: str):
    engine = create_engine_for_url(database_url)

    # Create tables if they don't exist
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    return engine, session_maker


async def create_user(
    email: str,
    role: Role,
    password: Optional[str] = None,
    interactive: bool = False,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    database_url: Optional[str] = None,
) -> Optional[UserModel]:
    """Create a user with the given role"""
    generated = False

    if interactive:
        print(f"Creating user '{email}' ({role.label})")
        password = _prompt_password()
        if password is None:
            return None
    elif not password:
        password = secrets.token_urlsafe(16)
        generated = True
        print("ℹ️  No password provided, generating random password")

    engine, session_maker = await _open_session(database_url or settings.database_url)

    try:
        async with session_maker() as session:
            async with SQLAlchemyUnitOfWork(session) as uow:
                if await uow.users.exists_by_email(email):
                    print(f"[ERROR] Email '{email}' is already in use")
                    return None

                user = await uow.users.add(UserModel(
                    first_name=first_name,
                    last_name=last_name,
                    email=email,
                    password_hash=hash_password(password),
                    role=role,
                ))

        print("\n" + "=" * 70)
        print("[SUCCESS] User created successfully!")
        print("=" * 70)
        print()
        print(f"Email: {user.email}")
        if generated:
            print(f"Password: {password}")
            print()
            print("⚠️  SAVE THIS PASSWORD - It will not be shown again!")
        print()
        print(f"  ID: {user.id}")
        print(f"  Role: {user.role.label}")
        print()
        print("=" * 70)
        return user
    finally:
        await engine.dispose()


async def list_users(database_url: Optional[str] = None) -> list:
    """List all users"""
    engine, session_maker = await _open_session(database_url or settings.database_url)

    try:
        async with session_maker() as session:
            users = await SQLAlchemyUnitOfWork(session).users.list_all()

        if not users:
            print("No users found.")
            return users

        print("\n" + "=" * 70)
        print("Users:")
        print("=" * 70)
        print()

        for user in users:
            name = " ".join(part for part in (user.first_name, user.last_name) if part)
            print(f"  - {user.email}" + (f" ({name})" if name else ""))
            print(f"    ID: {user.id}")
            print(f"    Role: {user.role.label}")
            print()

        print(f"Total users: {len(users)}")
        print("=" * 70)
        return users
    finally:
        await engine.dispose()


async def change_password(
    email: str,
    new_password: Optional[str] = None,
    database_url: Optional[str] = None,
) -> bool:
    """Change a user's password (prompts when no password is given)"""
    if new_password is None:
        print(f"Changing password for user '{email}'")
        new_password = _prompt_password("Enter new password: ")
        if new_password is None:
            return False

    engine, session_maker = await _open_session(database_url or settings.database_url)

    try:
        async with session_maker() as session:
            async with SQLAlchemyUnitOfWork(session) as uow:
                user = await uow.users.get_by_email(email)
                if not user:
                    print(f"[ERROR] User '{email}' not found")
                    return False

                user.password_hash = hash_password(new_password)
                await uow.users.save(user)

        print(f"[SUCCESS] Password updated successfully for user '{email}'")
        return True
    finally:
        await engine.dispose()


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Manage FranchiseNexus users',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    # Create user command
    create_parser = subparsers.add_parser('create', help='Create a new user')
    create_parser.add_argument('--email', required=True, help='Email used to log in')
    create_parser.add_argument('--role', required=True, choices=sorted(ROLE_CHOICES), help='User role')
    create_parser.add_argument('--password', help='Password (if not provided, will generate random)')
    create_parser.add_argument('--interactive', action='store_true', help='Prompt for password interactively')
    create_parser.add_argument('--first-name', help='First name')
    create_parser.add_argument('--last-name', help='Last name')

    # List users command
    subparsers.add_parser('list', help='List all users')

    # Change password command
    change_password_parser = subparsers.add_parser('change-password', help='Change user password')
    change_password_parser.add_argument('--email', required=True, help='Email of the user')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Execute command
    if args.command == 'create':
        user = asyncio.run(create_user(
            args.email,
            ROLE_CHOICES[args.role],
            password=args.password,
            interactive=args.interactive,
            first_name=args.first_name,
            last_name=args.last_name,
        ))
        if user is None:
            sys.exit(1)
    elif args.command == 'list':
        asyncio.run(list_users())
    elif args.command == 'change-password':
        if not asyncio.run(change_password(args.email)):
            sys.exit(1)


if __name__ == '__main__':
    main()
