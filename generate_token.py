#!/usr/bin/env python3
"""
Development Token Generator
Mints a gallery session token signed with JWT_SECRET_KEY, the way the identity provider does.
Use it to call the API locally without the login flow.
"""
import argparse
from datetime import timedelta

from gallery_admin.config import settings
from gallery_admin.utils.jwt_auth import create_access_token, TOKEN_COOKIE_NAME


def build_claims(user_id: str, role: str, artist_id=None, name=None) -> dict:
    claims = {"sub": user_id, "role": role}
    if artist_id is not None:
        claims["artist_id"] = artist_id
    if name:
        claims["name"] = name
    return claims


def main():
    parser = argparse.ArgumentParser(description="Mint a development gallery session token")
    parser.add_argument("--user-id", default="dev-admin", help="Subject claim (default: dev-admin)")
    parser.add_argument("--role", default="admin", help="admin, super_admin or artist (default: admin)")
    parser.add_argument("--artist-id", type=int, help="Linked artist profile for artist tokens")
    parser.add_argument("--name", help="Display name recorded as invited_by etc.")
    parser.add_argument("--minutes", type=int, default=60, help="Lifetime in minutes (default: 60)")
    args = parser.parse_args()

    if args.role not in settings.ADMIN_ROLES and args.artist_id is None:
        print("Warning: artist tokens without --artist-id cannot access any artist data")

    token = create_access_token(
        build_claims(args.user_id, args.role, args.artist_id, args.name),
        expires_delta=timedelta(minutes=args.minutes),
    )

    print(f"\nBearer token ({args.role}, {args.minutes} min):\n")
    print(token)
    print(f"\nUse as header  Authorization: Bearer <token>")
    print(f"or as cookie   {TOKEN_COOKIE_NAME}=<token>\n")


if __name__ == "__main__":
    main()
