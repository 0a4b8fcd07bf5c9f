"""
Commandes d'administration.

Usage:
    python -m permits.cli init-db
    python -m permits.cli mark-renewed EMAIL [--undo]
    python -m permits.cli hash-password PASSWORD
    python -m permits.cli purge-sessions
"""
import argparse
import logging
import sys
from typing import List, Optional

from permits import config
from permits.auth.passwords import hash_password
from permits.sessions.repository import SessionStore
from permits.users.repository import UserStore

logger = logging.getLogger("permits.cli")


def _open_store(database_url: Optional[str]) -> UserStore:
    url = database_url or config.DATABASE_URL
    if not url:
        raise SystemExit("DB_PATH manquant: définissez-le dans .env ou passez --database-url")
    store = UserStore(url)
    store.init_schema()
    return store


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="permits", description="Administration des renouvellements de permis")
    parser.add_argument("--database-url", default=None, help="URL SQLAlchemy (défaut: sqlite:///$DB_PATH)")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Crée les tables users et sessions si nécessaire")

    renewed = sub.add_parser("mark-renewed", help="Marque (ou démarque) un permis comme renouvelé")
    renewed.add_argument("email")
    renewed.add_argument("--undo", action="store_true", help="Remet renewed à false")

    hashp = sub.add_parser("hash-password", help="Affiche le hash bcrypt d'un mot de passe")
    hashp.add_argument("password")

    sub.add_parser("purge-sessions", help="Supprime les sessions web expirées")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)

    if args.command == "hash-password":
        print(hash_password(args.password))
        return 0

    store = _open_store(args.database_url)
    try:
        if args.command == "init-db":
            SessionStore(store.engine).init_schema()
            print("Users and sessions tables are ready.")
            return 0
        if args.command == "mark-renewed":
            if not store.set_renewed(args.email, renewed=not args.undo):
                print(f"No user found for {args.email}", file=sys.stderr)
                return 1
            print(f"{args.email}: renewed={'false' if args.undo else 'true'} (total renewed: {store.count_renewed()})")
            return 0
        if args.command == "purge-sessions":
            sessions = SessionStore(store.engine)
            sessions.init_schema()
            print(f"Expired sessions removed: {sessions.purge_expired()}")
            return 0
    finally:
        store.dispose()
    return 2


if __name__ == "__main__":
    sys.exit(main())
