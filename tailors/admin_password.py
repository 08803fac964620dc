"""
Print a bcrypt hash for the ADMIN_PASSWORD_HASH setting.

    $ tailors-hash-password
    Admin password:
    Repeat password:
    $2b$12$...

Pass ``--password`` to skip the prompt (the value lands in shell history).
"""

import argparse
import getpass
import sys
from typing import List, Optional

from tailors.security import hash_password


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Hash the admin password for ADMIN_PASSWORD_HASH.")
    parser.add_argument("--password", help="Password to hash (prompted for when omitted)")
    parser.add_argument("--rounds", type=int, default=12, help="bcrypt cost factor (4-31)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    if not 4 <= args.rounds <= 31:
        print("--rounds must be between 4 and 31.", file=sys.stderr)
        return 1

    password = args.password
    if password is None:
        password = getpass.getpass("Admin password: ")
        if getpass.getpass("Repeat password: ") != password:
            print("Passwords do not match.", file=sys.stderr)
            return 1

    if not password.strip():
        print("Password must not be empty.", file=sys.stderr)
        return 1

    print(hash_password(password, rounds=args.rounds))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
