import sys

from contacts_db.cli import cli


if __name__ == "__main__":
    sys.exit(cli())
