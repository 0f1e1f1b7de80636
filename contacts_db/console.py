import sys
from enum import Enum
from typing import Callable, TextIO, Optional

from loguru import logger

from .core.DBHandler import DBHandler
from .core.results import Success

QUIT_COMMAND = "quit"
PROMPT = "Name of contact? "


class State(Enum):
    PROMPTING = "prompting"
    TERMINATED = "terminated"


class QueryLoop():
    """
    Reads a name prefix per line and prints the matching contacts until the
    user enters a blank line or 'quit'. End of input also terminates the loop.
    """

    def __init__(
        self, db: DBHandler,
        prompt: Optional[Callable[[str], str]] = None,
        out: Optional[TextIO] = None,
    ):
        self.db = db
        self.prompt = prompt if prompt is not None else input
        self.out = out if out is not None else sys.stdout
        self.state = State.PROMPTING
        self.num_queries = 0

    def write(self, line: str) -> None:
        self.out.write(line + "\n")

    def read(self) -> Optional[str]:
        try:
            return self.prompt(PROMPT).strip()
        except (EOFError, KeyboardInterrupt):
            self.write("")
            return None

    @staticmethod
    def is_quit(line: Optional[str]) -> bool:
        return line is None or line == "" or line.lower() == QUIT_COMMAND

    def query(self, prefix: str) -> None:
        result = self.db.contacts.search(prefix)
        self.num_queries += 1

        if isinstance(result, Success):
            self.write(f"Found {len(result.value)} matches.")
            for contact in result.value:
                self.write(contact.to_line())
        else:
            logger.error(f"Query '{prefix}' failed: {result.reason}")
            self.write(f"Query failed: {result.reason}")

    def step(self) -> State:
        if self.state == State.TERMINATED:
            return self.state

        line = self.read()
        if QueryLoop.is_quit(line):
            self.state = State.TERMINATED
        else:
            self.query(line)  # type: ignore[arg-type]
        return self.state

    def run(self) -> int:
        self.write(f"Input a blank line or '{QUIT_COMMAND}' to stop querying.")
        while self.step() != State.TERMINATED:
            pass
        return self.num_queries


def print_all_contacts(db: DBHandler, out: Optional[TextIO] = None) -> int:
    if out is None:
        out = sys.stdout

    out.write(f"Number of contacts: {db.contacts.count()}\n")
    n = 0
    for contact in db.contacts.iterate():
        out.write(f"{contact.name} <{contact.email or ''}>\n")
        n += 1
    return n
