from .DBHandler import DBHandler


class DBSession():
    """ Opens a session for the block, or reuses the one already open and leaves it open. """
    def __init__(self, db_handler: DBHandler, commit: bool = True):
        self.db_handler = db_handler
        self.commit = commit
        self.opened = False

    def __enter__(self) -> DBHandler:
        self.opened = self.db_handler._session is None
        if self.opened:
            self.db_handler.open_session()
        return self.db_handler

    def __exit__(self, exc_type, *_):
        if not self.opened:
            return
        self.opened = False
        if exc_type is not None:
            self.db_handler.close_session(commit=False, rollback=True)
        else:
            self.db_handler.close_session(commit=self.commit)
