from typing import Optional, Iterator

import sqlalchemy as sa
from sqlalchemy.orm import Query

from ... import models
from ..DBBlueprint import DBBlueprint
from ..filters import ContactFilter, ContactField
from ..results import Result, Success, Failure
from .. import exceptions


class ContactBP(DBBlueprint):
    @classmethod
    def where(cls, query: Query, *filters: ContactFilter) -> Query:
        for f in filters:
            query = query.where(f.to_clause())
        return query

    @DBBlueprint.transaction
    def create(
        self, name: str,
        telephone: Optional[str] = None,
        email: Optional[str] = None,
        flush: bool = True
    ) -> models.Contact:
        if not name or not name.strip():
            raise exceptions.InvalidValue("Contact name must not be empty.")

        contact = models.Contact(
            name=name.strip(),
            telephone=telephone.strip() if telephone and telephone.strip() else None,
            email=email.strip() if email and email.strip() else None,
        )

        self.db.session.add(contact)
        if flush:
            self.db.flush()

        return contact

    @DBBlueprint.transaction
    def get(self, contact_id: int) -> models.Contact | None:
        return self.db.session.get(models.Contact, contact_id)

    @DBBlueprint.transaction
    def get_with_name(self, name: str) -> models.Contact | None:
        contact = self.db.session.query(models.Contact).where(
            models.Contact.name == name
        ).order_by(models.Contact.id).first()
        return contact

    @DBBlueprint.transaction
    def find(
        self, *filters: ContactFilter,
        sort_by: str = "id", descending: bool = False,
        limit: int | None = None, offset: int | None = None,
    ) -> list[models.Contact]:
        query = self.db.session.query(models.Contact)
        query = ContactBP.where(query, *filters)

        try:
            attr = ContactField(sort_by).column
        except ValueError as e:
            raise exceptions.InvalidValue(f"Cannot sort contacts by '{sort_by}'.") from e

        if descending:
            attr = attr.desc()
        query = query.order_by(attr, models.Contact.id)

        if offset is not None:
            query = query.offset(offset)

        if limit is not None:
            query = query.limit(limit)

        return query.all()

    def find_by_prefix(self, prefix: str) -> list[models.Contact]:
        return self.find(ContactFilter.prefix(ContactField.NAME, prefix))

    def search(self, prefix: str) -> Result[list[models.Contact]]:
        try:
            return Success(self.find_by_prefix(prefix))
        except exceptions.ContactsDBException as e:
            return Failure(e.message, e)

    @DBBlueprint.transaction
    def count(self) -> int:
        return self.db.session.query(sa.func.count(models.Contact.id)).scalar() or 0

    def iterate(self, batch_size: int = 100) -> Iterator[models.Contact]:
        """ Lazily yields every contact ordered by id, fetching `batch_size` rows at a time. """
        auto_opened = self.db.auto_open and self.db._session is None
        if auto_opened:
            self.db.open_session()
        try:
            last_id = None
            while True:
                query = self.db.session.query(models.Contact).order_by(models.Contact.id)
                if last_id is not None:
                    query = query.where(models.Contact.id > last_id)
                batch = query.limit(batch_size).all()
                if not batch:
                    return
                yield from batch
                last_id = batch[-1].id
        except sa.exc.SQLAlchemyError as e:
            self.db.error(f"{self.name}.iterate failed: {e}")
            raise exceptions.StorageError(f"{e.__class__.__name__}: {e}") from e
        finally:
            if auto_opened and self.db._session is not None:
                self.db.close_session(commit=False)

    def __getitem__(self, contact_id: int) -> models.Contact:
        if (contact := self.get(contact_id)) is None:
            raise exceptions.ElementDoesNotExist(f"Contact with id {contact_id} does not exist")
        return contact
