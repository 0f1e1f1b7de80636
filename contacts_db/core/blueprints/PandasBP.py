import pandas as pd

import sqlalchemy as sa

from ... import models
from ..DBBlueprint import DBBlueprint


class PandasBP(DBBlueprint):
    @DBBlueprint.transaction
    def get_contacts(self, include_id: bool = True) -> pd.DataFrame:
        columns = [
            models.Contact.name.label("name"),
            models.Contact.telephone.label("telephone"),
            models.Contact.email.label("email"),
        ]
        if include_id:
            columns.insert(0, models.Contact.id.label("id"))

        query = sa.select(*columns).order_by(models.Contact.id)
        df = pd.read_sql(query, self.db.session.connection())
        return df

    def export_csv(self, path: str) -> int:
        """ Writes contacts in the bulk-load format (no header). Returns the number of rows written. """
        df = self.get_contacts(include_id=False)
        df.to_csv(path, header=False, index=False)
        return len(df)
