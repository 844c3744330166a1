"""
repositories/errors.py
----------------------
Errors raised by the data access layer on top of db.connection.QueryError.
"""


class EntityNotFoundError(LookupError):
    """An update or delete matched zero rows."""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with ID {entity_id} not found")
