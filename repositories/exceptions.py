"""
Repository exceptions

Store-level failures (constraint violations, lost connections) are raised as
the underlying SQLAlchemy errors; only lookups that the repository itself
decides are missing get a dedicated type.
"""


class RepositoryError(Exception):
    """Base class for errors raised by the repository layer"""
    pass


class NotFoundError(RepositoryError):
    """Raised when a requested entity does not exist or is soft-deleted"""

    def __init__(self, model_name: str, entity_id):
        self.model_name = model_name
        self.entity_id = entity_id
        super().__init__(f"{model_name} with id {entity_id} not found")
