"""Base repository pattern implementation.

Domain record stores build on this generic repository. The session is always
passed in explicitly by the caller.
"""

from typing import Generic, TypeVar, cast
from uuid import UUID

from sqlalchemy.orm import Session

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType]):
    """Generic repository with the operations every record store shares.

    Example:
        ```python
        class CertificateRepository(BaseRepository[IssuedCertificate]):
            def __init__(self, db: Session):
                super().__init__(db, IssuedCertificate)
        ```
    """

    def __init__(self, db: Session, model: type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, entity_id: UUID) -> ModelType | None:
        result = self.db.query(self.model).filter(self.model.id == entity_id).first()  # type: ignore[attr-defined]
        return cast(ModelType | None, result)

    def add(self, instance: ModelType) -> ModelType:
        """Persist a new entity and return it refreshed from the database.

        Raises:
            IntegrityError: A database constraint rejected the insert. The
                session is left for the caller to roll back.
        """
        self.db.add(instance)
        self.db.commit()
        self.db.refresh(instance)
        return instance
