# repositories/owned.py
from sqlalchemy.orm import Session


class OwnedRepository:
    """
    Data access for rows that belong to a single user.

    Every query is filtered on (owner column == owner_id), so a row owned by
    someone else behaves exactly like a row that does not exist.

    Args:
        model: SQLAlchemy mapped class.
        owner_field: name of the column holding the owner's user id.
        filter_fields: columns callers may filter list() on.
        editable_fields: columns update() is allowed to change.
    """

    def __init__(self, model, owner_field='user_id', filter_fields=(), editable_fields=()):
        self.model = model
        self.owner_field = owner_field
        self.filter_fields = tuple(filter_fields)
        self.editable_fields = tuple(editable_fields)

    def _scoped(self, db: Session, owner_id: str):
        return db.query(self.model).filter(getattr(self.model, self.owner_field) == owner_id)

    def _by_id(self, db: Session, owner_id: str, record_id: str):
        return self._scoped(db, owner_id).filter(self.model.id == record_id)

    def list(self, db: Session, owner_id: str, **filters) -> list:
        query = self._scoped(db, owner_id)
        for name, value in filters.items():
            if name not in self.filter_fields:
                raise ValueError(f"Cannot filter {self.model.__name__} on '{name}'")
            if value is not None:
                query = query.filter(getattr(self.model, name) == value)
        return query.order_by(self.model.created_at.desc()).all()

    def create(self, db: Session, owner_id: str, **values):
        record = self.model(**{self.owner_field: owner_id}, **values)
        db.add(record)
        db.flush()
        db.refresh(record)
        return record

    def get(self, db: Session, owner_id: str, record_id: str):
        return self._by_id(db, owner_id, record_id).first()

    def update(self, db: Session, owner_id: str, record_id: str, changes: dict) -> int:
        """Apply a partial patch; returns the number of matched rows."""
        changes = {k: v for k, v in changes.items() if k in self.editable_fields}
        query = self._by_id(db, owner_id, record_id)
        if not changes:
            return query.count()
        return query.update(changes, synchronize_session=False)

    def delete(self, db: Session, owner_id: str, record_id: str) -> int:
        return self._by_id(db, owner_id, record_id).delete(synchronize_session=False)
