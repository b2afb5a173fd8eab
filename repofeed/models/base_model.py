from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlmodel import SQLModel, Field, Session, col, select


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(SQLModel):
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    # Override dict method to handle datetime fields
    def dict(self, *args, **kwargs) -> Dict[str, Any]:
        data = self.model_dump(*args, **kwargs)

        # Convert datetime fields to ISO format
        for key, value in data.items():
            if isinstance(value, datetime):
                data[key] = value.isoformat()
        return data

    def save(self, session: Session):
        """Insert or update this instance and return it refreshed."""
        session.add(self)
        session.commit()
        session.refresh(self)
        return self

    @classmethod
    def get(cls, session: Session, model_id: int):
        """Fetch a single record by ID."""
        return session.exec(select(cls).where(cls.id == model_id)).first()

    @classmethod
    def find_by(
        cls, session: Session, order_by: Optional[str] = None, descending=False, **filters
    ) -> List:
        """Fetch records matching every equality filter, optionally ordered."""
        statement = select(cls)
        for field_name, value in filters.items():
            statement = statement.where(getattr(cls, field_name) == value)
        if order_by:
            column = col(getattr(cls, order_by))
            statement = statement.order_by(column.desc() if descending else column)
        return list(session.exec(statement).all())

    @classmethod
    def first_by(cls, session: Session, **filters):
        results = cls.find_by(session, **filters)
        return results[0] if results else None

    @classmethod
    def create(cls, session: Session, **data):
        """Create a new record."""
        instance = cls(**data)
        return instance.save(session)

    @classmethod
    def update(cls, session: Session, model_id: int, **changes):
        """Apply changes to a record by ID. Returns None when it does not exist."""
        instance = cls.get(session, model_id)
        if not instance:
            return None
        for key, value in changes.items():
            setattr(instance, key, value)
        instance.updated_at = utcnow()
        return instance.save(session)

    @classmethod
    def delete(cls, session: Session, model_id: int):
        """Delete a record by ID."""
        instance = cls.get(session, model_id)
        if instance:
            session.delete(instance)
            session.commit()
        return instance
