from sqlmodel import Field, UniqueConstraint
from typing import Optional
from repofeed.models.base_model import BaseModel


class Repo(BaseModel, table=True):
    __tablename__ = "repos"
    # Upstream "owner/name"; unique so concurrent first deliveries converge on one row.
    __table_args__ = (UniqueConstraint("name", name="uq_repos_name"),)

    id: Optional[int] = Field(default=None, primary_key=True, index=True)
    name: str
    url: Optional[str] = None
    icon: Optional[str] = None

    def __repr__(self):
        return f"<Repo(id={self.id}, name={self.name})>"
