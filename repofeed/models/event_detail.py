from pydantic import BaseModel, Field
from typing import List, Optional


class CommitAuthor(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    date: Optional[str] = None


class CommitDetail(BaseModel):
    sha: str
    message: str = ""
    author: CommitAuthor = Field(default_factory=CommitAuthor)
    url: Optional[str] = None


class FileDetail(BaseModel):
    filename: str
    status: Optional[str] = None
    additions: int = 0
    deletions: int = 0
    changes: int = 0
    patch: Optional[str] = None


class DetailStats(BaseModel):
    total_commits: int = 0
    files_changed: int = 0
    additions: int = 0
    deletions: int = 0


class EventDetail(BaseModel):
    """Supplementary detail fetched from GitHub for a stored event."""

    commits: List[CommitDetail] = Field(default_factory=list)
    files: List[FileDetail] = Field(default_factory=list)
    stats: DetailStats = Field(default_factory=DetailStats)
