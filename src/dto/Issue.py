from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict


class IssueState(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


class Label(BaseModel):
    """
    Represents a tracker label attached to an issue.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    name: str
    description: Optional[str] = None


class RawIssue(BaseModel):
    """
    Represents a single issue as fetched from the tracker.
    """
    # Tracker payloads carry many more keys than we use.
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    number: int
    state: IssueState
    title: str
    body: Optional[str] = None
    labels: Tuple[Label, ...] = ()

    @property
    def is_open(self) -> bool:
        return self.state == IssueState.OPEN

    def has_label(self, name: str) -> bool:
        return any(label.name == name for label in self.labels)

    def __repr__(self):
        return (
            f"number ={self.number}\n"
            f"state ={self.state.value}\n"
            f"title ={self.title}\n"
            f"labels ={[label.name for label in self.labels]}"
        )
