"""
Event Payload Models

GitHub Actions 이벤트 페이로드 모델
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, field_validator


logger = logging.getLogger(__name__)

OPENED = "opened"
SYNCHRONIZE = "synchronize"


class OwnerPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    login: str


class RepositoryPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    owner: OwnerPayload


class PullRequestEvent(BaseModel):
    """pull_request 이벤트 페이로드 중 리뷰에 필요한 필드"""
    model_config = ConfigDict(extra="ignore")

    action: str = ""
    number: int
    repository: RepositoryPayload
    before: Optional[str] = None
    after: Optional[str] = None

    @field_validator("number")
    @classmethod
    def validate_number(cls, v):
        if v <= 0:
            raise ValueError("PR number must be positive")
        return v

    @property
    def owner(self) -> str:
        return self.repository.owner.login

    @property
    def repo(self) -> str:
        return self.repository.name

    @property
    def is_opened(self) -> bool:
        return self.action == OPENED

    @property
    def is_synchronize(self) -> bool:
        return self.action == SYNCHRONIZE


def load_event(event_path: Optional[Union[str, Path]]) -> PullRequestEvent:
    """
    Load the event payload file written by the Actions runner.

    Raises:
        FileNotFoundError: If the payload file does not exist
        pydantic.ValidationError: If required fields are missing
    """
    if not event_path:
        raise FileNotFoundError("Event payload path is not set (GITHUB_EVENT_PATH)")

    path = Path(event_path)
    if not path.is_file():
        raise FileNotFoundError(f"Event payload not found: {event_path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    event = PullRequestEvent.model_validate(data)
    logger.debug(f"Loaded event: action={event.action} pr={event.owner}/{event.repo}#{event.number}")
    return event
