# conference_api/schemas.py

from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from conference_api.models import QuestionStatus, Role


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class DateRangeMixin(BaseModel):
    @field_validator("start_date", "end_date", mode="after", check_fields=False)
    @classmethod
    def normalize_to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # stored wall-clock times are UTC on every backend
        if value is None:
            return None
        return _as_utc(value)

    @model_validator(mode="after")
    def check_date_range(self):
        start, end = self.start_date, self.end_date
        if start is not None and end is not None and _as_utc(start) > _as_utc(end):
            raise ValueError("start_date must not be after end_date")
        return self


# Users

class UserCreate(BaseModel):
    name: str = Field(max_length=255)
    email: EmailStr = Field(max_length=255)
    password: str = Field(min_length=6)


class UserLogin(BaseModel):
    email: EmailStr = Field(max_length=255)
    password: str = Field(min_length=6)


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: Role

    model_config = ConfigDict(from_attributes=True)


class Token(BaseModel):
    access_token: str
    token_type: str


# Content

class ConferenceIn(DateRangeMixin):
    name: str = Field(max_length=255)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    location: Optional[str] = Field(None, max_length=255)
    start_date: datetime
    end_date: datetime
    description: str
    image_url: Optional[str] = Field(None, max_length=1024)


class ConferenceRead(BaseModel):
    id: int
    name: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    location: Optional[str] = None
    city: Optional[str] = None
    start_date: datetime
    end_date: datetime
    description: str
    image_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ConferenceLocation(BaseModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)


class TrackIn(DateRangeMixin):
    name: str = Field(max_length=255)
    room: Optional[str] = Field(None, max_length=255)
    description: str
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class TrackRead(BaseModel):
    id: int
    conference_id: int
    name: str
    room: Optional[str] = None
    description: str
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ArticleIn(DateRangeMixin):
    title: str = Field(max_length=255)
    authors: str
    abstract: str
    start_date: datetime
    end_date: datetime


class ArticleRead(BaseModel):
    id: int
    conference_id: int
    track_id: int
    title: str
    authors: str
    abstract: str
    start_date: datetime
    end_date: datetime

    model_config = ConfigDict(from_attributes=True)


class ArticleDetail(ArticleRead):
    track: Optional[TrackRead] = None


class TrackDetail(TrackRead):
    articles: List[ArticleRead] = []


class ConferenceWithTracks(ConferenceRead):
    tracks: List[TrackRead] = []


class ConferenceDetail(ConferenceRead):
    tracks: List[TrackDetail] = []


Schedule = Dict[str, List[ArticleRead]]


# Questions

class QuestionCreate(BaseModel):
    question: str = Field(min_length=1, max_length=255)


class AnswerCreate(BaseModel):
    answer: str = Field(min_length=1, max_length=255)


class QuestionRead(BaseModel):
    id: int
    question: str
    answer: Optional[str] = None
    status: QuestionStatus
    user_id: int
    created_at: datetime
    answered_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class RequestRead(QuestionRead):
    conference_id: Optional[int] = None


class RequestDetail(RequestRead):
    user: UserResponse
    conference: Optional[ConferenceRead] = None


class ArticleQuestionRead(QuestionRead):
    article_id: Optional[int] = None


class ArticleQuestionDetail(ArticleQuestionRead):
    user: UserResponse


class QuestionCount(BaseModel):
    article_id: int
    count: int
