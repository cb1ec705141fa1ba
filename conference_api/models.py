# conference_api/models.py

import enum
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


def utcnow():
    return datetime.now(timezone.utc)


class Role(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class QuestionStatus(str, enum.Enum):
    PENDING = "pending"
    ANSWERED = "answered"


class TargetKind(str, enum.Enum):
    CONFERENCE = "conference"
    ARTICLE = "article"


class User(Base):
    __tablename__ = 'users'
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(
        Enum(Role, name="role", values_callable=_enum_values),
        nullable=False,
        default=Role.USER,
    )


class Conference(Base):
    __tablename__ = 'conferences'
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    location = Column(String(255), nullable=True)
    city = Column(String(255), nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(String(1024), nullable=True)

    tracks = relationship("Track", back_populates="conference", order_by="Track.id")
    articles = relationship("Article", back_populates="conference", order_by="Article.id")


class Track(Base):
    __tablename__ = 'tracks'
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    room = Column(String(255), nullable=True)
    description = Column(Text, nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)
    conference_id = Column(
        Integer, ForeignKey('conferences.id', ondelete="CASCADE"), nullable=False, index=True
    )

    conference = relationship("Conference", back_populates="tracks")
    articles = relationship("Article", back_populates="track", order_by="Article.id")


class Article(Base):
    __tablename__ = 'articles'
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    authors = Column(Text, nullable=False)
    abstract = Column(Text, nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    conference_id = Column(
        Integer, ForeignKey('conferences.id', ondelete="CASCADE"), nullable=False, index=True
    )
    track_id = Column(
        Integer, ForeignKey('tracks.id', ondelete="CASCADE"), nullable=False, index=True
    )

    conference = relationship("Conference", back_populates="articles")
    track = relationship("Track", back_populates="articles")


class Question(Base):
    """
    A user question in the pending -> answered lifecycle.

    Conference requests and article questions share this table and are told
    apart by ``target_kind``. Article questions carry no foreign key on
    ``article_id``: deleting an article leaves its questions behind.
    """

    __tablename__ = 'questions'
    id = Column(Integer, primary_key=True, index=True)
    question = Column(String(255), nullable=False)
    answer = Column(String(255), nullable=True)
    status = Column(
        Enum(QuestionStatus, name="question_status", values_callable=_enum_values),
        nullable=False,
        default=QuestionStatus.PENDING,
    )
    target_kind = Column(
        Enum(TargetKind, name="target_kind", values_callable=_enum_values), nullable=False
    )
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    answered_at = Column(DateTime(timezone=True), nullable=True)

    user = relationship("User")

    __mapper_args__ = {"polymorphic_on": target_kind}

    @property
    def target_id(self):
        raise NotImplementedError


class ConferenceQuestion(Question):
    conference_id = Column(
        Integer, ForeignKey('conferences.id', ondelete="CASCADE"), nullable=True, index=True
    )

    conference = relationship("Conference")

    __mapper_args__ = {"polymorphic_identity": TargetKind.CONFERENCE}

    @property
    def target_id(self):
        return self.conference_id


class ArticleQuestion(Question):
    article_id = Column(Integer, nullable=True, index=True)

    __mapper_args__ = {"polymorphic_identity": TargetKind.ARTICLE}

    @property
    def target_id(self):
        return self.article_id
