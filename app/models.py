from datetime import datetime, timezone

from pydantic import ConfigDict, EmailStr, ValidationInfo, field_validator, model_validator
from sqlalchemy import DateTime, Index
from sqlmodel import Column, Field, SQLModel


def get_utc_now():
    """Helper function to get current UTC time with timezone"""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class UserBase(SQLModel):
    """Base model with shared fields"""

    name: str = Field(min_length=2, max_length=50)
    email: str = Field(max_length=255)


class User(UserBase, table=True):
    """Database model"""

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    # never part of model_dump(); read explicitly for the login comparison only
    password_hash: str = Field(max_length=60, exclude=True)
    created_at: datetime = Field(
        default_factory=get_utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=get_utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class UserRegister(SQLModel):
    """Schema for registering a user"""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)


class UserLogin(SQLModel):
    """Schema for logging in"""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=1)


class UserPublic(UserBase):
    """Schema for user responses, never carries the password hash"""

    id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CallerIdentity(UserPublic):
    """The authenticated user attached to a single request."""


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


class TaskBase(SQLModel):
    """Base model with shared fields"""

    title: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)


class Task(TaskBase, table=True):
    """Database model"""

    __tablename__ = "tasks"
    __table_args__ = (Index("ix_tasks_owner_id_created_at", "owner_id", "created_at"),)

    id: int | None = Field(default=None, primary_key=True)
    completed: bool = Field(default=False)
    owner_id: int = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(
        default_factory=get_utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=get_utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class TaskCreate(TaskBase):
    """Schema for creating a task"""

    model_config = ConfigDict(extra="forbid")


class TaskUpdate(SQLModel):
    """Schema for updating a task - all fields optional, at least one required"""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    completed: bool | None = None

    @field_validator("title", "completed")
    @classmethod
    def reject_null(cls, value, info: ValidationInfo):
        # description may be cleared with null, the others may not
        if value is None:
            raise ValueError(f'"{info.field_name}" must not be null')
        return value

    @model_validator(mode="after")
    def require_one_field(self):
        if not self.model_fields_set:
            raise ValueError("Please provide at least one field to update")
        return self


class TaskResponse(TaskBase):
    """Schema for task responses"""

    id: int
    completed: bool
    owner_id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
