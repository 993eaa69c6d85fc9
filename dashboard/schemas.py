from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import TaskCategory, TaskPriority, TaskStatus


class ParsedInput(BaseModel):
    # Fields the parser did not produce stay unset; dump with exclude_unset.
    model_config = ConfigDict(frozen=True)

    title: str
    description: str | None = None
    due_at: datetime | None = None
    location: str | None = None  # same text as description for now
    tags: list[str] | None = None


class QuickInputIn(BaseModel):
    text: str


class QuickTaskIn(QuickInputIn):
    model_config = ConfigDict(use_enum_values=True)

    list_id: int | None = None
    category: TaskCategory = TaskCategory.today
    priority: TaskPriority = TaskPriority.medium


class TaskBase(BaseModel):
    # Serialize enums as their values (e.g., "todo")
    model_config = ConfigDict(use_enum_values=True)

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    location: str | None = None
    tags: list[str] | None = None
    list_id: int | None = None
    priority: TaskPriority = TaskPriority.medium
    category: TaskCategory = TaskCategory.today
    due_at: datetime | None = None


class TaskCreate(TaskBase):
    pass


class TaskUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    location: str | None = None
    tags: list[str] | None = None
    priority: TaskPriority | None = None
    category: TaskCategory | None = None
    due_at: datetime | None = None

    @field_validator("title", "priority", "category")
    @classmethod
    def not_null(cls, v):
        # Omit a field to leave it unchanged; these columns are NOT NULL
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class TaskOut(TaskBase):
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)
    id: int
    user_id: str
    status: TaskStatus
    is_pinned: bool
    created_at: datetime
    updated_at: datetime


class PinIn(BaseModel):
    is_pinned: bool


class MoveIn(BaseModel):
    list_id: int | None = None


class ListCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    color: str | None = Field(None, max_length=32)
    icon: str | None = Field(None, max_length=64)


class ListUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    color: str | None = Field(None, max_length=32)
    icon: str | None = Field(None, max_length=64)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class ListOut(ListCreate):
    model_config = ConfigDict(from_attributes=True)
    id: int
    user_id: str
    created_at: datetime
