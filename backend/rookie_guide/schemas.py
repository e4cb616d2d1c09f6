from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, ConfigDict, Field, model_validator
from uuid import UUID

LOCATION_TAG_PATTERN = r"^CN(-[A-Z0-9]{2,3})?$"


class UserCreate(BaseModel):
    phone: Optional[str] = Field(default=None, min_length=11, max_length=11)
    email: Optional[EmailStr] = None
    password: str = Field(min_length=6, max_length=100)
    nickname: str = Field(min_length=1, max_length=50)


class LoginRequest(BaseModel):
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    password: str = Field(min_length=6)


class UserOut(BaseModel):
    id: UUID
    nickname: str
    avatar_url: Optional[str] = None
    home_city: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


class UserUpdate(BaseModel):
    nickname: Optional[str] = Field(default=None, min_length=1, max_length=50)
    avatar_url: Optional[str] = None
    home_city: Optional[str] = None


class AuthResponse(BaseModel):
    user: UserOut
    access_token: str
    token_type: str = "bearer"


class TemplateStep(BaseModel):
    title: str = Field(min_length=1, max_length=500)
    description: Optional[str] = None
    order: int = Field(ge=0)


class TemplateCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=2000)
    location_tag: str = Field(pattern=LOCATION_TAG_PATTERN)
    steps: list[TemplateStep] = Field(min_length=1)
    parent_id: Optional[UUID] = None

    @model_validator(mode="after")
    def validate_step_order(self) -> "TemplateCreate":
        orders = sorted(step.order for step in self.steps)
        if orders != list(range(len(self.steps))):
            raise ValueError("step order values must be unique and run from 0 to N-1")
        self.steps = sorted(self.steps, key=lambda step: step.order)
        return self


class TemplateOut(BaseModel):
    id: UUID
    title: str
    description: str
    location_tag: str
    steps: list[TemplateStep]
    parent_id: Optional[UUID] = None
    created_by: UUID
    is_official: bool
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class TemplateSearchQuery(BaseModel):
    keyword: Optional[str] = None
    location_tag: Optional[str] = None
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=100)


class StepProgress(BaseModel):
    step_index: int
    completed: bool = False
    completed_at: Optional[datetime] = None


class ChecklistProgress(BaseModel):
    steps: list[StepProgress]
    total_steps: int
    completed_steps: int
    progress_percentage: float


class ChecklistOut(BaseModel):
    id: UUID
    user_id: UUID
    source_template_id: UUID
    title: str
    progress_status: list[StepProgress]
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class UserChecklistResponse(BaseModel):
    checklist: ChecklistOut
    progress: ChecklistProgress


class ForkTemplateRequest(BaseModel):
    template_id: UUID


class UpdateStepRequest(BaseModel):
    step_index: int
    completed: bool
