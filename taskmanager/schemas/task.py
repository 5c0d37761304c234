"""
Pydantic schemas for tasks.
"""
from typing import Optional
from pydantic import BaseModel, Field


class TaskBase(BaseModel):
    """Base task schema"""
    title: Optional[str] = Field(None, max_length=200, description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    completed: bool = Field(False, description="Whether the task is done")


class TaskCreate(TaskBase):
    """Schema for creating a task"""
    pass


class TaskUpdate(TaskBase):
    """Schema for updating a task; every field is overwritten"""
    pass


class TaskResponse(TaskBase):
    """Schema for task response"""
    id: int = Field(..., description="Task ID")

    class Config:
        from_attributes = True
