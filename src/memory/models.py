"""Data models for long-term memory storage."""

from pydantic import BaseModel, Field


class MemoryRecord(BaseModel):
    """A stored memory: text plus its semantic embedding.

    Records are append-only. They are written by the ``save_memory`` tool and
    never mutated afterwards.
    """

    content: str
    embedding: list[float] = Field(repr=False)
    created_at: str
