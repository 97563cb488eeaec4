"""History entry model"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from chartgen.models.chart import ChartConfig


class HistoryEntry(BaseModel):
    """One successful generation: the prompt and the config it produced."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex, description="Unique entry identifier")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        alias="createdAt",
        description="Creation time (UTC)",
    )
    prompt: str = Field(description="Prompt that produced the config")
    config: ChartConfig = Field(description="Generated configuration")
    image: Optional[str] = Field(None, description="Reference image as a base64 data URL")
