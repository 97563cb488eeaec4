"""Generation request models"""

import base64
import binascii
import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Language(str, Enum):
    ZH = "zh"
    EN = "en"


class GenerationMode(str, Enum):
    AUTO = "auto"
    STANDARD = "standard"
    MARKUP = "markup"


DATA_URL = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[\w-]+=[\w.-]+)*;base64,(?P<data>.*)$", re.DOTALL)


class ImageInput(BaseModel):
    """Reference image attached to a request."""
    model_config = ConfigDict(frozen=True)

    data: bytes = Field(description="Raw image bytes")
    mime_type: str = Field("image/png", description="Image MIME type")

    @classmethod
    def from_data_url(cls, url: str) -> "ImageInput":
        """Build from a `data:<mime>;base64,<payload>` URL, as pasted or uploaded images arrive."""
        match = DATA_URL.match(url.strip())
        if not match:
            raise ValueError("image must be a base64 data URL")
        try:
            data = base64.b64decode(match.group("data"), validate=True)
        except binascii.Error as e:
            raise ValueError(f"image data URL is not valid base64: {e}") from e
        return cls(data=data, mime_type=match.group("mime") or "image/png")

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


class GenerationRequest(BaseModel):
    """A single prompt to turn into a chart configuration."""
    model_config = ConfigDict(frozen=True)

    prompt: str = Field(description="Natural-language description of the visualization")
    language: Language = Field(Language.ZH, description="Language for all human-readable output fields")
    mode: GenerationMode = Field(GenerationMode.AUTO, description="Which output kinds the model may choose")
    image: Optional[ImageInput] = Field(None, description="Optional reference image")

    @property
    def effective_prompt(self) -> str:
        """Prompt text sent to the model; an image-only request gets a default instruction."""
        if self.prompt.strip():
            return self.prompt.strip()
        if self.language is Language.EN:
            return "Analyze this image and create a chart"
        return "分析这张图片并绘制图表"
