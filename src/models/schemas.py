from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FormatSchema(CamelModel):
    comments: bool = False
    convert_colors_to_hex: bool = True


class OptionsSchema(CamelModel):
    mangle: bool = True
    format: FormatSchema = Field(default_factory=FormatSchema)
    language: Literal["auto", "javascript", "css", "html"] = "auto"


class MinifyRequestSchema(CamelModel):
    type: Literal["minify"] = "minify"
    code: str
    options: OptionsSchema = Field(default_factory=OptionsSchema)


class MinifyResponseSchema(CamelModel):
    request_id: int
    code: str
    source_map: str | None = None
    error: str | None = None
    original_size: int
    minified_size: int
    compression_ratio: float
    detected_language: Literal["javascript", "css", "html"] | None = None
    warnings: list[str] = Field(default_factory=list)


class DetectRequestSchema(CamelModel):
    code: str


class DetectResponseSchema(CamelModel):
    language: Literal["javascript", "css", "html"]


class HealthStatus(BaseModel):
    status: str
    version: str
    advanced_html: bool
