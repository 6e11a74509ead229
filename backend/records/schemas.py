"""
Input schemas for the stores.

Raw payloads are validated here and turned into typed geometry; nothing inside
the stores touches raw coordinate arrays. Update schemas are sparse: only the
fields a caller actually sent end up in `changes()`.
"""

from __future__ import annotations

from typing import Any, ClassVar, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from geo.shapes import GeoPoint, GeoPolygon, parse_point, parse_polygon
from records.errors import ValidationError

M = TypeVar("M", bound=BaseModel)


class _Input(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")


class _SparseUpdate(_Input):
    # Fields that may be omitted but never explicitly set to null.
    non_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_null_required(self):
        for name in self.non_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        return {k: getattr(self, k) for k in self.model_fields_set}


class CategoryCreate(_Input):
    name: str = Field(min_length=1)


class CategoryUpdate(_SparseUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = ("name",)

    name: str | None = Field(default=None, min_length=1)


class SpeciesCreate(_Input):
    name: str = Field(min_length=1)
    categoryId: str = Field(min_length=1)
    geometry: GeoPolygon | None = None

    @field_validator("geometry", mode="before")
    @classmethod
    def check_geometry(cls, v: Any) -> GeoPolygon | None:
        return None if v is None else parse_polygon(v)


class SpeciesUpdate(_SparseUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = ("name", "categoryId")

    name: str | None = Field(default=None, min_length=1)
    categoryId: str | None = Field(default=None, min_length=1)
    # Explicit null clears the stored range.
    geometry: GeoPolygon | None = None

    @field_validator("geometry", mode="before")
    @classmethod
    def check_geometry(cls, v: Any) -> GeoPolygon | None:
        return None if v is None else parse_polygon(v)


class AnimalCreate(_Input):
    speciesId: str = Field(min_length=1)
    location: GeoPoint | None = None
    name: str | None = None
    notes: str | None = None

    @field_validator("location", mode="before")
    @classmethod
    def check_location(cls, v: Any) -> GeoPoint | None:
        return None if v is None else parse_point(v)


class AnimalUpdate(_SparseUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = ("speciesId",)

    speciesId: str | None = Field(default=None, min_length=1)
    location: GeoPoint | None = None
    name: str | None = None
    notes: str | None = None

    @field_validator("location", mode="before")
    @classmethod
    def check_location(cls, v: Any) -> GeoPoint | None:
        return None if v is None else parse_point(v)


class AreaQuery(_Input):
    polygon: GeoPolygon

    @field_validator("polygon", mode="before")
    @classmethod
    def check_polygon(cls, v: Any) -> GeoPolygon:
        return parse_polygon(v)


def parse_input(model: type[M], payload: M | Mapping[str, Any] | None) -> M:
    """
    Validate `payload` against `model`, re-raising failures as ValidationError.
    """
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload if payload is not None else {})
    except PydanticValidationError as exc:
        raise ValidationError(_describe(exc)) from exc


def _describe(exc: PydanticValidationError) -> str:
    parts: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc") or ()) or "input"
        msg = str(err.get("msg") or "invalid")
        # pydantic prefixes messages from ValueError-based validators.
        msg = msg.removeprefix("Value error, ")
        parts.append(f"{loc}: {msg}")
    return "; ".join(parts) or "invalid input"
