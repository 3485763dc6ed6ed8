"""Base model shared by every LDtk document shape."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class LDtkModel(BaseModel):
    """Aliased LDtk model where a JSON null leaves the field at its default.

    Optional fields default to None, so dropping nulls keeps them None; every
    other field falls back to its zero value ("", 0, [], ...). Values of the
    wrong type still fail validation.
    """

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _null_is_default(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data
