from pydantic import BaseModel, ConfigDict


class DisabledToggle(BaseModel):
    model_config = ConfigDict(extra="forbid")

    disabled: bool
