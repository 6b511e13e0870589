from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, field_validator


class MoveRecord(BaseModel):
    """Last successful move, as reversed by `/undo`."""

    model_config = ConfigDict(frozen=True)

    source: str
    destination: str

    def reversed(self) -> MoveRecord:
        return MoveRecord(source=self.destination, destination=self.source)


class PegLayout(BaseModel):
    """Starting configuration: peg name -> disks bottom-to-top.

    Key order is the render order.
    """

    pegs: dict[str, list[NonNegativeInt]] = Field(..., min_length=1)


class SessionConfig(BaseModel):
    disks: int = Field(9, ge=0)
    peg_names: list[str] = Field(default_factory=lambda: ["a", "b", "c"], min_length=1)

    command_prefix: str = Field("/", min_length=1, max_length=1)
    move_separator: str = Field(",", min_length=1, max_length=1)

    clear_screen: bool = True

    # End the loop at end of input instead of retrying (piped/scripted input).
    exit_on_eof: bool = False

    @field_validator("peg_names")
    @classmethod
    def _unique_names(cls, v: list[str]) -> list[str]:
        if len(set(v)) != len(v):
            raise ValueError("peg names must be unique")
        if any(not name for name in v):
            raise ValueError("peg names must not be empty")
        return v
