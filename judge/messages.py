"""
Judge wire messages.

The host sends one JSON document per turn. The first document of a game (or
every document, when the process is restarted each turn) is a full history:

    {"requests": [setup, opp_1, ...], "responses": [own_1, ...],
     "data": "...", "globaldata": "..."}

A process kept alive between turns only receives the newest request, i.e.
the opponent's action pair for the turn just submitted.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from env.core.actions import Action
from env.core.constants import MASK_WORDS, TANKS_PER_SIDE
from env.core.types import Side

ActionPair = Annotated[List[Action], Field(min_length=TANKS_PER_SIDE, max_length=TANKS_PER_SIDE)]

_ACTION_PAIR = TypeAdapter(ActionPair)


class JudgeProtocolError(ValueError):
    """The host sent something that is not a valid judge message."""


class SetupRequest(BaseModel):
    """First request of a game: brick masks and the side we play."""

    model_config = ConfigDict(populate_by_name=True)

    field: List[int] = Field(
        min_length=MASK_WORDS,
        max_length=MASK_WORDS,
        description="Brick masks for rows 0-2, 3-5 and 6-8.",
    )
    my_side: Side = Field(alias="mySide", description="0 plays BLUE, 1 plays RED.")


class JudgeInput(BaseModel):
    """Full history message."""

    requests: List[Union[SetupRequest, ActionPair]] = Field(min_length=1)
    responses: List[ActionPair] = Field(default_factory=list)
    data: str = ""
    globaldata: str = ""


class JudgeResponse(BaseModel):
    response: ActionPair
    debug: Optional[str] = None
    data: Optional[str] = None
    globaldata: Optional[str] = None

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)


JudgeMessage = Union[JudgeInput, SetupRequest, List[Action]]


def parse_message(raw: Union[str, bytes, Any]) -> JudgeMessage:
    """
    Decode one judge message.

    Raises:
        JudgeProtocolError: On invalid JSON or an unexpected shape
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise JudgeProtocolError(f"Input is not valid JSON: {exc}") from exc

    try:
        if isinstance(raw, dict):
            if "requests" in raw:
                return JudgeInput.model_validate(raw)
            return SetupRequest.model_validate(raw)
        if isinstance(raw, list):
            return _ACTION_PAIR.validate_python(raw)
    except ValidationError as exc:
        raise JudgeProtocolError(str(exc)) from exc

    raise JudgeProtocolError(f"Unexpected message type: {type(raw).__name__}")
