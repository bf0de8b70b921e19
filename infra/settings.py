"""Runtime settings for the bot, read from the environment (and a .env file)."""

from __future__ import annotations

import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

ENV_PREFIX = "TANKFIELD_"


class BotSettings(BaseModel):
    log_level: str = Field(default="INFO", description="Root log level.")
    log_json: bool = Field(default=False, description="Emit JSON log lines.")
    keep_running: bool = Field(
        default=True,
        description="Ask the judge to keep the process alive between turns.",
    )
    agent: str = Field(default="greedy", description="Registered agent type to play with.")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> BotSettings:
    """
    Build settings from TANKFIELD_* variables.

    A .env file in the working directory is loaded first when reading from
    the real process environment.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    values = {}
    for name in BotSettings.model_fields:
        raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None:
            values[name] = raw
    return BotSettings.model_validate(values)
