"""HTTP API entrypoint for driving local matches from a UI or a script."""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from env.setup import Setup, create_random_setup
from game_runner import GameRunner
from infra.logger import get_logger

log = get_logger(__name__)

app = FastAPI(title="Tank Field")
runner: GameRunner | None = None

# Allow a browser-based control panel (served from file:// or other origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class StartRequest(BaseModel):
    setup: dict | None = None
    seed: int | None = None


def _require_runner() -> GameRunner:
    if runner is None:
        raise HTTPException(400, "No active game")
    return runner


@app.post("/start")
def start(request: StartRequest):
    global runner
    try:
        setup = Setup.from_dict(request.setup) if request.setup else create_random_setup(seed=request.seed)
        runner = GameRunner(setup)
    except (ValueError, TypeError) as exc:
        raise HTTPException(400, str(exc)) from exc
    log.info("Started match: %r", setup)
    return {"success": True, "frame": runner.get_initial_frame().to_dict()}


@app.post("/step")
def step():
    active = _require_runner()
    try:
        return active.step().to_dict()
    except RuntimeError as exc:
        raise HTTPException(400, str(exc)) from exc


@app.post("/revert")
def revert():
    active = _require_runner()
    frame = active.revert()
    if frame is None:
        raise HTTPException(400, "Already at the first turn")
    return frame.to_dict()


@app.get("/status")
def status():
    if runner is None:
        return {"active": False}
    return {
        "active": True,
        "turn": runner.turn,
        "done": runner.done,
        "result": runner.result.name,
    }
