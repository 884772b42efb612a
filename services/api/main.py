#!/usr/bin/env python3
"""
HTTP host for a single game session.

Owns the GalaxyState, drives advance_world from an asyncio loop fed by a
monotonic clock, and exposes the read-only snapshot plus the user commands.
"""
from __future__ import annotations

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, Query
from pydantic import BaseModel, Field

from conquest import commands
from conquest.helper.world_helpers import create_galaxy
from conquest.models import CommandResult, GalaxyState, RuntimeSettings, SizeClass
from conquest.state_utils import events_tail, snapshot_from_state
from conquest.world import advance_world

logger = logging.getLogger("conquest.api")


class GameSession:
    def __init__(self, settings: RuntimeSettings) -> None:
        self.settings = settings
        self.state: GalaxyState = create_galaxy(
            seed=settings.seed, width=settings.width, height=settings.height
        )
        self._stop = asyncio.Event()

    def step(self, elapsed: float) -> None:
        advance_world(self.state, elapsed)

    async def run(self) -> None:
        logger.info(
            "starting tick loop interval=%.3fs seed=%d",
            self.settings.tick_interval,
            self.state.seed,
        )
        last = time.monotonic()
        try:
            while not self._stop.is_set():
                await asyncio.sleep(self.settings.tick_interval)
                now = time.monotonic()
                try:
                    self.step(now - last)
                except Exception:
                    logger.exception("tick failed; session keeps running")
                last = now
        finally:
            logger.info("stopping tick loop")

    def stop(self) -> None:
        self._stop.set()


class SelectRequest(BaseModel):
    system_id: Optional[int] = Field(None, description="System to select; null clears")


class SelectFleetRequest(BaseModel):
    fleet_id: int


class MoveRequest(BaseModel):
    fleet_id: int = Field(..., description="Player fleet to move")
    destination_id: int = Field(..., description="Target system id")


class BuildRequest(BaseModel):
    system_id: Optional[int] = Field(None, description="Defaults to the selected system")
    size_class: SizeClass = SizeClass.SMALL


class SpeedRequest(BaseModel):
    multiplier: int


class NewGameRequest(BaseModel):
    seed: Optional[str] = Field(None, description="Integer or free-form text seed")


def _result(result: CommandResult) -> Dict[str, Any]:
    return asdict(result)


def create_app(settings: RuntimeSettings | None = None) -> FastAPI:
    settings = settings or RuntimeSettings()
    session = GameSession(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        task = asyncio.create_task(session.run())
        try:
            yield
        finally:
            session.stop()
            await task

    app = FastAPI(title="Galactic Conquest", version="0.1.0", lifespan=lifespan)
    app.state.session = session

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/snapshot")
    async def snapshot() -> Dict[str, Any]:
        return snapshot_from_state(session.state)

    @app.get("/events")
    async def events(count: int = Query(50, ge=0)) -> List[Dict[str, Any]]:
        return events_tail(session.state, count)

    @app.get("/preview")
    async def preview(seed: str) -> Dict[str, Any]:
        """
        Generate a deterministic preview of a galaxy without touching the live session.
        """
        state = create_galaxy(seed=seed, width=settings.width, height=settings.height)
        return snapshot_from_state(state)

    @app.post("/select")
    async def select(payload: SelectRequest) -> Dict[str, Any]:
        return _result(commands.select_system(session.state, payload.system_id))

    @app.post("/select-fleet")
    async def select_fleet(payload: SelectFleetRequest) -> Dict[str, Any]:
        return _result(commands.select_fleet(session.state, payload.fleet_id))

    @app.post("/move")
    async def move(payload: MoveRequest) -> Dict[str, Any]:
        return _result(
            commands.issue_move(session.state, payload.fleet_id, payload.destination_id)
        )

    @app.post("/build")
    async def build(payload: BuildRequest) -> Dict[str, Any]:
        return _result(
            commands.build_fleet(session.state, payload.system_id, payload.size_class)
        )

    @app.post("/speed")
    async def speed(payload: SpeedRequest) -> Dict[str, Any]:
        return _result(commands.set_speed(session.state, payload.multiplier))

    @app.post("/speed/cycle")
    async def speed_cycle() -> Dict[str, Any]:
        return _result(commands.cycle_speed(session.state))

    @app.post("/pause")
    async def pause() -> Dict[str, Any]:
        return _result(commands.toggle_pause(session.state))

    @app.post("/surrender")
    async def surrender() -> Dict[str, Any]:
        return _result(commands.surrender(session.state))

    @app.post("/new-game")
    async def new_game(payload: NewGameRequest) -> Dict[str, Any]:
        return _result(commands.new_game(session.state, payload.seed))

    return app


def main() -> None:
    settings = RuntimeSettings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
