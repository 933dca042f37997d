"""
FastAPI Application - REST API for a browser UI.

Endpoints:
    POST   /api/v1/games                          Deal a new game
    GET    /api/v1/games                          List games
    GET    /api/v1/games/{id}                     Get the human's view
    DELETE /api/v1/games/{id}                     End a game
    POST   /api/v1/games/{id}/restart             Deal again in the same game
    POST   /api/v1/games/{id}/play                Play a card
    POST   /api/v1/games/{id}/draw                Draw a card
    POST   /api/v1/games/{id}/place-hazard        Put a defused Exploding Kitten back
    POST   /api/v1/games/{id}/resolve-favor       Give a card for a Favor
    POST   /api/v1/games/{id}/dismiss-foresight   Close the See the Future reveal
    POST   /api/v1/games/{id}/dismiss-attack      Close the attack notice

After every accepted human move the computer seats play until the human
must act again; their moves are listed in the response.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Union
import os
import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from .service import APIService
from ..session import SessionManager
from .schemas import (
    CreateGameRequest,
    PlayCardRequest,
    PlaceHazardRequest,
    ResolveFavorRequest,
    GameStateResponse,
    MoveResponse,
    ErrorResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    ErrorCode,
)

# Environment configuration
KABOOM_ENV = os.getenv("KABOOM_ENV", "development")
KABOOM_SEED = os.getenv("KABOOM_SEED", None)
KABOOM_CPU_DELAY = float(os.getenv("KABOOM_CPU_DELAY", "0"))
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")


def _sleeping_delay_hook(scale: float):
    def hook(seat: int, delay: float) -> None:
        time.sleep(delay * scale)
    return hook


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    is_production = KABOOM_ENV == "production"

    app = FastAPI(
        title="Kaboom API",
        description="""
Exploding Kittens against three computer players.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Game does not exist |
| `OUT_OF_TURN` | Not your turn, or nothing to respond to |
| `ILLEGAL_CARD_INDEX` | No card at that hand index |
| `ILLEGAL_TARGET` | Target is you, eliminated, or has no cards |
| `INSUFFICIENT_MATCH` | Fewer than two matching cat cards |
| `BLOCKED_BY_PENDING` | Finish placing the kitten or giving the favor first |
| `UNPLAYABLE_CARD` | Defuse and Exploding Kitten cannot be played |
| `ILLEGAL_POSITION` | Placement outside the deck |
| `GAME_OVER` | The game has finished |
        """,
        version=__version__,
        docs_url=None if is_production else "/api/docs",
        redoc_url=None if is_production else "/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Service instance
    api_service = service or APIService(
        session_manager=SessionManager(),
        default_seed=int(KABOOM_SEED) if KABOOM_SEED else None,
        delay_hook=_sleeping_delay_hook(KABOOM_CPU_DELAY) if KABOOM_CPU_DELAY > 0 else None,
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Missing games are 404, rejected moves are 400."""
        status_code = 404 if error.error_code == ErrorCode.SESSION_NOT_FOUND else 400
        return JSONResponse(status_code=status_code, content=error.model_dump(mode="json"))

    def respond(response):
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameStateResponse,
        tags=["Games"],
        summary="Deal a new game",
    )
    async def create_game(request: CreateGameRequest | None = None) -> GameStateResponse:
        """Deal a new game. The human (seat 0) always starts."""
        return api_service.create_game(request)

    @app.get(
        "/api/v1/games",
        response_model=SessionListResponse,
        tags=["Games"],
        summary="List games",
    )
    async def list_games() -> SessionListResponse:
        games = api_service.list_games()
        return SessionListResponse(sessions=games, count=len(games))

    @app.get(
        "/api/v1/games/{game_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get the game as the human sees it",
    )
    async def get_game(game_id: str) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.get_game(game_id))

    @app.delete(
        "/api/v1/games/{game_id}",
        response_model=EndSessionResponse,
        tags=["Games"],
        summary="End a game",
    )
    async def end_game(game_id: str) -> EndSessionResponse:
        success = api_service.end_game(game_id)
        return EndSessionResponse(success=success, session_id=game_id)

    @app.post(
        "/api/v1/games/{game_id}/restart",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Deal a fresh game in the same session",
    )
    async def restart_game(game_id: str) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.restart_game(game_id))

    # =========================================================================
    # Move Endpoints
    # =========================================================================
    # Plain def: FastAPI runs these in its threadpool, so the computer
    # thinking delay does not block the event loop.

    move_responses = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}

    @app.post(
        "/api/v1/games/{game_id}/play",
        response_model=MoveResponse,
        responses=move_responses,
        tags=["Moves"],
        summary="Play a card from your hand",
    )
    def play_card(game_id: str, request: PlayCardRequest) -> Union[MoveResponse, JSONResponse]:
        """
        Play hand[card_index].

        Favor needs `target_seat`. A cat card with `target_seat` is played
        as a pair; without one it is discarded alone.
        """
        return respond(api_service.play_card(game_id, request))

    @app.post(
        "/api/v1/games/{game_id}/draw",
        response_model=MoveResponse,
        responses=move_responses,
        tags=["Moves"],
        summary="Draw the top card and end your turn",
    )
    def draw(game_id: str) -> Union[MoveResponse, JSONResponse]:
        return respond(api_service.draw(game_id))

    @app.post(
        "/api/v1/games/{game_id}/place-hazard",
        response_model=MoveResponse,
        responses=move_responses,
        tags=["Moves"],
        summary="Put the defused Exploding Kitten back in the deck",
    )
    def place_hazard(game_id: str, request: PlaceHazardRequest) -> Union[MoveResponse, JSONResponse]:
        return respond(api_service.place_hazard(game_id, request))

    @app.post(
        "/api/v1/games/{game_id}/resolve-favor",
        response_model=MoveResponse,
        responses=move_responses,
        tags=["Moves"],
        summary="Give a card to the player who asked for a favor",
    )
    def resolve_favor(game_id: str, request: ResolveFavorRequest) -> Union[MoveResponse, JSONResponse]:
        return respond(api_service.resolve_favor(game_id, request))

    @app.post(
        "/api/v1/games/{game_id}/dismiss-foresight",
        response_model=MoveResponse,
        responses=move_responses,
        tags=["Moves"],
        summary="Close the See the Future reveal",
    )
    def dismiss_foresight(game_id: str) -> Union[MoveResponse, JSONResponse]:
        return respond(api_service.dismiss_foresight(game_id))

    @app.post(
        "/api/v1/games/{game_id}/dismiss-attack",
        response_model=MoveResponse,
        responses=move_responses,
        tags=["Moves"],
        summary="Close the attack notice",
    )
    def dismiss_attack(game_id: str) -> Union[MoveResponse, JSONResponse]:
        return respond(api_service.dismiss_attack_notice(game_id))

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="kaboom",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Kaboom API",
            "version": __version__,
            "environment": KABOOM_ENV,
            "docs": None if is_production else "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn kaboom.api.app:app
app = create_app()
