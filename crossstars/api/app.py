"""
FastAPI Application - REST API for renderers and deck builders.

Endpoints:
    GET    /api/v1/health                          Health check
    POST   /api/v1/games                           Start a game from two decklists
    GET    /api/v1/games                           List active games
    GET    /api/v1/games/{id}                      Board snapshot
    DELETE /api/v1/games/{id}                      Delete a game
    POST   /api/v1/games/{id}/play                 Play a card
    POST   /api/v1/games/{id}/leaders/{card_id}    Damage/heal/awaken/tap a leader
    POST   /api/v1/games/{id}/end-turn             End the active player's turn
    POST   /api/v1/decklists/validate              Dry-run a decklist
    GET    /api/v1/cards/{name}                    Catalog lookup

All responses are JSON with explicit Pydantic schemas. A rejected command
returns an ErrorResponse and leaves the game unchanged.
"""

from typing import Optional, Union
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..catalog import CardCatalog, JsonCatalog, default_catalog
from ..engine_core.rules import DEFAULT_RULES, POLICIES, GameRules
from .service import APIService
from .schemas import (
    # Request models
    AdjustLeaderRequest,
    CreateGameRequest,
    PlayCardRequest,
    ValidateDecklistRequest,
    # Response models
    ActionResponse,
    CardDefinitionResponse,
    EndSessionResponse,
    ErrorResponse,
    GameStateResponse,
    HealthResponse,
    SessionListResponse,
    ValidateDecklistResponse,
    # Enums
    ErrorCode,
)

# Environment configuration
CROSSSTARS_ENV = os.getenv("CROSSSTARS_ENV", "development")
CROSSSTARS_LOG_LEVEL = os.getenv("CROSSSTARS_LOG_LEVEL", "INFO")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

logger = logging.getLogger(__name__)

# HTTP status per error code; anything not listed is a 400
STATUS_BY_CODE = {
    ErrorCode.SESSION_NOT_FOUND: 404,
    ErrorCode.CARD_NOT_FOUND: 404,
    ErrorCode.CATALOG_UNAVAILABLE: 503,
    ErrorCode.INTERNAL_ERROR: 500,
}


def configure_logging(level: str = CROSSSTARS_LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def load_catalog(path: Optional[str] = None) -> CardCatalog:
    """Catalog from CROSSSTARS_CATALOG_PATH, or the built-in sample cards."""
    path = path or os.getenv("CROSSSTARS_CATALOG_PATH")
    if path:
        return JsonCatalog.from_path(path)
    return default_catalog()


def load_rules(policy_name: Optional[str] = None) -> GameRules:
    policy_name = policy_name or os.getenv("CROSSSTARS_DECK_POLICY")
    if not policy_name:
        return DEFAULT_RULES
    if policy_name not in POLICIES:
        raise ValueError(f"Unknown CROSSSTARS_DECK_POLICY: {policy_name} (use one of {sorted(POLICIES)})")
    return GameRules(deck_policy=POLICIES[policy_name])


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Cross Stars Engine API",
        description="""
Rules engine for the Cross Stars two-player card game.

## Game Flow

1. `POST /games` with two decklists - the game is dealt and player 1 is in MAIN
2. `POST /games/{id}/play` to play cards, `POST /games/{id}/leaders/{card_id}` to edit leaders
3. `POST /games/{id}/end-turn` - play area trashed, bonus draw, opponent's turn begins

## Error Codes

| Code | Description |
|------|-------------|
| `UNKNOWN_CARD` | Decklist names a card not in the catalog |
| `INVALID_LEADER_COUNT` | Decklist does not have exactly 4 leaders |
| `INSUFFICIENT_RESOURCE` | Not enough PP to play the card |
| `NOT_ACTIVE_PLAYER` | Command from the player whose turn it is not |
| `SESSION_NOT_FOUND` | Game does not exist |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService(catalog=load_catalog(), rules=load_rules())
    logger.info("Cross Stars API starting (env=%s)", CROSSSTARS_ENV)

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=STATUS_BY_CODE.get(error.error_code, 400),
            content=error.model_dump(mode="json"),
        )

    def respond(result):
        if isinstance(result, ErrorResponse):
            return make_error_response(result)
        return result

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameStateResponse,
        status_code=201,
        responses={400: {"model": ErrorResponse, "description": "Decklist rejected"}},
        tags=["Games"],
        summary="Start a new game",
    )
    async def create_game(body: CreateGameRequest) -> Union[GameStateResponse, JSONResponse]:
        """
        Parse both decklists and deal the opening position.

        Both lists must be valid; otherwise no game is created.
        """
        return respond(api_service.create_game(body))

    @app.get(
        "/api/v1/games",
        response_model=SessionListResponse,
        tags=["Games"],
        summary="List active games",
    )
    async def list_games() -> SessionListResponse:
        games = api_service.list_games()
        return SessionListResponse(games=games, count=len(games))

    @app.get(
        "/api/v1/games/{game_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get the board snapshot",
    )
    async def get_game(game_id: str) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.get_game(game_id))

    @app.delete(
        "/api/v1/games/{game_id}",
        response_model=EndSessionResponse,
        tags=["Games"],
        summary="Delete a game",
    )
    async def end_game(game_id: str) -> EndSessionResponse:
        """Delete a game and release its state."""
        success = api_service.end_game(game_id)
        return EndSessionResponse(success=success, game_id=game_id)

    # =========================================================================
    # Command Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games/{game_id}/play",
        response_model=ActionResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Command rejected"},
            404: {"model": ErrorResponse, "description": "Game not found"},
        },
        tags=["Commands"],
        summary="Play a card",
    )
    async def play_card(game_id: str, body: PlayCardRequest) -> Union[ActionResponse, JSONResponse]:
        """
        Play a card from hand, or the active tactics card.

        The cost is paid from PP; if PP is short nothing changes.
        """
        return respond(api_service.play_card(game_id, body))

    @app.post(
        "/api/v1/games/{game_id}/leaders/{card_id}",
        response_model=ActionResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Command rejected"},
            404: {"model": ErrorResponse, "description": "Game not found"},
        },
        tags=["Commands"],
        summary="Edit a leader",
    )
    async def adjust_leader(
        game_id: str, card_id: str, body: AdjustLeaderRequest
    ) -> Union[ActionResponse, JSONResponse]:
        """Damage, heal, awaken or tap a leader. Either player's leaders, any time."""
        return respond(api_service.adjust_leader(game_id, card_id, body))

    @app.post(
        "/api/v1/games/{game_id}/end-turn",
        response_model=ActionResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Command rejected"},
            404: {"model": ErrorResponse, "description": "Game not found"},
        },
        tags=["Commands"],
        summary="End the active player's turn",
    )
    async def end_turn(game_id: str) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.end_turn(game_id))

    # =========================================================================
    # Catalog Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/decklists/validate",
        response_model=ValidateDecklistResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Catalog"],
        summary="Validate a decklist without starting a game",
    )
    async def validate_decklist(body: ValidateDecklistRequest) -> Union[ValidateDecklistResponse, JSONResponse]:
        return respond(api_service.validate_decklist(body))

    @app.get(
        "/api/v1/cards/{name}",
        response_model=CardDefinitionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Catalog"],
        summary="Look up a card by display name",
    )
    async def get_card(name: str) -> Union[CardDefinitionResponse, JSONResponse]:
        return respond(api_service.get_card(name))

    # =========================================================================
    # System Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="crossstars-engine",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        return {
            "service": "crossstars-engine",
            "docs": "/api/docs",
            "health": "/api/v1/health",
        }

    return app



def serve_app():
    """
    Entry point for uvicorn: configure logging and build the app from env.

        uvicorn --factory crossstars.api.app:serve_app
    """
    configure_logging()
    return create_app()
