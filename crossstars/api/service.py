"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to reducer actions
2. Manages game sessions
3. Builds board snapshots for renderers
4. Maps engine failures to structured error responses

This layer is framework-agnostic (can be used with FastAPI, the CLI, etc.)
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from .schemas import (
    # Requests
    CreateGameRequest,
    PlayCardRequest,
    AdjustLeaderRequest,
    ValidateDecklistRequest,
    # Responses
    ActionResponse,
    CardDefinitionResponse,
    ErrorResponse,
    GameStateResponse,
    ValidateDecklistResponse,
    # Shared
    CardInfo,
    PlayerInfo,
    PPInfo,
    ZoneInfo,
    # Enums
    ErrorCode,
)
from ..catalog import CardCatalog, default_catalog
from ..decklist.parser import validate_decklist
from ..engine_core.action import Action, ActionResult, LeaderOp
from ..engine_core.cards import CardDefinition, CardInstance, LeaderDefinition
from ..engine_core.errors import CatalogUnavailable
from ..engine_core.rules import DEFAULT_RULES, POLICIES, GameRules
from ..engine_core.state import GameState, PlayerState, ZoneName
from ..session import GameSession, SessionManager

logger = logging.getLogger(__name__)

# Zones whose contents are secret; only the count is shown
HIDDEN_ZONES = {ZoneName.DECK, ZoneName.TACTICS_DECK}


def _error_code(code: str | None) -> ErrorCode:
    if code is None:
        return ErrorCode.INTERNAL_ERROR
    try:
        return ErrorCode(code)
    except ValueError:
        logger.error("Unmapped engine error code: %s", code)
        return ErrorCode.INTERNAL_ERROR


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Start a game
        state = service.create_game(CreateGameRequest(decklist_p1=..., decklist_p2=...))

        # Play a card
        response = service.play_card(state.game_id, PlayCardRequest(...))
    """
    catalog: CardCatalog = field(default_factory=default_catalog)
    rules: GameRules = DEFAULT_RULES
    session_manager: SessionManager | None = None
    # Games with no command for this long are dropped when a new game starts
    session_idle_seconds: int = 3600

    def __post_init__(self):
        if self.session_manager is None:
            self.session_manager = SessionManager(catalog=self.catalog, rules=self.rules)

    # =========================================================================
    # Games
    # =========================================================================

    def create_game(self, request: CreateGameRequest) -> GameStateResponse | ErrorResponse:
        """
        Start a new game from two decklists.

        A rejected decklist does not leave a session behind. Idle games are
        swept first.
        """
        self.session_manager.cleanup_stale_sessions(self.session_idle_seconds)
        session = self.session_manager.create_session(seed=request.seed)
        result = session.start(request.decklist_p1, request.decklist_p2, seed=request.seed)
        if not result.success:
            self.session_manager.end_session(session.session_id)
            return self._failure(result)
        return self.build_game_state(session.game_state, session.last_changes)

    def get_game(self, game_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(game_id)
        if not session:
            return self._not_found(game_id)
        return self.build_game_state(session.game_state, session.last_changes)

    def list_games(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def end_game(self, game_id: str) -> bool:
        return self.session_manager.end_session(game_id)

    # =========================================================================
    # Commands
    # =========================================================================

    def play_card(self, game_id: str, request: PlayCardRequest) -> ActionResponse | ErrorResponse:
        return self._apply(game_id, Action.play_card(request.player_id, request.card_id))

    def adjust_leader(
        self, game_id: str, card_id: str, request: AdjustLeaderRequest
    ) -> ActionResponse | ErrorResponse:
        action = Action.adjust_leader(card_id, LeaderOp(request.op.value), request.amount)
        return self._apply(game_id, action)

    def end_turn(self, game_id: str) -> ActionResponse | ErrorResponse:
        return self._apply(game_id, Action.end_turn())

    def _apply(self, game_id: str, action: Action) -> ActionResponse | ErrorResponse:
        session = self.session_manager.get_session(game_id)
        if not session:
            return self._not_found(game_id)
        result = session.apply(action)
        if not result.success:
            return self._failure(result)
        return self._action_response(session, result)

    # =========================================================================
    # Catalog / decklists
    # =========================================================================

    def validate_decklist(
        self, request: ValidateDecklistRequest
    ) -> ValidateDecklistResponse | ErrorResponse:
        """Dry-run a decklist against the catalog and a size policy."""
        if request.policy is None:
            policy = self.rules.deck_policy
        elif request.policy in POLICIES:
            policy = POLICIES[request.policy]
        else:
            return ErrorResponse(
                error=f"Unknown deck policy: {request.policy}",
                error_code=ErrorCode.VALIDATION_ERROR,
                details={"allowed": sorted(POLICIES)},
            )

        try:
            result = validate_decklist(request.decklist, self.catalog, policy)
        except CatalogUnavailable as e:
            return ErrorResponse(error=e.message, error_code=ErrorCode.CATALOG_UNAVAILABLE)
        return ValidateDecklistResponse(valid=result.valid, errors=result.errors, counts=result.counts)

    def get_card(self, name: str) -> CardDefinitionResponse | ErrorResponse:
        try:
            definition = self.catalog.lookup(name)
        except CatalogUnavailable as e:
            return ErrorResponse(error=e.message, error_code=ErrorCode.CATALOG_UNAVAILABLE)
        if definition is None:
            return ErrorResponse(
                error=f"Card not found: {name}",
                error_code=ErrorCode.CARD_NOT_FOUND,
            )
        return self.build_card_definition(definition)

    # =========================================================================
    # Conversion Helpers
    # =========================================================================

    def build_game_state(
        self, state: GameState, last_changes: list[str] | None = None
    ) -> GameStateResponse:
        """Build the board snapshot a renderer reads."""
        return GameStateResponse(
            game_id=state.game_id,
            round=state.round,
            turn=state.turn,
            active_player=state.active_player.value,
            phase=state.current_phase.value,
            is_first_turn_of_game=state.is_first_turn_of_game,
            players=[
                self._build_player(state, player)
                for player in state.players.values()
            ],
            last_changes=last_changes or [],
        )

    def _build_player(self, state: GameState, player: PlayerState) -> PlayerInfo:
        return PlayerInfo(
            player_id=player.player_id.value,
            is_active=player.player_id == state.active_player,
            pp=PPInfo(max=player.pp.max, current=player.pp.current),
            pp_ticket=player.pp_ticket,
            has_played_tactics_this_turn=player.has_played_tactics_this_turn,
            wins=state.wins.get(player.player_id, 0),
            zones=[
                ZoneInfo(
                    zone=zone.name.value,
                    card_count=zone.count,
                    cards=[] if zone.name in HIDDEN_ZONES else [self._build_card(c) for c in zone.cards],
                )
                for zone in player.zones.values()
            ],
        )

    def _build_card(self, card: CardInstance) -> CardInfo:
        leader_stats = {}
        if card.is_leader:
            leader_stats = {"current_hp": card.current_hp, "max_hp": card.max_hp, "atk": card.atk}
        return CardInfo(
            unique_id=card.unique_id,
            card_id=card.card_id,
            name=card.name,
            card_type=card.card_type,
            cost=card.cost,
            is_face_down=card.is_face_down,
            is_tapped=card.is_tapped,
            is_awakened=card.is_awakened,
            attached=[self._build_card(c) for c in card.attached_cards],
            **leader_stats,
        )

    def build_card_definition(self, definition: CardDefinition) -> CardDefinitionResponse:
        extra = {}
        if isinstance(definition, LeaderDefinition):
            extra = {
                "base_hp": definition.base_hp,
                "base_atk": definition.base_atk,
                "awakened_hp": definition.awakened_hp,
                "awakened_atk": definition.awakened_atk,
                "awakened_effect_text": definition.awakened_effect_text,
            }
        return CardDefinitionResponse(
            card_id=definition.card_id,
            name=definition.name,
            card_type=definition.card_type,
            cost=definition.cost,
            effect_text=definition.effect_text,
            color=definition.color,
            **extra,
        )

    def _action_response(self, session: GameSession, result: ActionResult) -> ActionResponse:
        return ActionResponse(
            success=True,
            changes=result.state_changes,
            details=result.details,
            state=self.build_game_state(session.game_state, result.state_changes),
        )

    def _failure(self, result: ActionResult) -> ErrorResponse:
        return ErrorResponse(
            error=result.error or "Action failed",
            error_code=_error_code(result.error_code),
        )

    def _not_found(self, game_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Game {game_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )
