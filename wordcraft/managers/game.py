from __future__ import annotations
import asyncio
import logging
import random
import string
import time
import uuid
from typing import Callable, Dict, List, Optional

from .. import config
from ..ai import generate_move
from ..board import in_bounds
from ..dictionary import DictionaryService, service as default_dictionary
from ..game_logic import GameState, InvalidAction
from ..rules import calculate_score, validate_placement
from ..schemas import Difficulty, GamePhase, PlacedTile, SessionState

logger = logging.getLogger(__name__)

PLAYER = 'player'
AI = 'ai'

class Game:
    """A single player game against the AI, driven over REST."""

    def __init__(self, game_id: str, difficulty: Difficulty = 'medium', dictionary: Optional[DictionaryService] = None,
                 rng: Optional[random.Random] = None, clock: Callable[[], float] = time.time):
        self.id = game_id
        self.difficulty = difficulty
        self.rng = rng or random.Random()
        self.clock = clock
        self.state = GameState([PLAYER, AI], dictionary=dictionary, rng=self.rng)
        self.pending: List[PlacedTile] = []
        self.phase: GamePhase = 'awaiting-player-input'
        self.created_at = self.updated_at = clock()
        self._bot_task: Optional[asyncio.Task] = None

    @property
    def ai_pending(self) -> bool:
        return self._bot_task is not None and not self._bot_task.done()

    def to_state(self) -> SessionState:
        state = self.state
        pending_ids = {t.id for t in self.pending}
        return SessionState(
            id=self.id,
            difficulty=self.difficulty,
            phase=self.phase,
            board=state.board.to_public(),
            playerRack=[t for t in state.racks[PLAYER] if t.id not in pending_ids],
            pendingTiles=list(self.pending),
            aiRackCount=len(state.racks[AI]),
            playerScore=state.scores[PLAYER],
            aiScore=state.scores[AI],
            currentTurn=PLAYER if state.current_player == PLAYER else AI,
            isFirstMove=state.is_first_move,
            consecutivePasses=state.consecutive_passes,
            tilesLeft=len(state.tile_bag),
            gameOver=state.game_over,
            winner=state.winner,
            moveHistory=list(state.move_history),
            aiPending=self.ai_pending,
        )

    # ---- pending tiles ----

    async def place_tile(self, tile_id: str, row: int, col: int, letter: Optional[str] = None):
        self._check_player_turn()
        tile = next((t for t in self.state.racks[PLAYER] if t.id == tile_id), None)
        if tile is None:
            raise InvalidAction('Invalid tile')
        # moving a pending tile frees its old cell first
        others = [t for t in self.pending if t.id != tile_id]
        if not in_bounds(row, col):
            raise InvalidAction('Tile out of bounds')
        if self.state.board.is_occupied(row, col) or any(t.row == row and t.col == col for t in others):
            raise InvalidAction('Cell already occupied')
        placed_letter = tile.letter
        if tile.isBlank:
            placed_letter = (letter or '').strip().upper()
            if placed_letter and (len(placed_letter) != 1 or placed_letter not in string.ascii_uppercase):
                raise InvalidAction('Blank tiles need a letter')
        others.append(PlacedTile(id=tile.id, letter=placed_letter, value=tile.value, isBlank=tile.isBlank, row=row, col=col))
        self.pending = others
        self._touch()

    async def recall_tiles(self):
        self.pending = []
        self._touch()

    async def shuffle_rack(self):
        self.rng.shuffle(self.state.racks[PLAYER])
        self._touch()

    async def preview_score(self) -> int:
        if not self.pending:
            return 0
        if not validate_placement(self.state.board, self.pending, self.state.is_first_move):
            return 0
        return calculate_score(self.state.board, self.pending)

    # ---- turn actions ----

    async def submit_move(self, tiles: Optional[List[PlacedTile]] = None):
        self._check_player_turn()
        move = self.pending if tiles is None else tiles
        self._set_phase('player-move-submitted')
        try:
            outcome = self.state.play(PLAYER, move)
        except InvalidAction:
            self._set_phase('awaiting-player-input')
            raise
        self.pending = []
        logger.info("Game %s: player played %s for %d", self.id, outcome.word, outcome.score)
        self._after_player_turn()
        return outcome

    async def pass_turn(self):
        self._check_player_turn()
        self.pending = []
        self.state.pass_turn(PLAYER)
        self._after_player_turn()

    async def exchange(self, tile_ids: List[str]):
        self._check_player_turn()
        self.pending = []
        self.state.exchange(PLAYER, tile_ids)
        self._after_player_turn()

    def play_ai_turn(self):
        """Play (or pass) the AI's turn right now."""
        state = self.state
        if state.game_over or state.current_player != AI:
            return
        tiles = generate_move(state.board, state.racks[AI], self.difficulty, state.is_first_move,
                              state.dictionary, self.rng)
        if tiles:
            try:
                outcome = state.play(AI, tiles)
                logger.info("Game %s: AI played %s for %d", self.id, outcome.word, outcome.score)
            except InvalidAction as exc:
                logger.warning("Game %s: AI move refused (%s), passing", self.id, exc)
                state.pass_turn(AI)
        else:
            state.pass_turn(AI)
        self._set_phase('ai-move-applied')
        self._set_phase('game-over' if state.game_over else 'awaiting-player-input')
        self._touch()

    # ---- helpers ----

    def _check_player_turn(self):
        if self.state.game_over:
            raise InvalidAction('Game is over')
        if self.state.current_player != PLAYER or self.phase != 'awaiting-player-input':
            raise InvalidAction('Not your turn')

    def _after_player_turn(self):
        self._touch()
        if self.state.game_over:
            self._set_phase('game-over')
            return
        self._set_phase('ai-thinking')
        self._maybe_schedule_bot_move()

    def _maybe_schedule_bot_move(self):
        if self.state.current_player != AI or self.ai_pending:
            return
        low, high = config.AI_THINK_DELAY
        self._bot_task = asyncio.create_task(self._bot_move_after(self.rng.uniform(low, high)))

    async def _bot_move_after(self, delay: float):
        await asyncio.sleep(delay)
        try:
            self.play_ai_turn()
        except Exception:
            logger.exception("Game %s: AI turn failed, passing", self.id)
            state = self.state
            if not state.game_over and state.current_player == AI:
                state.pass_turn(AI)
            self._set_phase('game-over' if state.game_over else 'awaiting-player-input')
            self._touch()

    def _set_phase(self, phase: GamePhase):
        if phase != self.phase:
            logger.debug("Game %s: %s -> %s", self.id, self.phase, phase)
            self.phase = phase

    def _touch(self):
        self.updated_at = self.clock()

    def cancel(self):
        if self.ai_pending:
            self._bot_task.cancel()

class GameManager:
    def __init__(self, dictionary: Optional[DictionaryService] = None, clock: Callable[[], float] = time.time):
        self.dictionary = dictionary if dictionary is not None else default_dictionary
        self.clock = clock
        self.games: Dict[str, Game] = {}

    def create(self, difficulty: Difficulty = 'medium', rng: Optional[random.Random] = None) -> Game:
        game_id = uuid.uuid4().hex[:12]
        game = Game(game_id, difficulty, self.dictionary, rng=rng, clock=self.clock)
        self.games[game_id] = game
        logger.info("Game %s created (%s)", game_id, difficulty)
        return game

    def get(self, game_id: str) -> Optional[Game]:
        return self.games.get(game_id)

    def sweep(self, ttl: float, now: Optional[float] = None) -> List[str]:
        now = self.clock() if now is None else now
        stale = [gid for gid, g in self.games.items() if now - g.updated_at > ttl]
        for gid in stale:
            self.games.pop(gid).cancel()
        if stale:
            logger.info("Dropped %d idle games", len(stale))
        return stale

    def close(self):
        for game in self.games.values():
            game.cancel()
