"""The game state machine: cursor movement, guesses, mistakes, expiry and level flow.

All waits (mistake flash, expiry penalty, celebration blink, level overlay)
are callbacks on the injected ``Scheduler``. Each one is tagged with the
engine's current generation; any transition that supersedes pending work
bumps the generation and cancels what is queued, so a late callback can
never act on a newer level or attempt.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, FrozenSet, List, Optional, Set, Tuple

from brain_train.core.config import GameConfig
from brain_train.core.levels import LevelState, cols_for_level, score_delta
from brain_train.core.path import Cell, PathGenerator, SafePath
from brain_train.core.rewards import pick_message, pick_tier, status_text
from brain_train.core.scheduler import Handle, Scheduler
from brain_train.core.timer import LevelTimer, display_bucket

logger = logging.getLogger(__name__)


class GameState(str, Enum):
    PLAYING = "playing"
    MISTAKE_FLASH = "mistake_flash"
    TIME_EXPIRED_FLASH = "time_expired_flash"
    LEVEL_COMPLETE_CELEBRATION = "level_complete_celebration"
    LEVEL_TRANSITION_OVERLAY = "level_transition_overlay"


class GameEvent(str, Enum):
    STATE_CHANGED = "state_changed"
    CORRECT_GUESS = "correct_guess"
    WRONG_GUESS = "wrong_guess"
    LEVEL_COMPLETE = "level_complete"


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of everything the UI needs to draw a frame."""

    rows: int
    cols: int
    level: int
    state: GameState
    cursor: Cell
    visited: FrozenSet[Cell]
    wrong_cell: Optional[Cell]
    blink_cells: FrozenSet[Cell]
    blink_on: bool
    input_locked: bool
    remaining_seconds: int
    timer_bucket: str
    timer_flashing: bool
    score: int
    mistakes_in_level: int
    status_text: str
    overlay_visible: bool
    overlay_lines: Tuple[str, ...]
    overlay_flawless: bool


Listener = Callable[[GameEvent], None]


class GameEngine:
    def __init__(
        self,
        scheduler: Scheduler,
        config: Optional[GameConfig] = None,
        path_generator: Optional[PathGenerator] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._config = config or GameConfig()
        self._scheduler = scheduler
        self._rng = rng or random.Random()
        self._paths = path_generator or PathGenerator(self._config.rows, self._rng)
        self._timer = LevelTimer(
            scheduler,
            on_tick=self._on_timer_tick,
            on_expired=self._on_time_expired,
            default_seconds=self._config.level_seconds,
        )
        self._listeners: List[Listener] = []
        self._generation = 0
        self._pending: List[Handle] = []

        self._level = LevelState()
        self._state = GameState.PLAYING
        self._cols = 0
        self._path = SafePath(())
        self._visited: Set[Cell] = set()
        self._row = self._config.rows - 1
        self._col = 0
        self._wrong_cell: Optional[Cell] = None
        self._blink_cells: FrozenSet[Cell] = frozenset()
        self._blink_on = False
        self._status = ""
        self._headline = ""
        self._cleared_flawless = False
        self._overlay_visible = False
        self._overlay_lines: Tuple[str, ...] = ()
        self._start_level()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def rows(self) -> int:
        return self._config.rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def level(self) -> int:
        return self._level.level

    @property
    def score(self) -> int:
        return self._level.score

    @property
    def mistakes_in_level(self) -> int:
        return self._level.mistakes_in_level

    @property
    def start_row_safe_col(self) -> Optional[int]:
        return self._level.start_row_safe_col

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def path(self) -> SafePath:
        return self._path

    @property
    def cursor(self) -> Cell:
        return (self._row, self._col)

    @property
    def visited(self) -> FrozenSet[Cell]:
        return frozenset(self._visited)

    @property
    def timer(self) -> LevelTimer:
        return self._timer

    @property
    def input_locked(self) -> bool:
        return self._state is not GameState.PLAYING

    def snapshot(self) -> GameSnapshot:
        cfg = self._config
        remaining = self._timer.remaining_seconds
        return GameSnapshot(
            rows=cfg.rows,
            cols=self._cols,
            level=self._level.level,
            state=self._state,
            cursor=(self._row, self._col),
            visited=frozenset(self._visited),
            wrong_cell=self._wrong_cell,
            blink_cells=self._blink_cells,
            blink_on=self._blink_on,
            input_locked=self.input_locked,
            remaining_seconds=remaining,
            timer_bucket=display_bucket(remaining, cfg.warn_seconds, cfg.danger_seconds),
            timer_flashing=self._timer.expired,
            score=self._level.score,
            mistakes_in_level=self._level.mistakes_in_level,
            status_text=self._status,
            overlay_visible=self._overlay_visible,
            overlay_lines=self._overlay_lines,
            overlay_flawless=self._overlay_visible and self._cleared_flawless,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register for engine events; returns a callable that unsubscribes."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the countdown for the current level."""
        self._timer.start(self._config.level_seconds)
        self._notify()

    def stop(self) -> None:
        """Cancel the countdown and every pending delayed transition."""
        self._supersede()
        self._timer.cancel()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def move_left(self) -> None:
        self._move(-1)

    def move_right(self) -> None:
        self._move(1)

    def move_up(self) -> None:
        if self.input_locked:
            logger.debug("move_up ignored while %s", self._state.value)
            return
        if self._row == 0:
            return
        if (self._row, self._path.column_for(self._row)) not in self._visited:
            logger.debug("move_up ignored: row %d not cleared", self._row)
            return
        self._row -= 1
        self._notify()

    def select_cell(self) -> None:
        self.select_cell_at(self._row, self._col)

    def select_cell_at(self, row: int, col: int) -> None:
        """Confirm a cell. Only cells on the active row are accepted."""
        if self.input_locked:
            logger.debug("select ignored while %s", self._state.value)
            return
        if row != self._row or not 0 <= col < self._cols:
            logger.debug("select ignored: (%d, %d) is not on active row %d", row, col, self._row)
            return
        if col != self._col:
            if self._bottom_locked():
                logger.debug("select ignored: cursor pinned to remembered start column")
                return
            self._col = col

        cell = (row, col)
        if self._path.is_safe(row, col):
            self._on_correct(cell)
        else:
            self._on_wrong(cell)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _move(self, step: int) -> None:
        if self.input_locked:
            logger.debug("move ignored while %s", self._state.value)
            return
        if self._bottom_locked():
            logger.debug("move ignored: cursor pinned to remembered start column")
            return
        col = max(0, min(self._cols - 1, self._col + step))
        if col != self._col:
            self._col = col
            self._notify()

    def _bottom_locked(self) -> bool:
        bottom = self._config.rows - 1
        start = self._level.start_row_safe_col
        return (
            self._row == bottom
            and start is not None
            and self._col == start
            and (bottom, start) not in self._visited
        )

    def _on_correct(self, cell: Cell) -> None:
        row, col = cell
        if row == self._config.rows - 1:
            self._level.start_row_safe_col = col
        self._visited.add(cell)
        self._emit(GameEvent.CORRECT_GUESS)
        if row == 0:
            self._begin_level_complete()
            return
        self._row -= 1
        self._notify()

    def _on_wrong(self, cell: Cell) -> None:
        self._level.mistakes_in_level += 1
        self._wrong_cell = cell
        self._state = GameState.MISTAKE_FLASH
        reset = cell[0] != self._config.rows - 1
        logger.debug(
            "Wrong cell %s on level %d (mistake %d)",
            cell,
            self._level.level,
            self._level.mistakes_in_level,
        )
        self._emit(GameEvent.WRONG_GUESS)
        self._schedule(self._config.mistake_flash_ms, lambda: self._end_mistake_flash(reset))
        self._notify()

    def _end_mistake_flash(self, reset: bool) -> None:
        self._wrong_cell = None
        if reset:
            self._supersede()
            self._reset_attempt()
        self._state = GameState.PLAYING
        self._notify()

    def _reset_attempt(self) -> None:
        """Send the player back to the bottom row on the same path."""
        start = self._level.start_row_safe_col
        self._visited.clear()
        self._wrong_cell = None
        self._row = self._config.rows - 1
        self._col = start if start is not None else 0

    def _on_timer_tick(self, remaining: int) -> None:
        self._notify()

    def _on_time_expired(self) -> None:
        self._supersede()
        self._wrong_cell = None
        self._state = GameState.TIME_EXPIRED_FLASH
        logger.info("Time expired on level %d; restarting attempt", self._level.level)
        self._schedule(self._config.expiry_penalty_ms, self._end_expiry_penalty)
        self._notify()

    def _end_expiry_penalty(self) -> None:
        self._supersede()
        self._reset_attempt()
        self._state = GameState.PLAYING
        self._timer.start(self._config.level_seconds)
        self._notify()

    def _begin_level_complete(self) -> None:
        cfg = self._config
        self._supersede()
        self._state = GameState.LEVEL_COMPLETE_CELEBRATION

        flawless = self._level.flawless
        remaining = self._timer.remaining_seconds
        tier = pick_tier(self._level.mistakes_in_level, remaining, cfg.time_crunch_seconds)
        self._headline = pick_message(tier, cfg.messages, self._rng)
        delta = score_delta(self._level.level, flawless, cfg)
        self._level.score += delta
        self._cleared_flawless = flawless
        self._timer.cancel()
        self._status = status_text(delta, flawless)
        logger.info(
            "Level %d complete: +%d (total %d, mistakes %d, %ds left)",
            self._level.level,
            delta,
            self._level.score,
            self._level.mistakes_in_level,
            remaining,
        )
        self._emit(GameEvent.LEVEL_COMPLETE)

        self._blink_cells = frozenset(self._path.cells())
        self._blink_on = True
        self._schedule(cfg.blink_interval_ms, lambda: self._blink_step(cfg.blink_interval_ms))
        self._notify()

    def _blink_step(self, elapsed: int) -> None:
        interval = self._config.blink_interval_ms
        if elapsed >= self._config.blink_total_ms:
            self._blink_cells = frozenset()
            self._blink_on = False
            self._show_overlay()
            return
        self._blink_on = not self._blink_on
        self._schedule(interval, lambda: self._blink_step(elapsed + interval))
        self._notify()

    def _show_overlay(self) -> None:
        n = self._level.level
        self._overlay_lines = (self._headline, f"Level {n} Passed!", f"Prepare for Level {n + 1}!")
        self._overlay_visible = True
        self._state = GameState.LEVEL_TRANSITION_OVERLAY
        self._schedule(self._config.overlay_ms, self._advance_level)
        self._notify()

    def _advance_level(self) -> None:
        self._supersede()
        self._level.advance()
        self._start_level()
        self._timer.start(self._config.level_seconds)
        self._notify()

    def _start_level(self) -> None:
        cfg = self._config
        self._cols = cols_for_level(self._level.level, cfg.base_cols, cfg.levels_per_column)
        self._path = self._paths.generate(self._cols)
        self._visited.clear()
        self._row = cfg.rows - 1
        self._col = 0
        self._wrong_cell = None
        self._blink_cells = frozenset()
        self._blink_on = False
        self._overlay_visible = False
        self._overlay_lines = ()
        self._cleared_flawless = False
        self._headline = ""
        self._status = ""
        self._state = GameState.PLAYING
        logger.info("Level %d started (%dx%d grid)", self._level.level, cfg.rows, self._cols)

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def _schedule(self, delay_ms: int, callback: Callable[[], None]) -> None:
        generation = self._generation

        def _fire() -> None:
            if generation != self._generation:
                logger.debug("Dropping stale callback from generation %d", generation)
                return
            callback()

        self._pending = [h for h in self._pending if h.active]
        self._pending.append(self._scheduler.call_later(delay_ms, _fire))

    def _supersede(self) -> None:
        self._generation += 1
        for handle in self._pending:
            handle.cancel()
        self._pending = []

    def _emit(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    def _notify(self) -> None:
        self._emit(GameEvent.STATE_CHANGED)
