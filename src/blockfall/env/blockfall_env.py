from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from blockfall.game import Game, GameConfig, GameEvent, ScoringRules, kinds


# Action index -> event; 0 is a no-op
ACTIONS: Tuple[Optional[GameEvent], ...] = (
    None,
    GameEvent.MOVE_LEFT,
    GameEvent.MOVE_RIGHT,
    GameEvent.MOVE_DOWN,
    GameEvent.ROTATE_CW,
    GameEvent.ROTATE_CCW,
    GameEvent.ROTATE_180,
    GameEvent.QUICK_DROP,
)

_PALETTE = np.array(
    [
        (20, 20, 26),     # empty
        (240, 240, 0),    # yellow
        (240, 0, 0),      # red
        (0, 240, 0),      # green
        (160, 0, 240),    # magenta
        (230, 230, 230),  # white
        (0, 0, 240),      # blue
        (0, 240, 240),    # cyan
    ],
    dtype=np.uint8,
)


class BlockfallEnv(gym.Env):
    """Step a Game one player action at a time.

    Gravity is simulated by applying MOVE_DOWN after every ``gravity_every``
    actions. Reward is the score gained during the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 rules: Optional[ScoringRules] = None,
                 gravity_every: int = 1,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.rules = rules
        self.render_mode = render_mode
        self.gravity_every = max(1, int(gravity_every))
        self.max_episode_steps = int(max_episode_steps)
        self._kind_index = {kind.name: i for i, kind in enumerate(kinds())}

        h, w = self.config.height, self.config.width
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=len(_PALETTE) - 1, shape=(h, w), dtype=np.int8),
                "next": spaces.Discrete(len(self._kind_index)),
            }
        )
        self.action_space = spaces.Discrete(len(ACTIONS))

        self.game = Game(self.config, self.rules)
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        snapshot = self.game.snapshot()
        return {
            "grid": np.array(snapshot.cells, dtype=np.int8),
            "next": self._kind_index[snapshot.next_kind],
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "steps": self._steps,
            "gravity_interval_ms": self.game.gravity_interval_ms,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        game_seed = int(self.np_random.integers(0, 2**31 - 1))
        config = GameConfig(width=self.config.width, height=self.config.height, random_seed=game_seed)
        self.game = Game(config, self.rules)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        event = ACTIONS[int(action)]
        score_before = self.game.score
        if event is not None:
            self.game.handle(event)
        self._steps += 1
        if not self.game.over and self._steps % self.gravity_every == 0:
            self.game.handle(GameEvent.MOVE_DOWN)

        reward = float(self.game.score - score_before)
        terminated = bool(self.game.over)
        truncated = self._steps >= self.max_episode_steps
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        cell = 12
        grid = self.game.snapshot().cells
        img = _PALETTE[grid.astype(np.intp)]
        return np.repeat(np.repeat(img, cell, axis=0), cell, axis=1)

    def close(self) -> None:
        pass
