"""Headless autopilot — plays full sessions and collects statistics.

The autopilot steers the paddle through the same InputSource a human
would use, aiming slightly off-centre so the ball leaves the paddle at an
angle instead of bouncing straight up forever.
"""

import random
from dataclasses import dataclass, field

from breaker.controls import InputSource
from breaker.session import Session
from breaker.types import BottomEdge, Command, GameConfig, GameState, HitEvent

FRAME_DT = 1.0 / 60.0


@dataclass
class RunResult:
    """Outcome of one autopilot session."""
    seed: int
    final_state: GameState
    score: int
    frames: int
    sim_time: float
    bricks_destroyed: int
    bricks_total: int
    paddle_bounces: int
    hits: list = field(default_factory=list)  # list[HitEvent]

    @property
    def cleared(self) -> bool:
        return self.final_state is GameState.CLEAR


class Autopilot:
    """Tracks the ball with a fixed aim offset, re-rolled each paddle bounce."""

    def __init__(self, source: InputSource, skill: float = 0.9, rng=None):
        self.source = source
        self.skill = skill
        self.rng = rng or random.Random()
        self._offset = 0.0

    def reaim(self, paddle_w: float) -> None:
        # Lower skill = wilder aim, occasionally off the paddle entirely
        spread = (1.0 - self.skill) * paddle_w + paddle_w * 0.35
        self._offset = self.rng.uniform(-spread, spread)

    def steer(self, session: Session) -> None:
        ball = session.ball
        if ball is None:
            return
        self.source.publish_local_x(ball.x + self._offset)


def run_session(
    seed: int = 0,
    config: GameConfig = None,
    skill: float = 0.9,
    max_time: float = 300.0,
    dt: float = FRAME_DT,
) -> RunResult:
    """Play one session until CLEAR, GAME_OVER or max_time seconds of play."""
    base = config or GameConfig()
    cfg = base.with_overrides(seed=seed)
    rng = random.Random(seed)

    session = Session(cfg)
    source = InputSource(cfg.width)
    session.init()
    session.attach_input(source)

    hits: list[HitEvent] = []
    session.add_hit_listener(hits.append)

    pilot = Autopilot(source, skill=skill, rng=rng)
    pilot.reaim(session.paddle.w)
    source.request(Command.LAUNCH_RANDOM)

    bounces_seen = 0
    steps = int(max_time / dt)
    for _ in range(steps):
        if session.state in (GameState.CLEAR, GameState.GAME_OVER):
            break
        pilot.steer(session)
        session.step(dt)
        if session.paddle_bounces != bounces_seen:
            bounces_seen = session.paddle_bounces
            pilot.reaim(session.paddle.w)

    result = RunResult(
        seed=seed,
        final_state=session.state,
        score=session.score,
        frames=session.frame_count,
        sim_time=session.sim_time,
        bricks_destroyed=session.hits,
        bricks_total=session.bricks.total,
        paddle_bounces=session.paddle_bounces,
        hits=hits,
    )
    session.dispose()
    return result


def run_batch(seeds, config: GameConfig = None, skill: float = 0.9,
              max_time: float = 300.0) -> list[RunResult]:
    return [run_session(seed, config, skill, max_time) for seed in seeds]


def compute_stats(results: list[RunResult]) -> dict:
    """Summary statistics over a batch of runs."""
    n = max(len(results), 1)
    cleared = [r for r in results if r.cleared]
    times = [r.sim_time for r in cleared]

    edges = {}
    for r in results:
        for h in r.hits:
            edges[h.edge] = edges.get(h.edge, 0) + 1

    return {
        "runs": len(results),
        "cleared": len(cleared),
        "clear_rate": round(100.0 * len(cleared) / n, 1),
        "game_overs": sum(1 for r in results if r.final_state is GameState.GAME_OVER),
        "avg_score": round(sum(r.score for r in results) / n, 1),
        "max_score": max((r.score for r in results), default=0),
        "avg_clear_time": round(sum(times) / len(times), 2) if times else None,
        "avg_paddle_bounces": round(sum(r.paddle_bounces for r in results) / n, 1),
        "hit_edges": edges,
    }


def single_life_config(**overrides) -> GameConfig:
    """Config where reaching the floor ends the session."""
    return GameConfig(bottom_edge=BottomEdge.GAME_OVER, **overrides)
