"""Episode environment: transition function and reward model."""

import logging
from typing import Optional, Sequence
from .types import (
    Position, ActionInt, EpisodeState, StepResult, StateKey, ACTION_DELTAS,
    HAZARD_CYCLE, PROGRESS_REWARD_SCALE, HAZARD_REWARD, ADVERSARY_REWARD, GOAL_REWARD
)
from .world import GridWorld, manhattan_distance
from .adversary import AdversaryPolicy

logger = logging.getLogger(__name__)


def nearest_adversary(agent: Position, adversaries: Sequence[Position]) -> Optional[Position]:
    """Nearest adversary by Manhattan distance; the earliest one wins ties."""
    nearest = None
    best = None
    for pos in adversaries:
        dist = manhattan_distance(agent, pos)
        if best is None or dist < best:
            nearest, best = pos, dist
    return nearest


def state_key(state: EpisodeState) -> StateKey:
    """Reduced state used to index the value table."""
    return (
        state.agent_position,
        nearest_adversary(state.agent_position, state.adversary_positions),
        state.tick % HAZARD_CYCLE,
    )


class Environment:
    """Environment for one agent moving among walls, hazards and patrols."""

    def __init__(self, world: GridWorld, adversary_policy: AdversaryPolicy):
        self.world = world
        self.adversary_policy = adversary_policy
        self.state = self.initial_state()

    def initial_state(self) -> EpisodeState:
        """Episode layout at tick 0."""
        return EpisodeState(
            agent_position=self.world.agent_start,
            adversary_positions=self.world.adversary_starts,
            tick=0,
            terminated=False,
        )

    def reset(self) -> EpisodeState:
        """Reset environment to initial state."""
        self.state = self.initial_state()
        return self.state

    def step(self, action: ActionInt) -> StepResult:
        """Transition the current state and keep the result."""
        result = self.transition(self.state, action)
        self.state = result.state
        return result

    def state_key(self, state: Optional[EpisodeState] = None) -> StateKey:
        return state_key(self.state if state is None else state)

    def move_agent(self, position: Position, action: ActionInt) -> Position:
        """Apply an action; edges clamp and blocked cells leave the agent in place."""
        if action not in ACTION_DELTAS:
            raise ValueError(f"Invalid action {action!r}, expected 0-3")
        dr, dc = ACTION_DELTAS[action]
        size = self.world.size
        candidate = (
            min(max(position[0] + dr, 0), size - 1),
            min(max(position[1] + dc, 0), size - 1),
        )
        if self.world.is_blocked(candidate):
            return position
        return candidate

    def transition(self, state: EpisodeState, action: ActionInt) -> StepResult:
        """
        Execute action from ``state`` and return (next_state, reward, done).

        Args:
            state: State to transition from
            action: Action to take (0=up, 1=down, 2=left, 3=right)

        Returns:
            StepResult with the next state, the reward, the terminal flag and
            the terminal cause (None when the episode continues)
        """
        old_pos = state.agent_position
        new_pos = self.move_agent(old_pos, action)

        # Patrols move independently of the agent
        adversaries = self.adversary_policy.step_all(state.adversary_positions)
        tick = state.tick + 1

        old_dist = self.world.distance_to_goal(old_pos)
        new_dist = self.world.distance_to_goal(new_pos)
        reward = PROGRESS_REWARD_SCALE * (old_dist - new_dist)
        done = False
        cause = None

        # Later checks override earlier ones
        if self.world.is_hazard_active_at(new_pos, tick):
            reward, done, cause = HAZARD_REWARD, True, "hazard"

        if new_pos in adversaries:
            reward, done, cause = ADVERSARY_REWARD, True, "adversary"

        if new_pos == self.world.goal:
            reward, done, cause = GOAL_REWARD, True, "goal"

        if done:
            logger.debug("Terminal transition at tick %d: %s at %s", tick, cause, new_pos)

        next_state = EpisodeState(
            agent_position=new_pos,
            adversary_positions=adversaries,
            tick=tick,
            terminated=done,
        )
        return StepResult(state=next_state, reward=reward, done=done, cause=cause)
