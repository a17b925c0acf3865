"""Fixed-budget batched training loop."""

import logging
from typing import Optional
from .types import EpisodeRecord, BatchResult, TrainingParameters
from .environment import Environment
from .qlearning import QLearner

logger = logging.getLogger(__name__)


class TrainingLoop:
    """
    Drives repeated episodes through an environment with a Q-learner.

    Work is split into batches of ``params.batch_size`` episodes so that a
    host scheduler can regain control between batches. Episode N's final
    table and epsilon are the exact input to episode N+1.
    """

    def __init__(self, env: Environment, learner: QLearner, params: TrainingParameters):
        self.env = env
        self.learner = learner
        self.params = params
        self.episodes_completed = 0
        self.successes = 0
        self.last_episode: Optional[EpisodeRecord] = None

    def reset(self):
        """Forget progress counters; the learner is reset separately."""
        self.episodes_completed = 0
        self.successes = 0
        self.last_episode = None

    @property
    def is_complete(self) -> bool:
        """Whether the episode budget is spent."""
        return self.episodes_completed >= self.params.max_episodes

    @property
    def remaining_episodes(self) -> int:
        return max(0, self.params.max_episodes - self.episodes_completed)

    def run_episode(self) -> EpisodeRecord:
        """Train for one episode and decay exploration once."""
        state = self.env.reset()
        epsilon_used = self.learner.epsilon
        total_reward = 0.0
        steps = 0
        reward = 0.0
        cause = None
        done = False

        while not done and steps < self.params.max_steps_per_episode:
            key = self.env.state_key(state)
            action = self.learner.select_action(key, explore=True)

            result = self.env.step(action)
            next_key = self.env.state_key(result.state)
            self.learner.update(key, action, result.reward, next_key)

            state = result.state
            reward = result.reward
            cause = result.cause
            done = result.done
            total_reward += reward
            steps += 1

        reached_goal = done and reward > self.params.success_reward_threshold
        if reached_goal:
            self.successes += 1

        episode = EpisodeRecord(
            number=self.episodes_completed,
            steps=steps,
            total_reward=total_reward,
            reached_goal=reached_goal,
            outcome=cause if done else "timeout",
            epsilon_used=epsilon_used,
        )

        self.episodes_completed += 1
        self.last_episode = episode
        self.learner.decay_exploration()
        return episode

    def run_batch(self) -> BatchResult:
        """Run up to one batch of episodes without exceeding the budget."""
        count = min(self.params.batch_size, self.remaining_episodes)
        batch = BatchResult()

        for _ in range(count):
            episode = self.run_episode()
            batch.episodes.append(episode)
            if episode.reached_goal:
                batch.successes += 1

        batch.episodes_completed = self.episodes_completed
        batch.epsilon = self.learner.epsilon

        logger.info(
            "Episode %d/%d: batch success %d/%d, epsilon %.3f, table size %d",
            self.episodes_completed, self.params.max_episodes,
            batch.successes, len(batch.episodes), self.learner.epsilon, len(self.learner.table),
        )
        return batch
