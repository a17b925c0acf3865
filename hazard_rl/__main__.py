"""Headless entry point: train the agent, then watch one evaluation run."""

import argparse
import logging
import signal
import sys
from PySide6.QtCore import QCoreApplication

from .domain.types import TrainingParameters, EvaluationSettings


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Q-learning on a grid with lasers and patrols")
    parser.add_argument("--episodes", type=int, default=8000, help="Training episode budget")
    parser.add_argument("--batch-size", type=int, default=300, help="Episodes per scheduling quantum")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--raw", action="store_true", help="Evaluate with random actions instead of the policy")
    parser.add_argument("--skip-eval", action="store_true", help="Stop after training")
    parser.add_argument("--interval-ms", type=int, default=150, help="Delay between evaluation steps")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point for the headless demo."""
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    try:
        params = TrainingParameters(max_episodes=args.episodes, batch_size=args.batch_size)
        settings = EvaluationSettings(step_interval_ms=args.interval_ms)
    except ValueError as e:
        print(f"❌ Invalid configuration: {e}")
        return 2

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    app.setApplicationName("Hazard Grid Q-Learning")

    # Import after the application exists
    from .app.controller import SimulationController
    from .app.fsm import SimulationState

    controller = SimulationController(params=params, settings=settings, seed=args.seed)
    world = controller.world

    print("🧠 Hazard Grid Q-Learning")
    print("=" * 50)
    print(f"📐 Grid: {world.size}x{world.size}, walls: {len(world.walls)}, lasers: {len(world.hazards)}")
    print(f"🎯 Start: {world.agent_start} → Goal: {world.goal}")
    print(f"👮 Patrols: {', '.join(str(p) for p in world.adversary_starts)}")

    def on_batch(batch):
        print(f"Episode {batch.episodes_completed}: batch success {batch.success_rate:.1%}, "
              f"epsilon {batch.epsilon:.3f}")

    def on_trained(episodes, successes):
        snap = controller.snapshot()
        print(f"\n🎉 Training completed!")
        print(f"   Episodes: {episodes}")
        print(f"   Successful episodes: {successes}")
        print(f"   Q-table size: {snap.q_table_size}")
        print(f"   Final epsilon: {snap.epsilon:.3f}")
        if args.skip_eval:
            app.quit()
            return
        print(f"\n🧪 Testing {'random actions' if args.raw else 'learned policy'}...")
        if not controller.start_evaluation(raw=args.raw):
            app.exit(1)

    def on_step(snap):
        conf = "n/a" if snap.confidence is None else f"{snap.confidence:.1f}"
        print(f"   tick {snap.tick:3d}: agent {snap.agent_position} "
              f"patrols {list(snap.adversary_positions)} Q {conf}")

    def on_finished(result):
        mark = "✅" if result.success else "❌"
        print(f"\n{mark} {result.outcome} after {result.steps} steps "
              f"(total reward {result.total_reward:.1f})")
        app.exit(0 if result.success or result.raw else 1)

    def on_rejected(reason):
        print(f"❌ {reason}")
        app.exit(1)

    controller.batch_completed.connect(on_batch)
    controller.training_completed.connect(on_trained)
    controller.evaluation_stepped.connect(on_step)
    controller.evaluation_finished.connect(on_finished)
    controller.command_rejected.connect(on_rejected)

    def signal_handler(sig, frame):
        print(f"\n⏹️  Received signal {sig}, shutting down...")
        controller.cleanup()
        app.exit(130)

    signal.signal(signal.SIGINT, signal_handler)

    if args.raw and args.skip_eval:
        print("Nothing to do: --raw with --skip-eval")
        return 0

    if args.raw:
        # Raw runs need no training
        started = controller.start_evaluation(raw=True)
    else:
        print(f"\n🚀 Training for {params.max_episodes} episodes...")
        started = controller.start_training()
    if not started:
        return 1

    try:
        return app.exec()
    finally:
        controller.cleanup()
        if controller.current_state == SimulationState.TRAINING:
            print("Training interrupted")


if __name__ == "__main__":
    sys.exit(main())
