"""Tests for hazard_rl.app.fsm."""

from hazard_rl.app.fsm import SimulationStateMachine, SimulationState


class TestTransitions:
    def test_training_path(self):
        fsm = SimulationStateMachine()
        assert fsm.is_idle()
        assert fsm.start_training()
        assert fsm.is_training()
        assert fsm.is_active()
        assert fsm.finish_training()
        assert fsm.current_state == SimulationState.READY
        assert not fsm.is_active()

    def test_evaluation_path(self):
        fsm = SimulationStateMachine()
        fsm.start_training()
        fsm.finish_training()
        assert fsm.start_running()
        assert fsm.is_running()
        assert fsm.succeed()
        assert fsm.start_running()
        assert fsm.fail()
        assert fsm.current_state == SimulationState.FAILED

    def test_no_second_task_while_active(self):
        fsm = SimulationStateMachine()
        fsm.start_training()
        assert not fsm.start_running()
        assert fsm.is_training()

        fsm = SimulationStateMachine()
        fsm.start_running()
        assert not fsm.start_training()
        assert fsm.is_running()

    def test_ready_cannot_retrain(self):
        fsm = SimulationStateMachine()
        fsm.start_training()
        fsm.finish_training()
        assert not fsm.start_training()

    def test_reset_from_anywhere(self):
        for path in ([], ["start_training"], ["start_running"], ["start_running", "fail"]):
            fsm = SimulationStateMachine()
            for step in path:
                getattr(fsm, step)()
            assert fsm.reset_to_idle()
            assert fsm.is_idle()

    def test_callbacks(self):
        fsm = SimulationStateMachine()
        events = []
        fsm.on_state_exit(SimulationState.IDLE, lambda ctx: events.append(("exit", ctx)))
        fsm.on_state_enter(SimulationState.TRAINING, lambda ctx: events.append(("enter", ctx)))
        fsm.start_training({"why": "test"})
        assert events == [("exit", {"why": "test"}), ("enter", {"why": "test"})]

    def test_descriptions(self):
        fsm = SimulationStateMachine()
        assert "start training" in fsm.get_state_description()
