from .normalization_metrics import observe_event, observe_replay_duration, observe_replay_event

__all__ = ["observe_event", "observe_replay_duration", "observe_replay_event"]
