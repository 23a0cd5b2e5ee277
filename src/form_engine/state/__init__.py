"""
Runtime state for form-engine: the store, its channels and the debounce scheduler.
"""

from form_engine.state.events import Channel, Subscription
from form_engine.state.scheduler import ValidationScheduler
from form_engine.state.store import FormStateStore

__all__ = [
    "Channel",
    "Subscription",
    "FormStateStore",
    "ValidationScheduler",
]
